"""Mailgun-based email sender implementation.

This module defines ``Mailer``, which sends email via the Mailgun HTTP API.
Each call posts one form encoded message to
``<base url>/v3/<domain>/messages`` and returns the id Mailgun assigned to
it.  See the Mailgun API documentation for details on the parameters
accepted.

Environment variables used by :meth:`Mailer.from_env`:

* ``MAILER46_DOMAIN`` – Domain configured in Mailgun
* ``MAILER46_TOKEN`` – Raw API key for Mailgun
* ``MAILER46_BASE_URL`` – Optional base URL; defaults to the EU API
"""

from __future__ import annotations

import asyncio
import base64
import logging
import os
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ConfigDict, ValidationError
from requests.exceptions import RequestException

from mailer46 import __version__
from mailer46.errors import (
    ClientBuildFailed,
    ConfigInvalid,
    ConfigMissing,
    ResponseParseError,
    TransportError,
    UnexpectedStatus,
)
from mailer46.mailer import EmailSender
from mailer46.message import Email

LOGGER = logging.getLogger(__name__)

DOMAIN_ENV = "MAILER46_DOMAIN"
TOKEN_ENV = "MAILER46_TOKEN"
BASE_URL_ENV = "MAILER46_BASE_URL"

DEFAULT_BASE_URL = "https://api.eu.mailgun.net"
MESSAGES_PATH = "/v3/{domain}/messages"
USER_AGENT = f"mailer46/{__version__}"
DEFAULT_TIMEOUT = 10.0

# Characters that would move the domain out of its path segment.
_URL_DELIMITERS = frozenset("/?#@")


class MessageId(str):
    """Opaque identifier Mailgun assigns to an accepted message."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"MessageId({str.__repr__(self)})"


class MailReply(BaseModel):
    """Body of a successful ``POST /messages`` reply."""

    model_config = ConfigDict(extra="ignore")

    id: str
    message: Optional[str] = None


def _check_base_url(base_url: str) -> None:
    try:
        parts = urlsplit(base_url)
        valid = (
            parts.scheme in ("http", "https")
            and bool(parts.hostname)
            and parts.port != 0
        )
    except ValueError as exc:
        raise ClientBuildFailed(f"malformed base url {base_url!r}: {exc}") from exc
    if not valid:
        raise ClientBuildFailed(
            f"malformed base url {base_url!r}: expected an absolute http(s) URL"
        )


def _messages_url(base_url: str, domain: str) -> str:
    if not domain or any(ch in _URL_DELIMITERS or ch.isspace() for ch in domain):
        raise ConfigInvalid("domain", f"{domain!r} cannot be used in a URL path")

    return base_url.rstrip("/") + MESSAGES_PATH.format(domain=domain)


def _build_session(token: str) -> requests.Session:
    try:
        credentials = base64.b64encode(f"api:{token}".encode("utf-8")).decode("ascii")
    except UnicodeEncodeError as exc:
        raise ClientBuildFailed(f"token cannot be encoded: {exc}") from exc

    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Basic {credentials}",
            "User-Agent": USER_AGENT,
        }
    )
    return session


def _body_text(response: requests.Response) -> str:
    # Mailgun sends UTF-8 without always declaring a charset.
    return response.content.decode("utf-8", errors="replace")


class Mailer(EmailSender):
    """Mailgun implementation of the ``EmailSender`` interface.

    A mailer is immutable once constructed and can be shared by any number
    of concurrent :meth:`send` calls.  Emails without a sender are sent
    from ``noreply@<domain>``.
    """

    def __init__(
        self,
        domain: str,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Create a mailer operating against ``domain``.

        Args:
            domain: Sending domain configured in Mailgun.
            token: Raw Mailgun API key; it is base64 encoded here.
            base_url: Optional API base URL, e.g. ``https://api.mailgun.net``
                for the US region.  Defaults to the EU endpoint.
            timeout: Seconds ``requests`` waits for the server.

        Raises:
            ConfigInvalid: If ``domain`` does not produce a valid URL.
            ClientBuildFailed: If ``base_url`` is malformed or the
                authorization header cannot be built.
        """
        if base_url is None:
            base_url = DEFAULT_BASE_URL
        else:
            _check_base_url(base_url)

        self._sender = f"noreply@{domain}"
        self._messages_url = _messages_url(base_url, domain)
        self._timeout = timeout
        self._session = _build_session(token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Mailer:
        """Create a mailer from ``MAILER46_*`` environment variables.

        Raises:
            ConfigMissing: If the domain or the token is unset or empty.
        """
        env = os.environ if environ is None else environ
        domain = env.get(DOMAIN_ENV)
        if not domain:
            raise ConfigMissing(DOMAIN_ENV)
        token = env.get(TOKEN_ENV)
        if not token:
            raise ConfigMissing(TOKEN_ENV)

        return cls(domain, token, base_url=env.get(BASE_URL_ENV) or None)

    @property
    def sender(self) -> str:
        """Default ``from`` address."""
        return self._sender

    @property
    def messages_url(self) -> str:
        return self._messages_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def _post(self, form: Dict[str, str]) -> requests.Response:
        return self._session.post(self._messages_url, data=form, timeout=self._timeout)

    async def send(self, email: Email) -> MessageId:
        """Send an email via the Mailgun API.

        Args:
            email: The finalized email.  If it has no sender, the mailer's
                default sender is used.

        Returns:
            The id Mailgun assigned to the queued message.

        Raises:
            TransportError: If the request could not be completed.
            UnexpectedStatus: If Mailgun replied with a status other than 200.
            ResponseParseError: If the 200 reply carries no message id.
        """
        if email.sender is None:
            email = replace(email, sender=self._sender)

        LOGGER.debug("POST %s", self._messages_url)
        try:
            response = await asyncio.to_thread(self._post, email.to_form())
        except RequestException as exc:
            raise TransportError(str(exc)) from exc

        if response.status_code != 200:
            LOGGER.debug("Mailgun replied %s", response.status_code)
            raise UnexpectedStatus(response.status_code, _body_text(response))

        try:
            reply = MailReply.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseParseError(str(exc), _body_text(response)) from exc

        LOGGER.debug("Mailgun queued message %s", reply.id)
        return MessageId(reply.id)

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> Mailer:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Mailer(sender={self._sender!r}, messages_url={self._messages_url!r})"


__all__ = ["Mailer", "MailReply", "MessageId"]
