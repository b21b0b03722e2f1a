"""Exception hierarchy for mailer46.

Three disjoint families derive from :class:`Mailer46Error`:

* :class:`BuildError` – composing an email locally failed.
* :class:`SetupError` – a :class:`~mailer46.mailer.mailgun_sender.Mailer`
  could not be constructed from the given configuration.
* :class:`SendError` – the exchange with Mailgun did not yield a message id.

None of these are retried by the library.
"""

from __future__ import annotations


class Mailer46Error(Exception):
    """Base class for every error raised by mailer46."""


class BuildError(Mailer46Error):
    """Raised when an :class:`~mailer46.message.EmailBuilder` cannot build."""


class MissingRecipient(BuildError):
    """Raised by ``build`` when no recipient was ever added."""

    def __init__(self, field: str = "to") -> None:
        super().__init__(f"Missing field `{field}`")
        self.field = field


class SetupError(Mailer46Error):
    """Raised when a mailer cannot be constructed."""


class ConfigMissing(SetupError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing env variable `{name}`")
        self.name = name


class ConfigInvalid(SetupError):
    """Raised when a configuration value yields an invalid endpoint URL."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid value for `{name}`: {reason}")
        self.name = name
        self.reason = reason


class ClientBuildFailed(SetupError):
    """Raised when the HTTP session or its headers cannot be prepared."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Creating HTTP client: {reason}")
        self.reason = reason


class SendError(Mailer46Error):
    """Raised when sending an email does not produce a message id."""


class TransportError(SendError):
    """Raised on DNS, connection, TLS or timeout failures."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Sending failed at the HTTP layer: {reason}")
        self.reason = reason


class UnexpectedStatus(SendError):
    """Raised when Mailgun replies with anything but ``200 OK``.

    The full response body is kept in :attr:`body` so callers can inspect
    the provider's explanation.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Got non 200 reply from mailgun: `{status_code}`: {body}")
        self.status_code = status_code
        self.body = body


class ResponseParseError(SendError):
    """Raised when a ``200 OK`` body does not contain a message id."""

    def __init__(self, reason: str, body: str) -> None:
        super().__init__(f"Could not parse mailgun reply: {reason}")
        self.reason = reason
        self.body = body


__all__ = [
    "Mailer46Error",
    "BuildError",
    "MissingRecipient",
    "SetupError",
    "ConfigMissing",
    "ConfigInvalid",
    "ClientBuildFailed",
    "SendError",
    "TransportError",
    "UnexpectedStatus",
    "ResponseParseError",
]
