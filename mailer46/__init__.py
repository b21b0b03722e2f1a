"""Top‑level package for the mailer46 client library.

This package sends transactional email through the Mailgun HTTP API.  Emails
are composed with :class:`EmailBuilder`, finalized into an immutable
:class:`Email` and handed to a :class:`Mailer`, which posts them and returns
the provider assigned :class:`MessageId`::

    mailer = Mailer.from_env()
    email = (
        EmailBuilder()
        .to("someone@example.com")
        .subject("An email")
        .text_body("A plain, informative text body")
        .build()
    )
    message_id = await mailer.send(email)

Every error raised by the library derives from
:class:`mailer46.errors.Mailer46Error`.
"""

from __future__ import annotations

# SemVer version of the package
__version__: str = "0.1.0"

from mailer46.errors import (  # noqa: E402
    BuildError,
    ClientBuildFailed,
    ConfigInvalid,
    ConfigMissing,
    Mailer46Error,
    MissingRecipient,
    ResponseParseError,
    SendError,
    SetupError,
    TransportError,
    UnexpectedStatus,
)
from mailer46.mailer import EmailSender  # noqa: E402
from mailer46.mailer.mailgun_sender import MailReply, Mailer, MessageId  # noqa: E402
from mailer46.message import (  # noqa: E402
    Email,
    EmailBody,
    EmailBuilder,
    HtmlBody,
    TextBody,
)

__all__ = [
    "BuildError",
    "ClientBuildFailed",
    "ConfigInvalid",
    "ConfigMissing",
    "Email",
    "EmailBody",
    "EmailBuilder",
    "EmailSender",
    "HtmlBody",
    "MailReply",
    "Mailer",
    "Mailer46Error",
    "MessageId",
    "MissingRecipient",
    "ResponseParseError",
    "SendError",
    "SetupError",
    "TextBody",
    "TransportError",
    "UnexpectedStatus",
]
