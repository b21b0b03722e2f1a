"""Email composition: the body variants, the finalized email and its builder.

An :class:`EmailBuilder` accumulates fields through chained calls and
``build`` turns it into an immutable :class:`Email`.  The body is either an
:class:`HtmlBody` or a :class:`TextBody`, never both, matching the Mailgun
form where ``html`` and ``text`` are sent as alternatives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Dict, List, Optional, Union

from mailer46.errors import MissingRecipient

if TYPE_CHECKING:
    from mailer46.mailer import EmailSender
    from mailer46.mailer.mailgun_sender import MessageId

DEFAULT_SUBJECT = "no subject"


@dataclass(frozen=True)
class HtmlBody:
    """HTML content, sent as the ``html`` form field."""

    content: str
    form_field: ClassVar[str] = "html"


@dataclass(frozen=True)
class TextBody:
    """Plain-text content, sent as the ``text`` form field."""

    content: str
    form_field: ClassVar[str] = "text"


EmailBody = Union[HtmlBody, TextBody]


@dataclass(frozen=True)
class Email:
    """A finalized email ready to be sent.

    ``sender`` maps to the ``from`` field; when it is ``None`` the mailer's
    default sender is used at send time.  ``to`` holds every recipient
    joined by commas and is never empty.
    """

    to: str
    subject: str = DEFAULT_SUBJECT
    sender: Optional[str] = None
    body: Optional[EmailBody] = None

    def to_form(self) -> Dict[str, str]:
        """Return the ``application/x-www-form-urlencoded`` fields."""
        form: Dict[str, str] = {}
        if self.sender is not None:
            form["from"] = self.sender
        form["to"] = self.to
        form["subject"] = self.subject
        if self.body is not None:
            form[self.body.form_field] = self.body.content
        return form

    async def send(self, mailer: EmailSender) -> MessageId:
        """Send this email through ``mailer``."""
        return await mailer.send(self)


@dataclass
class EmailBuilder:
    """Fluent accumulator producing an :class:`Email`.

    Every setter returns the builder so calls can be chained.  Recipients
    are kept in the order they were added.  Setting a body always replaces
    the previous one, whichever variant it was.
    """

    _sender: Optional[str] = None
    _recipients: List[str] = field(default_factory=list)
    _subject: Optional[str] = None
    _body: Optional[EmailBody] = None

    def sender(self, address: str) -> EmailBuilder:
        self._sender = address
        return self

    def to(self, recipient: str) -> EmailBuilder:
        # Address syntax is left to Mailgun.
        self._recipients.append(recipient)
        return self

    def subject(self, subject: str) -> EmailBuilder:
        self._subject = subject
        return self

    def body(self, body: EmailBody) -> EmailBuilder:
        self._body = body
        return self

    def text_body(self, text: str) -> EmailBuilder:
        return self.body(TextBody(text))

    def html_body(self, html: str) -> EmailBuilder:
        return self.body(HtmlBody(html))

    def build(self) -> Email:
        """Validate the accumulated fields and return the finalized email.

        Raises:
            MissingRecipient: If :meth:`to` was never called.
        """
        if not self._recipients:
            raise MissingRecipient("to")

        return Email(
            to=",".join(self._recipients),
            subject=self._subject if self._subject is not None else DEFAULT_SUBJECT,
            sender=self._sender,
            body=self._body,
        )


__all__ = [
    "DEFAULT_SUBJECT",
    "Email",
    "EmailBody",
    "EmailBuilder",
    "HtmlBody",
    "TextBody",
]
