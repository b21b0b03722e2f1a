"""Abstract interface and the Mailgun implementation for sending emails.

This subpackage defines a common ``send`` interface for finalized
:class:`~mailer46.message.Email` values.  The concrete implementation in
:mod:`mailer46.mailer.mailgun_sender` targets the Mailgun HTTP API; client
code only depends on :class:`EmailSender` and does not change when another
provider is plugged in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mailer46.mailer.mailgun_sender import MessageId
    from mailer46.message import Email


class EmailSender(ABC):
    """Abstract base class for email senders.

    Implementations must provide an asynchronous ``send`` method that takes
    a finalized email and returns the provider assigned identifier.
    """

    @abstractmethod
    async def send(self, email: Email) -> MessageId:
        """Send a single email message.

        Args:
            email: The finalized email.  A missing sender is filled in by
                the implementation.

        Returns:
            The identifier the provider assigned to the message.

        Raises:
            mailer46.errors.SendError: On any failure to deliver the message
                to the provider.
        """
        raise NotImplementedError


__all__ = ["EmailSender"]
