"""Email sender port.

Outbound email is an external collaborator. Implementations must not
raise for delivery problems; they report them through the return value
so a failed email never fails the workflow operation that caused it.
"""

from __future__ import annotations

from typing import Protocol


class EmailSenderProtocol(Protocol):
    """Protocol for sending a single email."""

    async def send_email(self, to_address: str, subject: str, body: str) -> bool:
        """Send an email.

        Args:
            to_address: Recipient address.
            subject: Subject line.
            body: HTML body.

        Returns:
            True if the message was handed to the transport, False otherwise.
        """
        ...
