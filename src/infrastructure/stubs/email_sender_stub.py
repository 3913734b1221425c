"""Email sender stub implementation."""

from __future__ import annotations

from dataclasses import dataclass

from src.application.ports.email_sender import EmailSenderProtocol


@dataclass(frozen=True)
class SentEmail:
    """An email captured by the stub."""

    to_address: str
    subject: str
    body: str


class EmailSenderStub(EmailSenderProtocol):
    """Captures outbound email instead of sending it.

    Set ``should_fail`` to make every send report failure, or
    ``raise_error`` to make it raise.
    """

    def __init__(self, should_fail: bool = False, raise_error: bool = False) -> None:
        self.sent: list[SentEmail] = []
        self.should_fail = should_fail
        self.raise_error = raise_error

    async def send_email(self, to_address: str, subject: str, body: str) -> bool:
        if self.raise_error:
            raise ConnectionError("SMTP server unreachable")
        if self.should_fail:
            return False
        self.sent.append(SentEmail(to_address=to_address, subject=subject, body=body))
        return True

    def clear(self) -> None:
        self.sent.clear()
