"""SMTP email sender.

Implements EmailSenderProtocol with smtplib. The blocking SMTP session
runs in a worker thread via asyncio.to_thread so the event loop is never
blocked.

When no SMTP host is configured the message is logged instead of sent
and the call reports success, so development environments work without
a mail server.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from structlog import get_logger

from src.application.ports.email_sender import EmailSenderProtocol
from src.config.review_config import EmailConfig

logger = get_logger()


class SmtpEmailSender(EmailSenderProtocol):
    """Sends HTML email through an SMTP relay.

    Example:
        >>> sender = SmtpEmailSender(EmailConfig.from_environment())
        >>> await sender.send_email("applicant@example.org", "Hello", "<p>Hi</p>")
        True
    """

    def __init__(self, config: EmailConfig) -> None:
        self._config = config
        self._log = logger.bind(component="email", adapter="smtp")

    async def send_email(self, to_address: str, subject: str, body: str) -> bool:
        """Send one HTML email.

        Returns:
            True if the relay accepted the message (or it was logged
            because SMTP is not configured), False on any delivery error.
        """
        log = self._log.bind(to_address=to_address, subject=subject)

        host = self._config.smtp_host
        if not host:
            log.info(
                "email_not_sent_smtp_unconfigured",
                body_length=len(body),
            )
            return True

        message = self._build_message(to_address, subject, body)
        try:
            await asyncio.to_thread(self._deliver, host, to_address, message)
        except (smtplib.SMTPException, OSError) as exc:
            log.error("email_send_failed", error=str(exc), exc_info=exc)
            return False

        log.info("email_sent")
        return True

    def _build_message(self, to_address: str, subject: str, body: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self._config.from_name, self._config.from_address))
        message["To"] = to_address
        message.attach(MIMEText(body, "html"))
        return message

    def _deliver(self, host: str, to_address: str, message: MIMEMultipart) -> None:
        with smtplib.SMTP(
            host,
            self._config.smtp_port,
            timeout=self._config.timeout_seconds,
        ) as server:
            if self._config.use_tls:
                server.starttls()
            if self._config.smtp_user and self._config.smtp_password:
                server.login(self._config.smtp_user, self._config.smtp_password)
            server.sendmail(self._config.from_address, [to_address], message.as_string())
