"""Outbound email adapters."""

from src.infrastructure.adapters.mail.smtp_email_sender import SmtpEmailSender

__all__ = ["SmtpEmailSender"]
