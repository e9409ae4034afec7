"""Notification dispatching helpers."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Iterable

from fittrack.config import Settings, get_settings


logger = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """Raised when an email could not be handed to the SMTP server."""


class NotificationService:
    """Send HTML emails through the configured SMTP server."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def send_email(self, subject: str, body: str, recipients: Iterable[str]) -> None:
        """Send an HTML email to ``recipients``."""

        recipients = [r for r in recipients if r]
        if not recipients:
            raise NotificationError("No recipients given")
        if not self.settings.smtp_host:
            raise NotificationError("SMTP_HOST is not configured")

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.settings.reminder_sender
        message["To"] = ", ".join(recipients)
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(body, subtype="html")

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as smtp:
                smtp.starttls()
                if self.settings.smtp_username:
                    smtp.login(self.settings.smtp_username, self.settings.smtp_password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"Failed to send email to {recipients}: {exc}") from exc

        logger.info("Email sent | subject=%r recipients=%d", subject, len(recipients))
