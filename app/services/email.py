"""Outbound email: HTML template rendering and SMTP delivery (best-effort)."""

from __future__ import annotations

import html
import logging
import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import TYPE_CHECKING

import aiosmtplib

from app.core.errors import EmailDeliveryError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

NOTIFICATION_TEMPLATE = """<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #222;">
    <h2>{{heading}}</h2>
    <p>{{message}}</p>
    <p style="color: #888; font-size: 12px;">{{app_name}}</p>
  </body>
</html>
"""


def render_template(template: str, replacements: dict[str, str]) -> str:
    """
    Replace {{key}} placeholders with HTML-escaped values.
    Unknown placeholders are left blank.
    """

    def _sub(match: re.Match[str]) -> str:
        value = replacements.get(match.group(1), "")
        return html.escape(str(value))

    return PLACEHOLDER_PATTERN.sub(_sub, template)


class Mailer:
    """SMTP transport configured from settings. One connection per message."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return bool(self._settings.EMAIL_ENABLED and self._settings.SMTP_HOST)

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        """Send one HTML message. Raises EmailDeliveryError on any SMTP or network failure."""
        s = self._settings
        if not self.enabled:
            logger.info("Email disabled; not sending '%s' to %s", subject, recipient)
            return

        msg = MIMEMultipart("alternative")
        msg["From"] = s.SMTP_FROM
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html"))

        password = s.SMTP_PASSWORD.get_secret_value() if s.SMTP_PASSWORD else None
        try:
            async with aiosmtplib.SMTP(
                hostname=s.SMTP_HOST,
                port=s.SMTP_PORT,
                use_tls=s.SMTP_USE_TLS,
                timeout=s.SMTP_TIMEOUT_SEC,
            ) as smtp:
                if s.SMTP_USER and password:
                    await smtp.login(s.SMTP_USER, password)
                await smtp.send_message(msg)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(f"SMTP delivery failed: {e!s}", recipient) from e
        logger.info("Email sent: subject=%s recipient=%s", subject, recipient)


async def send_notification(
    mailer: Mailer,
    recipient: str,
    subject: str,
    heading: str,
    message: str,
    app_name: str,
) -> bool:
    """
    Render the notification template and send it.

    Delivery failures are logged and swallowed: notifications never fail the
    request that triggered them. Returns True when the message was handed off.
    """
    body = render_template(
        NOTIFICATION_TEMPLATE,
        {"heading": heading, "message": message, "app_name": app_name},
    )
    try:
        await mailer.send(recipient, subject, body)
    except EmailDeliveryError as e:
        logger.warning("Error sending email '%s' to %s: %s", subject, recipient, e.message)
        return False
    return True
