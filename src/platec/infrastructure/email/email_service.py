import asyncio
import html
import logging
import re
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from platec.application.exceptions import NotificationError
from platec.application.ports import NotificationSender
from platec_config.settings import Settings

logger = logging.getLogger(__name__)

_BLOCK_TAGS = re.compile(r"<\s*(br|/p|/h\d|/li|/ul)\s*/?>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_BLANK_LINES = re.compile(r"\n\s*\n+")


def html_to_text(html_body: str) -> str:
    """Rough plain-text rendition of a simple HTML email body."""
    text = _BLOCK_TAGS.sub("\n", html_body)
    text = _ANY_TAG.sub("", text)
    lines = [line.strip() for line in html.unescape(text).splitlines()]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip() + "\n"


class EmailService(NotificationSender):
    """SMTP notification sender.

    ``send_email`` raises NotificationError when SMTP is disabled, not
    configured, or the transport fails.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        html_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(html_to_text(html_body), "plain"))
        msg.attach(MIMEText(html_body, "html"))

        return msg

    def _deliver(self, message: MIMEMultipart) -> None:
        settings = self._settings
        smtp_password = (
            settings.smtp_password.get_secret_value() if settings.smtp_password else ""
        )

        if settings.smtp_use_tls and not settings.smtp_starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                settings.smtp_host,
                settings.smtp_port,
                context=context,
            ) as server:
                if settings.smtp_user:
                    server.login(settings.smtp_user, smtp_password)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
                if settings.smtp_starttls:
                    server.starttls(context=ssl.create_default_context())
                if settings.smtp_user:
                    server.login(settings.smtp_user, smtp_password)
                server.send_message(message)

    async def send_email(self, to_address: str, subject: str, html_body: str) -> None:
        if not self._settings.smtp_enabled:
            msg = "SMTP is disabled"
            raise NotificationError(msg)

        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise NotificationError(msg)

        message = self._create_message(to_address, subject, html_body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_address, e)
            msg = f"Could not send email to {to_address}"
            raise NotificationError(msg) from e

        logger.info("Email sent to %s", to_address)
