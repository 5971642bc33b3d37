"""Unit tests for the SMTP EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from platec.application.exceptions import NotificationError
from platec.infrastructure.email import EmailService
from platec.infrastructure.email.email_service import html_to_text
from tests.shared.fixtures.database import make_test_settings

HTML_BODY = "<h2>Welcome</h2><p>Hello<br>there</p><ul><li>Email: a@x.com</li></ul>"


def _settings(**overrides):
    values = {
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": "secret",
        "smtp_from_email": "noreply@example.com",
        "smtp_from_name": "ProjectPlatec",
    }
    values.update(overrides)
    return make_test_settings(**values)


class TestEmailService:
    async def test_sends_multipart_message_with_starttls(self):
        service = EmailService(_settings())

        with patch("platec.infrastructure.email.email_service.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            await service.send_email("t1@x.com", "Subject", HTML_BODY)

        smtp_cls.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        message = server.send_message.call_args.args[0]
        assert message["To"] == "t1@x.com"
        assert message["Subject"] == "Subject"
        assert message["From"] == "ProjectPlatec <noreply@example.com>"
        content_types = [part.get_content_type() for part in message.get_payload()]
        assert content_types == ["text/plain", "text/html"]

    async def test_implicit_tls(self):
        service = EmailService(_settings(smtp_port=465, smtp_starttls=False))

        with patch(
            "platec.infrastructure.email.email_service.smtplib.SMTP_SSL",
        ) as smtp_ssl_cls:
            await service.send_email("t1@x.com", "Subject", HTML_BODY)

        assert smtp_ssl_cls.call_args.args == ("smtp.example.com", 465)
        smtp_ssl_cls.return_value.__enter__.return_value.send_message.assert_called_once()

    async def test_disabled_smtp_raises(self):
        service = EmailService(_settings(smtp_enabled=False))

        with pytest.raises(NotificationError, match="disabled"):
            await service.send_email("t1@x.com", "Subject", HTML_BODY)

    async def test_missing_host_raises(self):
        service = EmailService(_settings(smtp_host=""))

        with pytest.raises(NotificationError, match="not configured"):
            await service.send_email("t1@x.com", "Subject", HTML_BODY)

    async def test_transport_failure_raises_notification_error(self):
        service = EmailService(_settings())
        server = MagicMock()
        server.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

        with patch("platec.infrastructure.email.email_service.smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = server
            with pytest.raises(NotificationError) as exc_info:
                await service.send_email("t1@x.com", "Subject", HTML_BODY)

        assert isinstance(exc_info.value.__cause__, smtplib.SMTPException)

    async def test_connection_refused_raises_notification_error(self):
        service = EmailService(_settings())

        with patch(
            "platec.infrastructure.email.email_service.smtplib.SMTP",
            side_effect=ConnectionRefusedError(),
        ):
            with pytest.raises(NotificationError):
                await service.send_email("t1@x.com", "Subject", HTML_BODY)


def test_html_to_text():
    assert html_to_text(HTML_BODY) == "Welcome\nHello\nthere\nEmail: a@x.com\n"
