"""
Unit tests for the email sender adapters.

Tests verify both senders implement the EmailSender protocol, the console
sender logs the message, and the SMTP sender builds, authenticates and
reports transport failures as NotificationFailed.
"""

import logging
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.domain.exceptions import NotificationFailed, UpstreamError
from src.domain.ports import EmailSender


def accepts_email_sender(sender: EmailSender) -> EmailSender:
    return sender


class TestProtocolCompliance:
    """Structural subtyping checks."""

    @pytest.mark.parametrize("sender_cls", [ConsoleEmailSender, SmtpEmailSender])
    def test_no_explicit_inheritance(self, sender_cls) -> None:
        assert sender_cls.__bases__ == (object,)

    def test_both_have_send(self) -> None:
        senders = [ConsoleEmailSender(), SmtpEmailSender("localhost", 465, "u", "p")]
        for sender in senders:
            assert callable(accepts_email_sender(sender).send)


class TestConsoleEmailSender:
    """Tests for ConsoleEmailSender.send."""

    def test_logs_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send("ada@x.com", "Registration ACCEPTED", "Hello Ada")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO
        assert "[NOTIFICATION]" in caplog.text
        assert "To: ada@x.com" in caplog.text
        assert "Subject: Registration ACCEPTED" in caplog.text
        assert "Hello Ada" in caplog.text

    def test_returns_none(self) -> None:
        assert ConsoleEmailSender().send("a@b.c", "s", "b") is None


@pytest.fixture
def smtp_ssl():
    """Patch smtplib.SMTP_SSL and yield (class mock, server mock)."""
    with patch("src.adapters.smtp.smtp.smtplib.SMTP_SSL") as smtp_cls:
        server = MagicMock()
        smtp_cls.return_value.__enter__.return_value = server
        yield smtp_cls, server


class TestSmtpEmailSender:
    """Tests for SmtpEmailSender.send."""

    def test_connects_logs_in_and_sends(self, smtp_ssl) -> None:
        smtp_cls, server = smtp_ssl
        sender = SmtpEmailSender("smtp.gmail.com", 465, "portal@gmail.com", "app-pass", timeout=5)

        sender.send("ada@x.com", "Registration ACCEPTED", "Hello Ada")

        smtp_cls.assert_called_once_with("smtp.gmail.com", 465, timeout=5)
        server.login.assert_called_once_with("portal@gmail.com", "app-pass")
        server.send_message.assert_called_once()
        message = server.send_message.call_args[0][0]
        assert message["From"] == "portal@gmail.com"
        assert message["To"] == "ada@x.com"
        assert message["Subject"] == "Registration ACCEPTED"
        assert message.get_content().strip() == "Hello Ada"

    def test_skips_login_without_credentials(self, smtp_ssl) -> None:
        _, server = smtp_ssl
        SmtpEmailSender("localhost", 465, "", "").send("a@b.c", "s", "b")
        server.login.assert_not_called()
        server.send_message.assert_called_once()

    def test_smtp_error_becomes_notification_failed(self, smtp_ssl) -> None:
        _, server = smtp_ssl
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
        sender = SmtpEmailSender("smtp.gmail.com", 465, "u", "p")

        with pytest.raises(NotificationFailed) as exc_info:
            sender.send("ada@x.com", "s", "b")

        assert "ada@x.com" in str(exc_info.value)
        assert isinstance(exc_info.value, UpstreamError)

    def test_connection_error_becomes_notification_failed(self, smtp_ssl) -> None:
        smtp_cls, _ = smtp_ssl
        smtp_cls.side_effect = ConnectionRefusedError("refused")

        with pytest.raises(NotificationFailed):
            SmtpEmailSender("localhost", 465, "u", "p").send("a@b.c", "s", "b")
