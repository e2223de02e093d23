"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers plain-text notifications through an SMTP server over SSL
(Gmail-compatible defaults), authenticating with the configured mail account.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import NotificationFailed

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    A new SSL connection is opened per message; notifications are rare
    admin-driven events, so there is no connection to keep warm.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Send a plain-text message from the configured account.

        Raises:
            NotificationFailed: On any SMTP or socket error
        """
        message = EmailMessage()
        message["From"] = self._username
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout) as server:
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send to %s failed: %s", to, e)
            raise NotificationFailed(f"Failed to send email to {to}: {e}") from e

        logger.info("Email sent to %s: %s", to, subject)
