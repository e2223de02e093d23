"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging messages to stdout for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints notifications to stdout.
    """

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Log the message to console (simulates email delivery).

        The message is logged at INFO level to be visible in container logs.

        Args:
            to: Recipient email address (normalized by domain layer)
            subject: Message subject
            body: Plain-text message body
        """
        logger.info("[NOTIFICATION] To: %s Subject: %s\n%s", to, subject, body)
