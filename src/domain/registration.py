"""
Registration domain service - registration status workflow.

This module contains the core business logic for course registrations:
submission, admin review and the notification sent on each decision.

Status Workflow
===============

States:
- pending: Initial state after submission
- accepted: Admin approved the registration
- rejected: Admin refused the registration

Valid Transitions (strict mode, the default):
    pending -> accepted
    pending -> rejected

With strict transitions disabled, any status may be set at any time.

Persisting a status and notifying the registrant are separate steps:
a failed notification never rolls back a saved status.
"""

import logging
from dataclasses import dataclass

from .exceptions import (
    EmailAlreadyRegistered,
    InvalidStatusTransition,
    NotificationFailed,
    RegistrationNotFound,
    ValidationError,
)
from .ports import EmailSender, NewRegistration, Registration, RegistrationRepository, RegistrationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChange:
    """Outcome of set_status: the saved record and how notification went."""

    registration: Registration
    notified: bool
    notification_error: NotificationFailed | None = None


def compose_status_message(name: str, status: RegistrationStatus) -> tuple[str, str]:
    """Build the (subject, body) pair sent to a registrant."""
    subject = f"Registration {status.value.upper()}"
    body = f"Hello {name},\n\nYour registration has been {status.value}.\n\nThank you!"
    return subject, body


@dataclass
class RegistrationService:
    """
    Domain service for course registrations.

    Orchestrates submission (email normalization and claim), listing for the
    admin panel, and status decisions with their notification side effect.
    """

    repository: RegistrationRepository
    email_sender: EmailSender
    strict_transitions: bool = True

    def submit(self, registration: NewRegistration) -> Registration:
        """
        Store a new pending registration.

        Args:
            registration: Submitted form data (email will be normalized)

        Returns:
            The stored record

        Raises:
            ValidationError: If a required field is empty
            EmailAlreadyRegistered: If the normalized email is taken
        """
        normalized = NewRegistration(
            name=registration.name.strip(),
            email=self._normalize_email(registration.email),
            college=registration.college.strip(),
            branch=registration.branch.strip(),
            courses=list(registration.courses),
        )
        for field_name in ("name", "email", "college", "branch"):
            if not getattr(normalized, field_name):
                raise ValidationError(f"Missing required field: {field_name}")

        stored = self.repository.add(normalized)
        if stored is None:
            logger.info("Duplicate registration rejected: %s", normalized.email)
            raise EmailAlreadyRegistered(normalized.email)

        logger.info("Registration %s created for %s", stored.id, stored.email)
        return stored

    def list_registrations(self) -> list[Registration]:
        """All registrations, newest first."""
        return self.repository.list_newest_first()

    def update_status(self, registration_id: str, status: RegistrationStatus) -> Registration:
        """
        Persist a status decision.

        The write is conditional on the status that was read, so two admins
        deciding on the same pending record cannot both succeed.

        Raises:
            RegistrationNotFound: If no registration has this id
            InvalidStatusTransition: If strict transitions forbid the change
        """
        current = self.repository.get(registration_id)
        if current is None:
            raise RegistrationNotFound(registration_id)

        expected = None
        if self.strict_transitions:
            if current.status != RegistrationStatus.PENDING or status == RegistrationStatus.PENDING:
                raise InvalidStatusTransition(
                    f"Cannot change status from {current.status.value} to {status.value}"
                )
            expected = RegistrationStatus.PENDING

        updated = self.repository.update_status(registration_id, status, expected=expected)
        if updated is None:
            if self.strict_transitions:
                raise InvalidStatusTransition(
                    f"Registration {registration_id} is no longer pending"
                )
            raise RegistrationNotFound(registration_id)

        logger.info("Registration %s set to %s", registration_id, status.value)
        return updated

    def notify_status(self, registration: Registration) -> None:
        """
        Tell the registrant about their current status.

        Raises:
            NotificationFailed: If the mail transport fails
        """
        subject, body = compose_status_message(registration.name, registration.status)
        self.email_sender.send(registration.email, subject, body)
        logger.info("Status notification sent to %s", registration.email)

    def set_status(self, registration_id: str, status: RegistrationStatus) -> StatusChange:
        """
        Persist a status decision, then notify the registrant.

        Returns:
            StatusChange; notified is False when the mail transport failed,
            in which case the status change is still saved.
        """
        updated = self.update_status(registration_id, status)
        try:
            self.notify_status(updated)
        except NotificationFailed as exc:
            logger.error("Status notification to %s failed: %s", updated.email, exc)
            return StatusChange(registration=updated, notified=False, notification_error=exc)
        return StatusChange(registration=updated, notified=True)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
