"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the records the domain works with and the interfaces
(ports) it requires from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol


class RegistrationStatus(str, Enum):
    """
    Lifecycle states of a registration.

    Transitions:
    - PENDING -> ACCEPTED (admin approval)
    - PENDING -> REJECTED (admin refusal)

    ACCEPTED and REJECTED are terminal unless strict transitions are
    disabled in configuration.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class NewRegistration:
    """Registration input as submitted by the public form."""

    name: str
    email: str
    college: str
    branch: str
    courses: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Registration:
    """Stored registration record."""

    id: str
    name: str
    email: str
    college: str
    branch: str
    courses: list[str]
    status: RegistrationStatus
    created_at: datetime


@dataclass(frozen=True)
class Course:
    """Catalog entry. The name is the primary key."""

    name: str
    description: str


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def add(self, registration: NewRegistration) -> Registration | None:
        """
        Atomically insert a pending registration.

        Args:
            registration: Input with an already-normalized email

        Returns:
            The stored record, or None if the email is already registered
        """
        ...

    def get(self, registration_id: str) -> Registration | None:
        """Fetch a registration by id, None if absent or malformed."""
        ...

    def list_newest_first(self) -> list[Registration]:
        """Return all registrations ordered by creation time, newest first."""
        ...

    def update_status(
        self,
        registration_id: str,
        status: RegistrationStatus,
        expected: RegistrationStatus | None = None,
    ) -> Registration | None:
        """
        Persist a new status.

        Args:
            registration_id: Target registration
            status: New status
            expected: When given, only update if the current status equals it

        Returns:
            The updated record, or None if no row matched
        """
        ...


class CourseRepository(Protocol):
    """Port interface for course catalog persistence."""

    def list_sorted(self) -> list[Course]:
        """Return all courses sorted by name ascending."""
        ...

    def add(self, course: Course) -> bool:
        """
        Insert a course.

        Returns:
            True if inserted, False if the name already exists
        """
        ...

    def remove(self, name: str) -> None:
        """Delete a course by exact name. No-op if absent."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Send a plain-text message.

        Raises:
            NotificationFailed: If the transport cannot deliver the message
        """
        ...
