"""
Domain layer - Pure business logic with zero web-framework imports.

This package contains the core business logic for the course registration
portal: the admin session gate, the registration status workflow and the
course catalog. It defines its own port interfaces for infrastructure
abstraction, keeping the domain decoupled from FastAPI and PostgreSQL.
"""

from .auth import AdminGate, CredentialStore, SessionTokenCodec
from .catalog import CourseCatalogService
from .exceptions import (
    CourseAlreadyExists,
    DuplicateError,
    EmailAlreadyRegistered,
    InvalidStatusTransition,
    NotFoundError,
    NotificationFailed,
    PortalError,
    RegistrationNotFound,
    StoreUnavailable,
    Unauthorized,
    UpstreamError,
    ValidationError,
)
from .ports import (
    Course,
    CourseRepository,
    EmailSender,
    NewRegistration,
    Registration,
    RegistrationRepository,
    RegistrationStatus,
)
from .registration import RegistrationService, StatusChange, compose_status_message

__all__ = [
    "AdminGate",
    "Course",
    "CourseAlreadyExists",
    "CourseCatalogService",
    "CourseRepository",
    "CredentialStore",
    "DuplicateError",
    "EmailAlreadyRegistered",
    "EmailSender",
    "InvalidStatusTransition",
    "NewRegistration",
    "NotFoundError",
    "NotificationFailed",
    "PortalError",
    "Registration",
    "RegistrationNotFound",
    "RegistrationRepository",
    "RegistrationService",
    "RegistrationStatus",
    "SessionTokenCodec",
    "StatusChange",
    "StoreUnavailable",
    "Unauthorized",
    "UpstreamError",
    "ValidationError",
    "compose_status_message",
]
