"""
Domain exceptions - Semantic error types for the portal.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class PortalError(Exception):
    """Base class for portal domain errors."""

    pass


class ValidationError(PortalError):
    """A required field is missing or empty."""

    pass


class DuplicateError(PortalError):
    """A unique value collides with an existing record."""

    pass


class EmailAlreadyRegistered(DuplicateError):
    """A registration with the same normalized email exists."""

    pass


class CourseAlreadyExists(DuplicateError):
    """A course with the same name exists."""

    pass


class NotFoundError(PortalError):
    """The requested record does not exist."""

    pass


class RegistrationNotFound(NotFoundError):
    """No registration with the given id."""

    pass


class InvalidStatusTransition(PortalError):
    """The registration has already left the pending state."""

    pass


class Unauthorized(PortalError):
    """Missing, invalid or expired admin session."""

    pass


class UpstreamError(PortalError):
    """Store or mail transport failure."""

    pass


class StoreUnavailable(UpstreamError):
    """The database rejected or failed an operation."""

    pass


class NotificationFailed(UpstreamError):
    """The mail transport could not deliver a message."""

    pass
