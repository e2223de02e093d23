"""Repository adapters - Database implementations."""

from .postgres import (
    PostgresCourseRepository,
    PostgresRegistrationRepository,
    check_connection,
    run_migrations,
)

__all__ = [
    "PostgresCourseRepository",
    "PostgresRegistrationRepository",
    "check_connection",
    "run_migrations",
]
