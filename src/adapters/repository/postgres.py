"""
PostgreSQL repository adapters - Implement the domain's repository protocols.

This module provides the PostgreSQL implementations of the registration
and course repository ports using psycopg3 with raw SQL.

Uniqueness Design:
-----------------
Registrations are unique per normalized email and courses per name. Both
are enforced by database constraints, and inserts use
INSERT ... ON CONFLICT DO NOTHING so that two concurrent submissions for
the same key resolve to exactly one stored row and one graceful refusal.
There is no separate existence check before the write.

Status updates with an expected status are a compare-and-set
(UPDATE ... WHERE status = %s), so a decision already taken by another
admin is never silently overwritten.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from uuid import UUID

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreUnavailable
from src.domain.ports import Course, NewRegistration, Registration, RegistrationStatus

logger = logging.getLogger(__name__)

_REGISTRATION_COLUMNS = "id, name, email, college, branch, courses, status, created_at"


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate psycopg failures into StoreUnavailable."""
    try:
        yield
    except psycopg.Error as e:
        logger.error("Database operation failed: %s - %s", operation, e)
        raise StoreUnavailable(str(e)) from e


def _to_registration(row: tuple) -> Registration:
    return Registration(
        id=str(row[0]),
        name=row[1],
        email=row[2],
        college=row[3],
        branch=row[4],
        courses=list(row[5] or []),
        status=RegistrationStatus(row[6]),
        created_at=row[7],
    )


def _parse_id(registration_id: str) -> UUID | None:
    try:
        return UUID(registration_id)
    except (ValueError, TypeError, AttributeError):
        return None


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def add(self, registration: NewRegistration) -> Registration | None:
        """
        Atomically insert a pending registration.

        The UNIQUE constraint on email decides races: a conflicting insert
        returns no row instead of raising.

        Args:
            registration: Input with a normalized email

        Returns:
            The stored record, or None if the email is already registered
        """
        sql = f"""
            INSERT INTO registrations (name, email, college, branch, courses, status)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_REGISTRATION_COLUMNS}
        """

        with _store_errors("add registration"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (
                        registration.name,
                        registration.email,
                        registration.college,
                        registration.branch,
                        list(registration.courses),
                        RegistrationStatus.PENDING.value,
                    ),
                )
                row = cursor.fetchone()
                conn.commit()

        return _to_registration(row) if row is not None else None

    def get(self, registration_id: str) -> Registration | None:
        """Fetch a registration; ids that are not UUIDs match nothing."""
        key = _parse_id(registration_id)
        if key is None:
            return None

        sql = f"SELECT {_REGISTRATION_COLUMNS} FROM registrations WHERE id = %s"

        with _store_errors("get registration"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                row = cursor.fetchone()

        return _to_registration(row) if row is not None else None

    def list_newest_first(self) -> list[Registration]:
        sql = f"SELECT {_REGISTRATION_COLUMNS} FROM registrations ORDER BY created_at DESC, id"

        with _store_errors("list registrations"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()

        return [_to_registration(row) for row in rows]

    def update_status(
        self,
        registration_id: str,
        status: RegistrationStatus,
        expected: RegistrationStatus | None = None,
    ) -> Registration | None:
        """
        Persist a new status, optionally conditional on the current one.

        Args:
            registration_id: Target registration
            status: New status
            expected: Current status required for the update to apply

        Returns:
            The updated record, or None if no row matched
        """
        key = _parse_id(registration_id)
        if key is None:
            return None

        if expected is None:
            sql = f"""
                UPDATE registrations SET status = %s
                WHERE id = %s
                RETURNING {_REGISTRATION_COLUMNS}
            """
            params: tuple = (status.value, key)
        else:
            sql = f"""
                UPDATE registrations SET status = %s
                WHERE id = %s AND status = %s
                RETURNING {_REGISTRATION_COLUMNS}
            """
            params = (status.value, key, expected.value)

        with _store_errors("update registration status"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()

        return _to_registration(row) if row is not None else None


class PostgresCourseRepository:
    """
    Implements CourseRepository protocol via psycopg3.

    The course name is the primary key; ordering uses the "C" collation so
    the catalog is sorted by plain code-point order regardless of locale.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def list_sorted(self) -> list[Course]:
        sql = 'SELECT name, description FROM courses ORDER BY name COLLATE "C"'

        with _store_errors("list courses"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()

        return [Course(name=row[0], description=row[1]) for row in rows]

    def add(self, course: Course) -> bool:
        """
        Insert a course.

        Returns:
            True if inserted, False if the name already exists
        """
        sql = """
            INSERT INTO courses (name, description)
            VALUES (%s, %s)
            ON CONFLICT (name) DO NOTHING
        """

        with _store_errors("add course"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (course.name, course.description))
                conn.commit()
                return cursor.rowcount == 1

    def remove(self, name: str) -> None:
        with _store_errors("remove course"):
            with self._pool.connection() as conn:
                conn.execute("DELETE FROM courses WHERE name = %s", (name,))
                conn.commit()


def check_connection(pool: ConnectionPool) -> None:
    """
    Round-trip a trivial query through the pool.

    Raises:
        StoreUnavailable: If no connection can be obtained or the query fails
    """
    with _store_errors("health check"):
        with pool.connection() as conn:
            conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
