"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Test settings (fast bcrypt, known admin credentials and secret)
- In-memory repositories honoring the same uniqueness rules as PostgreSQL
- A recording email sender
- An application wired to the in-memory adapters
- A PostgreSQL pool for tests that need the real database
"""

import threading
import uuid
from collections.abc import Generator
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import get_course_repository, get_email_sender, get_registration_repository
from src.api.main import create_app
from src.config.settings import Settings
from src.domain.exceptions import NotificationFailed
from src.domain.ports import Course, NewRegistration, Registration, RegistrationStatus

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"
JWT_SECRET = "test-signing-secret"


class InMemoryRegistrationRepository:
    """RegistrationRepository with a unique email index guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, Registration] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def add(self, registration: NewRegistration) -> Registration | None:
        with self._lock:
            if any(r.email == registration.email for r in self._records.values()):
                return None
            self._clock += timedelta(seconds=1)
            record = Registration(
                id=str(uuid.uuid4()),
                name=registration.name,
                email=registration.email,
                college=registration.college,
                branch=registration.branch,
                courses=list(registration.courses),
                status=RegistrationStatus.PENDING,
                created_at=self._clock,
            )
            self._records[record.id] = record
            return record

    def get(self, registration_id: str) -> Registration | None:
        return self._records.get(registration_id)

    def list_newest_first(self) -> list[Registration]:
        return sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)

    def update_status(
        self,
        registration_id: str,
        status: RegistrationStatus,
        expected: RegistrationStatus | None = None,
    ) -> Registration | None:
        with self._lock:
            current = self._records.get(registration_id)
            if current is None:
                return None
            if expected is not None and current.status != expected:
                return None
            updated = replace(current, status=status)
            self._records[registration_id] = updated
            return updated


class InMemoryCourseRepository:
    """CourseRepository keyed by course name."""

    def __init__(self) -> None:
        self._courses: dict[str, Course] = {}

    def list_sorted(self) -> list[Course]:
        return [self._courses[name] for name in sorted(self._courses)]

    def add(self, course: Course) -> bool:
        if course.name in self._courses:
            return False
        self._courses[course.name] = course
        return True

    def remove(self, name: str) -> None:
        self._courses.pop(name, None)


class RecordingEmailSender:
    """EmailSender that records messages and can be told to fail."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationFailed(f"Failed to send email to {to}: connection refused")
        self.sent.append((to, subject, body))


@pytest.fixture
def settings() -> Settings:
    """Settings with known credentials and a cheap bcrypt cost."""
    return Settings(
        _env_file=None,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        jwt_secret=JWT_SECRET,
        bcrypt_cost=4,
    )


@pytest.fixture
def registration_repository() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()


@pytest.fixture
def course_repository() -> InMemoryCourseRepository:
    return InMemoryCourseRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def app(
    settings: Settings,
    registration_repository: InMemoryRegistrationRepository,
    course_repository: InMemoryCourseRepository,
    email_sender: RecordingEmailSender,
) -> Generator[FastAPI, None, None]:
    """Application wired to in-memory adapters (no database, lifespan not run)."""
    test_app = create_app(settings)
    test_app.dependency_overrides[get_registration_repository] = lambda: registration_repository
    test_app.dependency_overrides[get_course_repository] = lambda: course_repository
    test_app.dependency_overrides[get_email_sender] = lambda: email_sender
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """Test client holding a valid admin session cookie."""
    response = client.post(
        "/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against DATABASE_URL with migrations applied.

    Tests using it are skipped when no PostgreSQL server is reachable.
    """
    database_url = Settings(_env_file=None).database_url
    pool = ConnectionPool(conninfo=database_url, min_size=1, max_size=10, open=True)
    try:
        pool.wait(timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {database_url}")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[ConnectionPool, None, None]:
    """Empty both tables before each test."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE registrations, courses")
        conn.commit()
    yield pool
