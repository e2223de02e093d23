"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Configuration is read from app.state.settings, set once by create_app().
"""

from datetime import timedelta

from fastapi import Depends, HTTPException, Request, status
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCourseRepository, PostgresRegistrationRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.config.settings import Settings
from src.domain.auth import AdminGate, CredentialStore, SessionTokenCodec
from src.domain.catalog import CourseCatalogService
from src.domain.exceptions import Unauthorized
from src.domain.ports import EmailSender
from src.domain.registration import RegistrationService

# Module-level singleton - ConsoleEmailSender is stateless
_console_sender = ConsoleEmailSender()


def get_settings(request: Request) -> Settings:
    """Settings object the application was created with."""
    return request.app.state.settings


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_registration_repository(request: Request) -> PostgresRegistrationRepository:
    """Create registration repository with connection pool from app state."""
    return PostgresRegistrationRepository(get_pool(request))


def get_course_repository(request: Request) -> PostgresCourseRepository:
    """Create course repository with connection pool from app state."""
    return PostgresCourseRepository(get_pool(request))


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    """Select the configured email backend."""
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            timeout=settings.smtp_timeout_seconds,
        )
    return _console_sender


def get_registration_service(
    repository: PostgresRegistrationRepository = Depends(get_registration_repository),
    settings: Settings = Depends(get_settings),
    email_sender: EmailSender = Depends(get_email_sender),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository and email sender for the domain service.
    """
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        strict_transitions=settings.strict_status_transitions,
    )


def get_catalog_service(
    repository: PostgresCourseRepository = Depends(get_course_repository),
    settings: Settings = Depends(get_settings),
) -> CourseCatalogService:
    """Create course catalog service with repository from app state."""
    return CourseCatalogService(
        repository=repository,
        default_description=settings.default_course_description,
    )


def get_credential_store(request: Request) -> CredentialStore:
    """Admin credentials hashed once by create_app()."""
    return request.app.state.credentials


def get_token_codec(settings: Settings = Depends(get_settings)) -> SessionTokenCodec:
    return SessionTokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.session_ttl_hours),
    )


def get_admin_gate(codec: SessionTokenCodec = Depends(get_token_codec)) -> AdminGate:
    return AdminGate(codec=codec)


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str | None:
    """Extract the admin session token from its cookie."""
    return request.cookies.get(settings.session_cookie_name)


def require_admin(
    token: str | None = Depends(get_session_token),
    gate: AdminGate = Depends(get_admin_gate),
) -> str:
    """
    Admit only requests carrying a valid admin session cookie.

    Every failure (no cookie, bad signature, expired) returns the same 401.

    Returns:
        The admin identity embedded in the token
    """
    try:
        return gate.admit(token)
    except Unauthorized:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        ) from None
