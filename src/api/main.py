"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import check_connection, run_migrations
from src.api.errors import install_exception_handlers
from src.api.routers import admin_router, public_router
from src.config.settings import Settings, get_settings
from src.domain.auth import CredentialStore

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "public",
        "description": "Course catalog and registration form",
    },
    {
        "name": "admin",
        "description": "Admin session, registration review and catalog management",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around an explicit settings object.

    The settings are stored on app.state and reach the token codec,
    credential store and services only through dependencies.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="course-portal",
        description="Course Registration Portal API - registration form, catalog and admin review",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.credentials = CredentialStore.from_plaintext(
        settings.admin_username,
        settings.admin_password,
        cost=settings.bcrypt_cost,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_exception_handlers(app)

    app.include_router(public_router)
    app.include_router(admin_router)

    @app.get("/health", tags=["public"])
    def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        A database failure surfaces as StoreUnavailable (500 with a message).
        """
        check_connection(request.app.state.pool)

        return {"status": "healthy"}

    return app


def main() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("src.api.main:create_app", factory=True, host=settings.host, port=settings.port)
