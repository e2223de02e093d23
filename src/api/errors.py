"""
Exception handlers - uniform {"message": ...} error bodies.

Routes translate domain errors into HTTPException; these handlers shape
every error response so clients can always read a message field.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import UpstreamError

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


async def upstream_exception_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Store and mail failures: not retried, reported as 500 with their message."""
    logger.error("Upstream failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc)},
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the portal's exception handlers on app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UpstreamError, upstream_exception_handler)
