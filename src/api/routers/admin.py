"""
Admin routes.

Session endpoints (login, logout, check) plus the endpoints behind the
admin gate: registration review and course catalog editing.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_admin_gate,
    get_catalog_service,
    get_credential_store,
    get_registration_service,
    get_session_token,
    get_settings,
    get_token_codec,
    require_admin,
)
from src.api.models import (
    CourseCreateRequest,
    CourseListResponse,
    CourseModel,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegistrationModel,
    SessionCheckResponse,
    StatusUpdateRequest,
)
from src.config.settings import Settings
from src.domain.auth import AdminGate, CredentialStore, SessionTokenCodec
from src.domain.catalog import CourseCatalogService
from src.domain.exceptions import (
    CourseAlreadyExists,
    InvalidStatusTransition,
    RegistrationNotFound,
    ValidationError,
)
from src.domain.ports import Course
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _catalog_response(courses: list[Course]) -> CourseListResponse:
    return CourseListResponse(courses=[CourseModel.from_domain(course) for course in courses])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": LoginResponse, "description": "Invalid credentials"}},
    summary="Admin login",
    description="Check admin credentials and set the session cookie.",
)
def login(
    request_data: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    credentials: CredentialStore = Depends(get_credential_store),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    identity = credentials.authenticate(request_data.username, request_data.password)
    if identity is None:
        logger.warning("Failed admin login for username %r", request_data.username)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Invalid credentials"},
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=codec.issue(identity),
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
    logger.info("Admin %s logged in", identity)
    return LoginResponse(success=True, message="Login successful")


@router.post(
    "/logout",
    response_model=LoginResponse,
    summary="Admin logout",
    description="Clear the session cookie.",
)
def logout(response: Response, settings: Settings = Depends(get_settings)) -> LoginResponse:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
    return LoginResponse(success=True, message="Logged out")


@router.get(
    "/check",
    response_model=SessionCheckResponse,
    summary="Admin session check",
    description="Report whether the request carries a valid session cookie. Never errors.",
)
def check(
    token: str | None = Depends(get_session_token),
    gate: AdminGate = Depends(get_admin_gate),
) -> SessionCheckResponse:
    return SessionCheckResponse(loggedIn=gate.is_admin(token))


@router.get(
    "/users",
    response_model=list[RegistrationModel],
    responses={401: {"model": ErrorResponse, "description": "Not logged in"}},
    summary="List registrations",
    description="All registrations, newest first.",
)
def list_users(
    admin: str = Depends(require_admin),
    service: RegistrationService = Depends(get_registration_service),
) -> list[RegistrationModel]:
    return [RegistrationModel.from_domain(r) for r in service.list_registrations()]


@router.post(
    "/users/{registration_id}/status",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Not logged in"},
        404: {"model": ErrorResponse, "description": "Registration not found"},
        409: {"model": ErrorResponse, "description": "Registration already decided"},
        500: {"model": ErrorResponse, "description": "Store or notification failure"},
    },
    summary="Accept or reject a registration",
    description="Persist the decision, then email the registrant. "
    "A failed email is reported as 500 but the decision stays saved.",
)
def update_user_status(
    registration_id: str,
    request_data: StatusUpdateRequest,
    admin: str = Depends(require_admin),
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    new_status = request_data.status
    try:
        change = service.set_status(registration_id, new_status)
    except RegistrationNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        ) from None
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    if not change.notified:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(change.notification_error),
        )
    return MessageResponse(message=f"User {new_status.value} successfully")


@router.post(
    "/courses",
    response_model=CourseListResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or duplicate course name"},
        401: {"model": ErrorResponse, "description": "Not logged in"},
    },
    summary="Add a course",
)
def add_course(
    request_data: CourseCreateRequest,
    admin: str = Depends(require_admin),
    catalog: CourseCatalogService = Depends(get_catalog_service),
) -> CourseListResponse:
    try:
        courses = catalog.add(request_data.name, request_data.description)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    except CourseAlreadyExists as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Course already exists: {e}",
        ) from None
    return _catalog_response(courses)


@router.delete(
    "/courses/{course_name:path}",
    response_model=CourseListResponse,
    responses={401: {"model": ErrorResponse, "description": "Not logged in"}},
    summary="Delete a course",
    description="Delete by exact name. Deleting an unknown course is a no-op.",
)
def delete_course(
    course_name: str,
    admin: str = Depends(require_admin),
    catalog: CourseCatalogService = Depends(get_catalog_service),
) -> CourseListResponse:
    return _catalog_response(catalog.remove(course_name))
