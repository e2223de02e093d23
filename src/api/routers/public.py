"""
Public routes.

Defines the unauthenticated REST endpoints used by the registration form.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_catalog_service, get_registration_service
from src.api.models import CourseModel, ErrorResponse, MessageResponse, RegisterRequest
from src.domain.catalog import CourseCatalogService
from src.domain.exceptions import EmailAlreadyRegistered, ValidationError
from src.domain.ports import NewRegistration
from src.domain.registration import RegistrationService

router = APIRouter(tags=["public"])


@router.get(
    "/courses",
    response_model=list[CourseModel],
    summary="List available courses",
    description="Return the full course catalog sorted by name.",
)
def list_courses(
    catalog: CourseCatalogService = Depends(get_catalog_service),
) -> list[CourseModel]:
    return [CourseModel.from_domain(course) for course in catalog.list_courses()]


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
    },
    summary="Submit a course registration",
    description="Store a registration in the pending state until an admin reviews it.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    """
    Submit a registration.

    - **email**: trimmed and lower-cased before storage; must be unique
    - **courses**: names chosen from the catalog (not re-validated)
    """
    try:
        service.submit(
            NewRegistration(
                name=request_data.name,
                email=request_data.email,
                college=request_data.college,
                branch=request_data.branch,
                courses=request_data.courses,
            )
        )
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered!",
        ) from None
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return MessageResponse(message="Registered successfully, pending approval!")
