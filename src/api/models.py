"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.ports import Course, Registration, RegistrationStatus


class RegisterRequest(BaseModel):
    """Request model for the public registration form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    college: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1)
    courses: list[str] = Field(default_factory=list, description="Chosen course names")


class MessageResponse(BaseModel):
    """Generic response carrying a human-readable message."""

    message: str


class LoginRequest(BaseModel):
    """Request model for admin login."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Response model for admin login and logout."""

    success: bool
    message: str


class SessionCheckResponse(BaseModel):
    """Response model for admin session check."""

    loggedIn: bool


class StatusUpdateRequest(BaseModel):
    """Request model for a registration status decision."""

    status: RegistrationStatus


class CourseModel(BaseModel):
    """Catalog entry as exposed by the API."""

    name: str
    description: str

    @classmethod
    def from_domain(cls, course: Course) -> "CourseModel":
        return cls(name=course.name, description=course.description)


class CourseCreateRequest(BaseModel):
    """Request model for adding a course. Name emptiness is checked by the domain."""

    name: str | None = None
    description: str | None = None


class CourseListResponse(BaseModel):
    """Response model for catalog mutations."""

    courses: list[CourseModel]


class RegistrationModel(BaseModel):
    """Registration record as shown in the admin panel."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    college: str
    branch: str
    courses: list[str]
    status: RegistrationStatus
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_domain(cls, registration: Registration) -> "RegistrationModel":
        return cls(
            id=registration.id,
            name=registration.name,
            email=registration.email,
            college=registration.college,
            branch=registration.branch,
            courses=registration.courses,
            status=registration.status,
            created_at=registration.created_at,
        )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    message: str
