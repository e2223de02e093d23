"""
Course catalog domain service.

Course names are both display name and primary key; uniqueness is left to
the repository so that concurrent adds resolve to a single row.
"""

import logging
from dataclasses import dataclass

from .exceptions import CourseAlreadyExists, ValidationError
from .ports import Course, CourseRepository

logger = logging.getLogger(__name__)


@dataclass
class CourseCatalogService:
    """Lists, adds and removes catalog entries."""

    repository: CourseRepository
    default_description: str = "No description provided"

    def list_courses(self) -> list[Course]:
        return self.repository.list_sorted()

    def add(self, name: str | None, description: str | None = None) -> list[Course]:
        """
        Add a course and return the updated catalog.

        Raises:
            ValidationError: If the trimmed name is empty
            CourseAlreadyExists: If a course with this name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Invalid course name")

        description = (description or "").strip() or self.default_description
        if not self.repository.add(Course(name=name, description=description)):
            raise CourseAlreadyExists(name)

        logger.info("Course added: %s", name)
        return self.repository.list_sorted()

    def remove(self, name: str) -> list[Course]:
        """Delete a course by exact name (idempotent) and return the catalog."""
        self.repository.remove(name)
        logger.info("Course removed: %s", name)
        return self.repository.list_sorted()
