"""Catalog package - Courses, prerequisite edges and offerings."""

from registrar.catalog.catalog import Catalog
from registrar.catalog.exceptions import (
    CatalogError,
    CourseNotFoundError,
    DuplicateCourseError,
)
from registrar.catalog.models import Course, Offering

__all__ = [
    "Catalog",
    "CatalogError",
    "Course",
    "CourseNotFoundError",
    "DuplicateCourseError",
    "Offering",
]
