"""Custom exceptions for the course catalog."""


class CatalogError(Exception):
    """Base exception for catalog errors."""


class CourseNotFoundError(CatalogError):
    """Course with given ID is not in the catalog."""

    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


class DuplicateCourseError(CatalogError):
    """Course with given ID is already in the catalog."""

    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course already exists: {course_id}")
        self.course_id = course_id
