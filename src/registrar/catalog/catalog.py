"""In-memory course catalog."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any

from registrar.catalog.exceptions import CourseNotFoundError, DuplicateCourseError
from registrar.catalog.models import Course, Offering

logger = logging.getLogger(__name__)


class Catalog:
    """Holds the courses offered and their prerequisite edges.

    The catalog is built once and then only read. It does not check the
    prerequisite graph for cycles.
    """

    def __init__(self, courses: Iterable[Course] = ()) -> None:
        self._courses: dict[str, Course] = {}
        for course in courses:
            self.add(course)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> Catalog:
        """Build a catalog from plain mappings.

        Each record needs ``id``, ``name`` and ``units`` and may list
        prerequisite ids under ``prerequisites``. Prerequisites are resolved
        after every course exists, so records can appear in any order.

        Args:
            records: Course records, e.g. parsed from YAML or JSON.

        Returns:
            The populated catalog.

        Raises:
            DuplicateCourseError: If two records share an id.
            CourseNotFoundError: If a prerequisite id has no record.
        """
        records = list(records)
        catalog = cls()
        for record in records:
            catalog.add(Course(id=record["id"], name=record["name"], units=record["units"]))

        for record in records:
            course = catalog.get(record["id"])
            for pre_id in record.get("prerequisites") or ():
                course.add_prerequisite(catalog.get(pre_id))

        logger.debug("Built catalog with %d courses", len(catalog))
        return catalog

    def add(self, course: Course) -> Course:
        """Add a course.

        Raises:
            DuplicateCourseError: If a course with the same id exists.
        """
        if course.id in self._courses:
            raise DuplicateCourseError(course.id)
        self._courses[course.id] = course
        return course

    def get(self, course_id: str) -> Course:
        """Look up a course by id.

        Raises:
            CourseNotFoundError: If no course has this id.
        """
        try:
            return self._courses[course_id]
        except KeyError:
            raise CourseNotFoundError(course_id) from None

    def offering(self, course_id: str, section: int, exam_time: Hashable) -> Offering:
        """Build an offering for a catalog course."""
        return Offering(course=self.get(course_id), section=section, exam_time=exam_time)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Course):
            return item.id in self._courses
        return item in self._courses

    def __iter__(self) -> Iterator[Course]:
        return iter(self._courses.values())

    def __len__(self) -> int:
        return len(self._courses)
