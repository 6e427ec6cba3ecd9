"""Data models for the course catalog."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field


@dataclass(eq=False)
class Course:
    """A catalog entry students can enroll in.

    Two Course objects are the same course when their ids match, whatever
    their other fields say. The catalog, the transcript and the offerings
    may each hold their own instance of a course, so comparisons never rely
    on object identity.

    Prerequisites are direct edges only. They may contain duplicates or form
    cycles; nothing walks the graph transitively.

    Attributes:
        id: Unique course identifier (e.g., "CS101").
        name: Display name used in violation messages.
        units: Credit units, always positive.
        prerequisites: Courses that must be passed before this one.
    """

    id: str
    name: str
    units: int
    prerequisites: list[Course] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.units <= 0:
            raise ValueError(f"Course {self.id} must have a positive unit count, got {self.units}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        pres = "".join(f"{pre.name}, " for pre in self.prerequisites)
        return f"{self.name} {{{pres}}}"

    def add_prerequisite(self, course: Course) -> None:
        """Append a prerequisite edge."""
        self.prerequisites.append(course)

    def with_prerequisites(self, *courses: Course) -> Course:
        """Append several prerequisite edges and return this course."""
        self.prerequisites.extend(courses)
        return self


@dataclass(frozen=True)
class Offering:
    """One requested enrollment line: a course in a section with an exam slot.

    Attributes:
        course: The course being requested.
        section: Section number.
        exam_time: Opaque exam slot; only compared for equality.
    """

    course: Course
    section: int
    exam_time: Hashable

    def __str__(self) -> str:
        return f"{self.course.name} (section {self.section}, exam {self.exam_time})"
