"""Data models for students and their academic records."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from registrar.catalog.models import Course
from registrar.students.exceptions import EmptyTranscriptError

# Lowest grade (on a 0-20 scale) that counts as passing a course.
PASS_GRADE_THRESHOLD = 10


@dataclass(frozen=True)
class CourseSection:
    """A course registered in the current term, with its section number."""

    course: Course
    section: int


class Transcript:
    """A student's grade history, organized by term.

    Terms are opaque hashable identifiers; nothing here orders them. Each
    (term, course) pair holds at most one grade, and recording it again
    overwrites the previous value.
    """

    def __init__(self) -> None:
        self._terms: dict[Hashable, dict[Course, float]] = {}

    def record_grade(self, course: Course, term: Hashable, grade: float) -> None:
        """Record (or overwrite) the grade for a course in a term."""
        self._terms.setdefault(term, {})[course] = float(grade)

    def entries(self) -> Iterator[tuple[Hashable, Course, float]]:
        """Yield every (term, course, grade) entry."""
        for term, grades in self._terms.items():
            for course, grade in grades.items():
                yield term, course, grade

    def terms(self) -> list[Hashable]:
        """Return the terms that have at least one grade recorded."""
        return list(self._terms)

    def grades_for(self, term: Hashable) -> Mapping[Course, float]:
        """Return a read-only view of one term's grades (empty if unknown)."""
        return MappingProxyType(dict(self._terms.get(term, {})))

    def snapshot(self) -> Mapping[Hashable, Mapping[Course, float]]:
        """Return a read-only copy of the whole term -> course -> grade map."""
        return MappingProxyType(
            {term: MappingProxyType(dict(grades)) for term, grades in self._terms.items()}
        )

    def has_passed(self, course: Course, pass_grade: float = PASS_GRADE_THRESHOLD) -> bool:
        """Check whether any attempt at the course, in any term, passed."""
        return any(
            recorded == course and grade >= pass_grade for _, recorded, grade in self.entries()
        )

    def total_units(self) -> int:
        """Sum of units over every recorded entry, passed or not."""
        return sum(course.units for _, course, _ in self.entries())

    def calculate_gpa(self) -> float:
        """Unit-weighted average of every recorded grade.

        Failed attempts count too.

        Raises:
            EmptyTranscriptError: If nothing has been recorded.
        """
        points = 0.0
        total_units = 0
        for _, course, grade in self.entries():
            points += grade * course.units
            total_units += course.units
        if total_units == 0:
            raise EmptyTranscriptError("Cannot calculate GPA of an empty transcript")
        return points / total_units

    @property
    def is_empty(self) -> bool:
        return not any(self._terms.values())

    def __len__(self) -> int:
        return sum(len(grades) for grades in self._terms.values())


@dataclass
class Student:
    """A student, the transcript they own, and this term's registrations.

    The transcript is private to the student. Callers read it through the
    query methods or the read-only ``transcript`` snapshot and write to it
    only through ``record_grade``.

    Attributes:
        id: Student identifier.
        name: Display name.
    """

    id: str
    name: str
    _transcript: Transcript = field(default_factory=Transcript, init=False, repr=False, compare=False)
    _current_term: list[CourseSection] = field(default_factory=list, init=False, repr=False, compare=False)

    def __str__(self) -> str:
        return self.name

    @property
    def transcript(self) -> Mapping[Hashable, Mapping[Course, float]]:
        return self._transcript.snapshot()

    @property
    def current_term(self) -> tuple[CourseSection, ...]:
        return tuple(self._current_term)

    def record_grade(self, course: Course, term: Hashable, grade: float) -> None:
        """Record a grade in the student's transcript."""
        self._transcript.record_grade(course, term, grade)

    def has_passed(self, course: Course, pass_grade: float = PASS_GRADE_THRESHOLD) -> bool:
        return self._transcript.has_passed(course, pass_grade)

    def calculate_gpa(self) -> float:
        """Unit-weighted GPA over the whole transcript.

        Raises:
            EmptyTranscriptError: If the student has no recorded grades.
        """
        return self._transcript.calculate_gpa()

    @property
    def has_history(self) -> bool:
        return not self._transcript.is_empty

    def take_course(self, course: Course, section: int) -> None:
        """Register one course section for the current term."""
        self._current_term.append(CourseSection(course, section))

    def take_courses(self, sections: Iterable[CourseSection]) -> None:
        """Register several course sections at once, in order."""
        self._current_term.extend(sections)

    def start_term(self) -> None:
        """Clear the current-term registrations for a new term."""
        self._current_term.clear()
