"""Students package - Transcripts, GPA and current-term registrations."""

from registrar.students.exceptions import EmptyTranscriptError, StudentError
from registrar.students.models import (
    PASS_GRADE_THRESHOLD,
    CourseSection,
    Student,
    Transcript,
)

__all__ = [
    "PASS_GRADE_THRESHOLD",
    "CourseSection",
    "EmptyTranscriptError",
    "Student",
    "StudentError",
    "Transcript",
]
