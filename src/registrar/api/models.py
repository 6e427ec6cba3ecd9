"""Pydantic models for REST API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from registrar.catalog import Catalog, Offering
from registrar.enrollment import (
    EnrollmentPolicy,
    EnrollmentResult,
    EnrollmentStatus,
    RuleKind,
    ValidationMode,
)
from registrar.students import EmptyTranscriptError, Student

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Request models


class RecordModel(BaseModel):
    """Base for request records; numeric ids and terms are read as strings."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class CourseRecord(RecordModel):
    """A catalog course with the ids of its direct prerequisites."""

    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    units: int = Field(..., ge=1)
    prerequisites: list[str] = Field(default_factory=list)


class GradeRecord(RecordModel):
    """One transcript entry."""

    term: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    grade: float = Field(..., ge=0, le=20)


class SectionRecord(RecordModel):
    """A course section already registered for the current term."""

    course_id: str = Field(..., min_length=1)
    section: int


class StudentRecord(RecordModel):
    """A student together with their transcript and current registrations."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    transcript: list[GradeRecord] = Field(default_factory=list)
    current_term: list[SectionRecord] = Field(default_factory=list)


class OfferingRecord(RecordModel):
    """One requested offering."""

    course_id: str = Field(..., min_length=1)
    section: int
    exam_time: str


class EnrollmentRequest(BaseModel):
    """Request model for checking (and optionally committing) an enrollment."""

    catalog: list[CourseRecord]
    student: StudentRecord
    offerings: list[OfferingRecord]
    mode: ValidationMode | None = None
    commit: bool = True


# Response models


class ViolationResponse(BaseModel):
    """A failed enrollment rule."""

    model_config = ConfigDict(from_attributes=True)

    rule: RuleKind
    message: str


class SectionResponse(BaseModel):
    """A registered course section."""

    course_id: str
    course_name: str
    section: int


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment decision."""

    status: EnrollmentStatus
    mode: ValidationMode
    committed: bool
    violations: list[ViolationResponse]
    current_term: list[SectionResponse]
    gpa: float | None


class PolicyResponse(BaseModel):
    """Response model for the active enrollment policy."""

    model_config = ConfigDict(from_attributes=True)

    pass_grade: float
    failed_term_gpa: float
    failed_term_limit_units: int
    good_student_gpa: float
    not_good_student_limit_units: int
    unconditional_max_units_limit: int
    no_history_gpa: float


def build_catalog(records: list[CourseRecord]) -> Catalog:
    """Build a Catalog from request course records."""
    return Catalog.from_records(record.model_dump() for record in records)


def build_enrollment(request: EnrollmentRequest) -> tuple[Student, list[Offering]]:
    """Turn an EnrollmentRequest into a Student and the offerings requested.

    Raises:
        CourseNotFoundError: If any record names a course missing from the catalog.
        DuplicateCourseError: If the catalog lists a course id twice.
    """
    catalog = build_catalog(request.catalog)

    student = Student(id=request.student.id, name=request.student.name)
    for entry in request.student.transcript:
        student.record_grade(catalog.get(entry.course_id), entry.term, entry.grade)
    for registered in request.student.current_term:
        student.take_course(catalog.get(registered.course_id), registered.section)

    offerings = [
        catalog.offering(o.course_id, o.section, o.exam_time) for o in request.offerings
    ]
    return student, offerings


def enrollment_to_response(
    result: EnrollmentResult, student: Student, committed: bool
) -> EnrollmentResponse:
    """Convert an EnrollmentResult and the resulting student state to a response."""
    try:
        gpa: float | None = student.calculate_gpa()
    except EmptyTranscriptError:
        gpa = None

    return EnrollmentResponse(
        status=result.status,
        mode=result.mode,
        committed=committed,
        violations=[ViolationResponse.model_validate(v) for v in result.violations],
        current_term=[
            SectionResponse(
                course_id=registered.course.id,
                course_name=registered.course.name,
                section=registered.section,
            )
            for registered in student.current_term
        ],
        gpa=gpa,
    )


def policy_to_response(policy: EnrollmentPolicy) -> PolicyResponse:
    """Convert an EnrollmentPolicy to PolicyResponse."""
    return PolicyResponse.model_validate(policy)
