"""Enrollment engine - decides and commits course registration requests."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from registrar.enrollment.models import (
    EnrollmentResult,
    EnrollmentRuleViolation,
    ValidationMode,
)
from registrar.enrollment.policy import EnrollmentPolicy
from registrar.enrollment.rules import RULES
from registrar.students.models import CourseSection

if TYPE_CHECKING:
    from registrar.catalog.models import Offering
    from registrar.students.models import Student

logger = logging.getLogger(__name__)


class EnrollmentEngine:
    """Checks a student's requested offerings against the enrollment rules.

    The rules run in a fixed order: already passed, prerequisites, exam
    times, duplicate courses, unit load. When none fails, every requested
    offering is added to the student's current term in one step. A rejected
    request leaves the student untouched.

    The engine keeps no per-student state. It does not lock, so callers
    must not run two enrollments for the same student at once.
    """

    def __init__(
        self,
        policy: EnrollmentPolicy | None = None,
        mode: ValidationMode = ValidationMode.ACCUMULATE,
    ) -> None:
        """Initialize the engine.

        Args:
            policy: Rule thresholds. Defaults to the standard policy.
            mode: Default validation mode for enroll() and validate().
        """
        self.policy = policy or EnrollmentPolicy()
        self.mode = ValidationMode(mode)

    def validate(
        self,
        student: Student,
        offerings: Sequence[Offering],
        mode: ValidationMode | None = None,
    ) -> list[EnrollmentRuleViolation]:
        """Run the rules without registering anything.

        Args:
            student: The student asking to enroll.
            offerings: Requested offerings, in request order.
            mode: Overrides the engine's default mode for this call.

        Returns:
            Violations in rule order. In FAIL_FAST mode at most one.
        """
        mode = ValidationMode(mode or self.mode)
        violations: list[EnrollmentRuleViolation] = []
        for rule in RULES:
            violation = rule(student, offerings, self.policy)
            if violation is None:
                continue
            logger.debug("Student %s: %s", student.id, violation.message)
            violations.append(violation)
            if mode is ValidationMode.FAIL_FAST:
                break
        return violations

    def enroll(
        self,
        student: Student,
        offerings: Sequence[Offering],
        mode: ValidationMode | None = None,
    ) -> EnrollmentResult:
        """Validate a request and register it if every rule passes.

        Args:
            student: The student asking to enroll.
            offerings: Requested offerings, in request order.
            mode: Overrides the engine's default mode for this call.

        Returns:
            ACCEPTED result after registering, or REJECTED with violations.
        """
        mode = ValidationMode(mode or self.mode)
        offerings = list(offerings)
        violations = self.validate(student, offerings, mode)

        if violations:
            logger.info(
                "Rejected enrollment of student %s in %d offerings (%d violations)",
                student.id,
                len(offerings),
                len(violations),
            )
            return EnrollmentResult.rejected_with(violations, mode)

        student.take_courses(CourseSection(o.course, o.section) for o in offerings)
        logger.info("Enrolled student %s in %d offerings", student.id, len(offerings))
        return EnrollmentResult.success(mode)
