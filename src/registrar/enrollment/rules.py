"""The enrollment rules.

Each check looks at the student and the requested offerings and returns the
first violation it finds, or None. RULES lists them in evaluation order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from itertools import combinations

from registrar.catalog.models import Offering
from registrar.enrollment.models import EnrollmentRuleViolation, RuleKind
from registrar.enrollment.policy import EnrollmentPolicy
from registrar.students.exceptions import EmptyTranscriptError
from registrar.students.models import Student

logger = logging.getLogger(__name__)

Rule = Callable[[Student, Sequence[Offering], EnrollmentPolicy], EnrollmentRuleViolation | None]


def check_already_passed(
    student: Student, offerings: Sequence[Offering], policy: EnrollmentPolicy
) -> EnrollmentRuleViolation | None:
    """A course that was already passed can't be taken again."""
    for offering in offerings:
        if student.has_passed(offering.course, policy.pass_grade):
            return EnrollmentRuleViolation(
                RuleKind.ALREADY_PASSED,
                f"The student has already passed {offering.course.name}",
            )
    return None


def check_prerequisites(
    student: Student, offerings: Sequence[Offering], policy: EnrollmentPolicy
) -> EnrollmentRuleViolation | None:
    """Every direct prerequisite of a requested course must have been passed."""
    for offering in offerings:
        for prerequisite in offering.course.prerequisites:
            if not student.has_passed(prerequisite, policy.pass_grade):
                return EnrollmentRuleViolation(
                    RuleKind.PREREQUISITE,
                    f"The student has not passed {prerequisite.name} "
                    f"as a prerequisite of {offering.course.name}",
                )
    return None


def check_exam_times(
    student: Student, offerings: Sequence[Offering], policy: EnrollmentPolicy
) -> EnrollmentRuleViolation | None:
    """No two requested offerings may share an exam time."""
    for first, second in combinations(offerings, 2):
        if first.exam_time == second.exam_time:
            return EnrollmentRuleViolation(
                RuleKind.EXAM_TIME_CONFLICT,
                f"Two offerings {first} and {second} have the same exam time",
            )
    return None


def check_duplicate_courses(
    student: Student, offerings: Sequence[Offering], policy: EnrollmentPolicy
) -> EnrollmentRuleViolation | None:
    """The same course can't be requested twice, even in different sections."""
    for first, second in combinations(offerings, 2):
        if first.course == second.course:
            return EnrollmentRuleViolation(
                RuleKind.DUPLICATE_COURSE,
                f"{first.course.name} is requested to be taken twice",
            )
    return None


def check_unit_load(
    student: Student, offerings: Sequence[Offering], policy: EnrollmentPolicy
) -> EnrollmentRuleViolation | None:
    """The requested units must fit the limit for the student's GPA."""
    units = sum(offering.course.units for offering in offerings)
    try:
        gpa = student.calculate_gpa()
    except EmptyTranscriptError:
        logger.debug("Student %s has no grades; using GPA %s", student.id, policy.no_history_gpa)
        gpa = float(policy.no_history_gpa)

    if policy.exceeds_unit_limit(units, gpa):
        return EnrollmentRuleViolation(
            RuleKind.UNIT_LOAD,
            f"Number of units ({units}) requested does not match GPA of {gpa}",
        )
    return None


RULES: tuple[Rule, ...] = (
    check_already_passed,
    check_prerequisites,
    check_exam_times,
    check_duplicate_courses,
    check_unit_load,
)
