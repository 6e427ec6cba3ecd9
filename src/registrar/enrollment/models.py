"""Data models for the Enrollment module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from registrar.enrollment.exceptions import EnrollmentRejectedError


class ValidationMode(StrEnum):
    """How many violations an enrollment check reports.

    FAIL_FAST: Stop at the first rule that fails.
    ACCUMULATE: Run every rule and report each one that fails.
    """

    FAIL_FAST = "fail_fast"
    ACCUMULATE = "accumulate"


class RuleKind(StrEnum):
    """The enrollment rules, in the order they are checked."""

    ALREADY_PASSED = "already_passed"
    PREREQUISITE = "prerequisite"
    EXAM_TIME_CONFLICT = "exam_time_conflict"
    DUPLICATE_COURSE = "duplicate_course"
    UNIT_LOAD = "unit_load"


class EnrollmentStatus(StrEnum):
    """Outcome of an enrollment request."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class EnrollmentRuleViolation:
    """A single failed enrollment rule.

    Attributes:
        rule: Which rule failed.
        message: Human-readable explanation.
    """

    rule: RuleKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class EnrollmentResult:
    """Decision returned by the enrollment engine.

    Attributes:
        status: ACCEPTED when the request was committed, REJECTED otherwise.
        violations: Failed rules in check order; empty when accepted.
        mode: Validation mode the decision was made under.
    """

    status: EnrollmentStatus
    violations: list[EnrollmentRuleViolation] = field(default_factory=list)
    mode: ValidationMode = ValidationMode.ACCUMULATE

    @classmethod
    def success(cls, mode: ValidationMode = ValidationMode.ACCUMULATE) -> EnrollmentResult:
        return cls(status=EnrollmentStatus.ACCEPTED, mode=mode)

    @classmethod
    def rejected_with(
        cls,
        violations: list[EnrollmentRuleViolation],
        mode: ValidationMode = ValidationMode.ACCUMULATE,
    ) -> EnrollmentResult:
        if not violations:
            raise ValueError("A rejected enrollment needs at least one violation")
        return cls(status=EnrollmentStatus.REJECTED, violations=list(violations), mode=mode)

    @property
    def accepted(self) -> bool:
        return self.status is EnrollmentStatus.ACCEPTED

    @property
    def rejected(self) -> bool:
        return self.status is EnrollmentStatus.REJECTED

    @property
    def messages(self) -> list[str]:
        return [violation.message for violation in self.violations]

    def raise_for_rejection(self) -> None:
        """Raise EnrollmentRejectedError if the request was rejected."""
        if self.rejected:
            raise EnrollmentRejectedError(self.violations)
