"""Exceptions for the Enrollment module."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from registrar.enrollment.models import EnrollmentRuleViolation


class EnrollmentError(Exception):
    """Base exception for enrollment errors."""


class EnrollmentRejectedError(EnrollmentError):
    """An enrollment request broke one or more enrollment rules."""

    def __init__(self, violations: list[EnrollmentRuleViolation]) -> None:
        super().__init__("; ".join(v.message for v in violations))
        self.violations = list(violations)


class ConfigError(EnrollmentError):
    """Raised when the enrollment policy configuration is invalid or missing."""
