"""Enrollment package - Rule checking and registration decisions."""

from registrar.enrollment.engine import EnrollmentEngine
from registrar.enrollment.exceptions import (
    ConfigError,
    EnrollmentError,
    EnrollmentRejectedError,
)
from registrar.enrollment.models import (
    EnrollmentResult,
    EnrollmentRuleViolation,
    EnrollmentStatus,
    RuleKind,
    ValidationMode,
)
from registrar.enrollment.policy import EnrollmentPolicy, load_policy, policy_from_env

__all__ = [
    "ConfigError",
    "EnrollmentEngine",
    "EnrollmentError",
    "EnrollmentPolicy",
    "EnrollmentRejectedError",
    "EnrollmentResult",
    "EnrollmentRuleViolation",
    "EnrollmentStatus",
    "RuleKind",
    "ValidationMode",
    "load_policy",
    "policy_from_env",
]
