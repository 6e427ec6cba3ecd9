"""Enrollment policy thresholds and their YAML loader.

The unit-load rule allows at most FAILED_TERM_LIMIT_UNITS units below a GPA
of FAILED_TERM_GPA, at most NOT_GOOD_STUDENT_LIMIT_UNITS below
GOOD_STUDENT_GPA, and never more than UNCONDITIONAL_MAX_UNITS_LIMIT.
Grades are on a 0-20 scale.
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from registrar.enrollment.exceptions import ConfigError
from registrar.students.models import PASS_GRADE_THRESHOLD

FAILED_TERM_GPA = 12
FAILED_TERM_LIMIT_UNITS = 14
GOOD_STUDENT_GPA = 16
NOT_GOOD_STUDENT_LIMIT_UNITS = 16
UNCONDITIONAL_MAX_UNITS_LIMIT = 20

# GPA assumed for a student with no recorded grades.
NO_HISTORY_GPA = 0.0

POLICY_ENV_VAR = "REGISTRAR_POLICY"

__all__ = [
    "FAILED_TERM_GPA",
    "FAILED_TERM_LIMIT_UNITS",
    "GOOD_STUDENT_GPA",
    "NOT_GOOD_STUDENT_LIMIT_UNITS",
    "NO_HISTORY_GPA",
    "PASS_GRADE_THRESHOLD",
    "POLICY_ENV_VAR",
    "UNCONDITIONAL_MAX_UNITS_LIMIT",
    "EnrollmentPolicy",
    "load_policy",
    "policy_from_env",
]


@dataclass(frozen=True)
class EnrollmentPolicy:
    """Thresholds used by the enrollment rules."""

    pass_grade: float = PASS_GRADE_THRESHOLD
    failed_term_gpa: float = FAILED_TERM_GPA
    failed_term_limit_units: int = FAILED_TERM_LIMIT_UNITS
    good_student_gpa: float = GOOD_STUDENT_GPA
    not_good_student_limit_units: int = NOT_GOOD_STUDENT_LIMIT_UNITS
    unconditional_max_units_limit: int = UNCONDITIONAL_MAX_UNITS_LIMIT
    no_history_gpa: float = NO_HISTORY_GPA

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnrollmentPolicy:
        """Create a policy from a dictionary, keeping defaults for missing keys.

        Args:
            data: Threshold values keyed by field name.

        Returns:
            Parsed policy.

        Raises:
            ConfigError: If a key is unknown or a value is not a
                finite, non-negative number.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown policy fields: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for name, value in data.items():
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ConfigError(f"Policy field '{name}' must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"Policy field '{name}' must be a finite number, got {value}")
            if value < 0:
                raise ConfigError(f"Policy field '{name}' must not be negative, got {value}")
            if known[name].type == "int":
                if value != int(value):
                    raise ConfigError(f"Policy field '{name}' must be a whole number, got {value}")
                value = int(value)
            values[name] = value

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def exceeds_unit_limit(self, units: int, gpa: float) -> bool:
        """Check whether a unit load is too heavy for the given GPA."""
        return (
            (gpa < self.failed_term_gpa and units > self.failed_term_limit_units)
            or (gpa < self.good_student_gpa and units > self.not_good_student_limit_units)
            or units > self.unconditional_max_units_limit
        )


def load_policy(policy_path: Path | str) -> EnrollmentPolicy:
    """Load an enrollment policy from a YAML file.

    Thresholds may sit at the top level or under a ``policy`` key.

    Args:
        policy_path: Path to the YAML file.

    Returns:
        Parsed policy.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    policy_path = Path(policy_path)

    if not policy_path.exists():
        raise ConfigError(f"Policy file not found: {policy_path}")

    try:
        with open(policy_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {policy_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Policy must be a YAML mapping, got {type(data).__name__}")

    if "policy" in data:
        data = data["policy"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"'policy' must be a YAML mapping, got {type(data).__name__}")

    return EnrollmentPolicy.from_dict(data)


def policy_from_env() -> EnrollmentPolicy:
    """Load the policy named by REGISTRAR_POLICY, or the defaults if unset."""
    policy_path = os.environ.get(POLICY_ENV_VAR)
    if not policy_path:
        return EnrollmentPolicy()
    return load_policy(policy_path)
