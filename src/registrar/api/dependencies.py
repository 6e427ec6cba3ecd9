"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from registrar.enrollment import EnrollmentEngine, EnrollmentPolicy

# Global EnrollmentEngine instance (initialized on app startup)
_engine: EnrollmentEngine | None = None


def init_engine(policy: EnrollmentPolicy | None = None) -> EnrollmentEngine:
    """Initialize the global EnrollmentEngine instance."""
    global _engine  # noqa: PLW0603
    _engine = EnrollmentEngine(policy=policy)
    return _engine


def close_engine() -> None:
    """Drop the global EnrollmentEngine instance."""
    global _engine  # noqa: PLW0603
    _engine = None


def get_engine() -> Generator[EnrollmentEngine, None, None]:
    """Dependency that provides the EnrollmentEngine instance."""
    if _engine is None:
        raise RuntimeError("EnrollmentEngine not initialized. Call init_engine() first.")
    yield _engine


# Type alias for dependency injection
EngineDep = Annotated[EnrollmentEngine, Depends(get_engine)]
