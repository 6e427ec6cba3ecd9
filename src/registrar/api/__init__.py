"""REST API for Registrar."""

from registrar.api.app import app, create_app
from registrar.api.models import (
    APIResponse,
    EnrollmentRequest,
    EnrollmentResponse,
    PolicyResponse,
)

__all__ = [
    "APIResponse",
    "EnrollmentRequest",
    "EnrollmentResponse",
    "PolicyResponse",
    "app",
    "create_app",
]
