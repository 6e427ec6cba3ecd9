"""Enrollment check endpoints."""

from fastapi import APIRouter

from registrar.api.dependencies import EngineDep
from registrar.api.models import (
    APIResponse,
    EnrollmentRequest,
    EnrollmentResponse,
    build_enrollment,
    enrollment_to_response,
)
from registrar.enrollment import EnrollmentResult

router = APIRouter(tags=["enrollments"])


@router.post(
    "/enrollments/check",
    response_model=APIResponse[EnrollmentResponse],
)
def check_enrollment(
    request: EnrollmentRequest, engine: EngineDep
) -> APIResponse[EnrollmentResponse]:
    """Check a student's requested offerings and register them if allowed.

    With ``commit`` false the rules run but nothing is registered.
    """
    student, offerings = build_enrollment(request)
    mode = request.mode or engine.mode

    if request.commit:
        result = engine.enroll(student, offerings, mode)
        committed = result.accepted
    else:
        violations = engine.validate(student, offerings, mode)
        if violations:
            result = EnrollmentResult.rejected_with(violations, mode)
        else:
            result = EnrollmentResult.success(mode)
        committed = False

    return APIResponse(data=enrollment_to_response(result, student, committed))
