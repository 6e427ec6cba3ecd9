"""Enrollment policy endpoints."""

from fastapi import APIRouter

from registrar.api.dependencies import EngineDep
from registrar.api.models import APIResponse, PolicyResponse, policy_to_response

router = APIRouter(tags=["policy"])


@router.get("/policy", response_model=APIResponse[PolicyResponse])
def get_policy(engine: EngineDep) -> APIResponse[PolicyResponse]:
    """Get the thresholds the enrollment rules are using."""
    return APIResponse(data=policy_to_response(engine.policy))
