"""Launch screen gating."""

from fastapi import APIRouter

from diabfit.schemas.account import LaunchDecision, LaunchRequest
from diabfit.services.launch_service import LaunchService

router = APIRouter(prefix="/launch", tags=["launch"])


@router.post("", response_model=LaunchDecision)
async def resolve_launch_screen(payload: LaunchRequest):
    """Which screen to show given the time since launch and the auth flags."""
    return LaunchService().resolve_screen(
        payload.elapsed_seconds,
        payload.is_authenticated,
        payload.is_biometric_enabled,
        payload.biometric_available,
    )
