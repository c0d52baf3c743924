"""Profile endpoints for the signed-in user."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import User
from diabfit.schemas.auth import UserProfile, UserProfileUpdate
from diabfit.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
async def get_my_profile(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserProfile)
async def update_my_profile(
    payload: UserProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update profile fields; omitted fields are left unchanged."""
    return UserService(db).update_profile(user.id, payload.model_dump(exclude_unset=True))
