"""Per-user key/value settings."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import User
from diabfit.schemas.account import SettingOut, SettingValue
from diabfit.services.preference_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


@router.get("", response_model=List[SettingOut])
async def list_settings(
    user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.get_all(user.id)


@router.get("/{key}", response_model=SettingOut)
async def get_setting(
    key: str,
    user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.get(user.id, key)


@router.put("/{key}", response_model=SettingOut)
async def put_setting(
    key: str,
    payload: SettingValue,
    user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Create or replace one setting."""
    return service.upsert(user.id, key, payload.value)


@router.delete("/{key}")
async def delete_setting(
    key: str,
    user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    service.delete(user.id, key)
    return {"success": True, "key": key}
