"""
Settings, analytics, sync, launch and maintenance schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .common import ApiModel, OrmModel


# Settings
class SettingValue(BaseModel):
    value: Any = None


class SettingOut(OrmModel):
    setting_key: str
    setting_value: Any = None
    updated_at: datetime


# Analytics
class AnalyticsEventCreate(ApiModel):
    event_type: str = Field(..., min_length=1)
    event_data: Optional[Dict[str, Any]] = None
    session_id: Optional[str] = None


class AnalyticsEventOut(OrmModel):
    id: str
    event_type: str
    event_data: Optional[Dict[str, Any]] = None
    timestamp: datetime
    session_id: Optional[str] = None


# Sync
class SyncPushRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)


class SyncPushResult(BaseModel):
    entity: str
    inserted: int = 0
    updated: int = 0
    rejected: int = 0
    rejected_ids: List[str] = Field(default_factory=list)
    synced_at: datetime


class SyncPullResponse(BaseModel):
    entity: str
    since: Optional[datetime] = None
    count: int
    records: List[Dict[str, Any]]


# Launch
class LaunchScreen(str, Enum):
    SPLASH = "splash"
    MAIN = "main"
    BIOMETRIC_AUTH = "biometric_auth"
    LOGIN = "login"


class LaunchRequest(BaseModel):
    elapsed_seconds: float = Field(0.0, ge=0)
    is_authenticated: bool = False
    is_biometric_enabled: bool = False
    biometric_available: bool = False


class LaunchDecision(BaseModel):
    screen: LaunchScreen
    remaining_splash_seconds: float


# Maintenance
class MaintenanceReport(BaseModel):
    dry_run: bool
    duplicate_emails: int = 0
    duplicate_users_removed: int = 0
    orphans_removed: Dict[str, int] = Field(default_factory=dict)
    meal_analyses_backfilled: int = 0

    @property
    def total_orphans(self) -> int:
        return sum(self.orphans_removed.values())


class VerificationReport(BaseModel):
    table_counts: Dict[str, int]
    orphan_counts: Dict[str, int]
    duplicate_emails: int
    meal_analyses_missing_version: int
    healthy: bool
