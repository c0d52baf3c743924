"""User settings and analytics events."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models import AppAnalyticsEvent, UserSetting
from ..utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class SettingsService:
    """Key/value settings, one row per (user, key)."""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str, key: str) -> Optional[UserSetting]:
        return (
            self.db.query(UserSetting)
            .filter(UserSetting.user_id == user_id, UserSetting.setting_key == key)
            .first()
        )

    def get_all(self, user_id: str) -> List[UserSetting]:
        return (
            self.db.query(UserSetting)
            .filter(UserSetting.user_id == user_id)
            .order_by(UserSetting.setting_key.asc())
            .all()
        )

    def get(self, user_id: str, key: str) -> UserSetting:
        setting = self._find(user_id, key)
        if setting is None:
            raise NotFoundError(f"Setting '{key}' not found")
        return setting

    def upsert(self, user_id: str, key: str, value: Any) -> UserSetting:
        setting = self._find(user_id, key)
        if setting is None:
            setting = UserSetting(user_id=user_id, setting_key=key, setting_value=value)
            self.db.add(setting)
        else:
            setting.setting_value = value
            setting.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(setting)
        return setting

    def delete(self, user_id: str, key: str) -> None:
        setting = self.get(user_id, key)
        self.db.delete(setting)
        self.db.commit()


class AnalyticsService:
    """Append-only app analytics events."""

    def __init__(self, db: Session):
        self.db = db

    def log_event(
        self,
        user_id: str,
        event_type: str,
        event_data: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
    ) -> AppAnalyticsEvent:
        event = AppAnalyticsEvent(
            user_id=user_id,
            event_type=event_type,
            event_data=event_data,
            session_id=session_id,
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        return event

    def list_events(
        self, user_id: str, event_type: Optional[str] = None, limit: int = 100
    ) -> List[AppAnalyticsEvent]:
        query = self.db.query(AppAnalyticsEvent).filter(AppAnalyticsEvent.user_id == user_id)
        if event_type:
            query = query.filter(AppAnalyticsEvent.event_type == event_type)
        return query.order_by(desc(AppAnalyticsEvent.timestamp)).limit(limit).all()
