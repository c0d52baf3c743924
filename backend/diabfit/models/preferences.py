"""Per-user settings and anonymized app analytics."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..utils.time_utils import utcnow
from .base import Base, TimestampMixin, new_id


class UserSetting(Base, TimestampMixin):
    """Key/value setting; one row per (user, key)."""

    __tablename__ = "user_settings"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    setting_key = Column(String, nullable=False)
    setting_value = Column(JSON, nullable=True)

    user = relationship("User", back_populates="settings")

    __table_args__ = (
        UniqueConstraint("user_id", "setting_key", name="uq_user_settings_user_key"),
        Index("idx_user_settings_user_id", "user_id"),
    )


class AppAnalyticsEvent(Base):
    """Client analytics event."""

    __tablename__ = "app_analytics"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    event_type = Column(String, nullable=False)
    event_data = Column(JSON, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utcnow)
    session_id = Column(String, nullable=True)

    user = relationship("User", back_populates="analytics_events")

    __table_args__ = (
        Index("idx_app_analytics_user_id", "user_id"),
        Index("idx_app_analytics_timestamp", "timestamp"),
    )
