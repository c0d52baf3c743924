"""Declarative base and shared column mixins."""

import uuid

from sqlalchemy import Boolean, Column, DateTime
from sqlalchemy.orm import declarative_base

from ..utils.time_utils import utcnow

Base = declarative_base()


def new_id() -> str:
    """Primary keys are UUID4 strings."""
    return str(uuid.uuid4())


class TimestampMixin:
    """created_at / updated_at maintained by the ORM."""

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class SyncMixin:
    """Columns the mobile client uses to mirror rows offline."""

    last_synced_at = Column(DateTime, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
