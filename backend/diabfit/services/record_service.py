"""Owner-scoped CRUD shared by the tracking tables."""

import logging
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..utils.time_utils import to_naive_utc, utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Columns callers can never set through create/update payloads.
PROTECTED_FIELDS = {"id", "user_id", "created_at", "updated_at", "is_deleted"}


class OwnedRecordService(Generic[ModelT]):
    """
    CRUD for a table whose rows belong to a user.

    Every read and write is filtered on the caller's user_id, so a row owned
    by another user behaves exactly like a missing row. Deletes are soft.
    """

    def __init__(self, db: Session, model: Type[ModelT], order_by: str = "timestamp"):
        self.db = db
        self.model = model
        column = getattr(model, order_by, None)
        self.order_column = column if column is not None else model.created_at

    @property
    def entity_name(self) -> str:
        return self.model.__tablename__

    def query(self, user_id: str, include_deleted: bool = False):
        """The caller's rows, soft-deleted ones excluded unless asked for."""
        query = self.db.query(self.model).filter(self.model.user_id == user_id)
        if not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def list(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ModelT]:
        start, end = to_naive_utc(start), to_naive_utc(end)
        query = self.query(user_id)
        if start is not None:
            query = query.filter(self.order_column >= start)
        if end is not None:
            query = query.filter(self.order_column <= end)
        return query.order_by(desc(self.order_column)).offset(offset).limit(limit).all()

    def get(self, user_id: str, record_id: str) -> ModelT:
        record = self.query(user_id).filter(self.model.id == record_id).first()
        if record is None:
            raise NotFoundError(f"{self.entity_name} record not found")
        return record

    def create(self, user_id: str, data: Dict[str, Any]) -> ModelT:
        values = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        record = self.model(user_id=user_id, **values)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.debug(f"Created {self.entity_name} {record.id} for user {user_id}")
        return record

    def update(self, user_id: str, record_id: str, data: Dict[str, Any]) -> ModelT:
        record = self.get(user_id, record_id)
        for key, value in data.items():
            if key in PROTECTED_FIELDS or not hasattr(self.model, key):
                continue
            setattr(record, key, value)
        record.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, user_id: str, record_id: str) -> ModelT:
        record = self.get(user_id, record_id)
        record.is_deleted = True
        record.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(record)
        logger.debug(f"Soft-deleted {self.entity_name} {record_id}")
        return record
