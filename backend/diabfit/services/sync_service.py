"""
Client sync: batch upserts keyed on client-generated ids.

A record whose id is already stored for the caller is updated in place, so
replaying a batch never creates duplicates. An id that belongs to another
user is rejected.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models import Exercise, GlucoseReading, HealthMetric, Meal, MealAnalysis
from ..models.base import new_id
from ..schemas.account import SyncPullResponse, SyncPushResult
from ..schemas.records import (
    ExerciseCreate,
    ExerciseOut,
    GlucoseReadingCreate,
    GlucoseReadingOut,
    HealthMetricCreate,
    HealthMetricOut,
    MealAnalysisCreate,
    MealAnalysisOut,
    MealCreate,
    MealOut,
)
from ..utils.time_utils import to_naive_utc, utcnow

logger = logging.getLogger(__name__)

SYNC_ENTITIES = {
    "meals": (Meal, MealCreate, MealOut),
    "glucose_readings": (GlucoseReading, GlucoseReadingCreate, GlucoseReadingOut),
    "exercises": (Exercise, ExerciseCreate, ExerciseOut),
    "health_metrics": (HealthMetric, HealthMetricCreate, HealthMetricOut),
    "meal_analyses": (MealAnalysis, MealAnalysisCreate, MealAnalysisOut),
}


class SyncService:
    """Push/pull of offline-first client data."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    @staticmethod
    def _entity(entity: str):
        try:
            return SYNC_ENTITIES[entity]
        except KeyError:
            raise NotFoundError(f"Unknown sync entity '{entity}'") from None

    def push(self, user_id: str, entity: str, records: List[Dict[str, Any]]) -> SyncPushResult:
        model, create_schema, _ = self._entity(entity)
        now = utcnow()
        result = SyncPushResult(entity=entity, synced_at=now)

        for raw in records:
            record_id = str(raw.get("id") or new_id())
            try:
                values = create_schema(**raw).model_dump()
            except ValidationError as exc:
                logger.warning(f"Rejected {entity} record {record_id}: {exc.error_count()} errors")
                result.rejected += 1
                result.rejected_ids.append(record_id)
                continue

            existing = self.db.get(model, record_id)
            if existing is not None and existing.user_id != user_id:
                logger.warning(f"Rejected {entity} record {record_id}: owned by another user")
                result.rejected += 1
                result.rejected_ids.append(record_id)
                continue

            if existing is None:
                row = model(id=record_id, user_id=user_id, **values)
                self.db.add(row)
                result.inserted += 1
            else:
                row = existing
                for key, value in values.items():
                    setattr(row, key, value)
                row.updated_at = now
                result.updated += 1

            row.is_deleted = bool(raw.get("is_deleted", False))
            row.last_synced_at = now
            # Flush so a repeated id later in the same batch is seen as existing.
            self.db.flush()

        self.db.commit()
        logger.info(
            f"Sync push {entity} for user {user_id}: "
            f"{result.inserted} inserted, {result.updated} updated, {result.rejected} rejected"
        )
        return result

    def pull(
        self, user_id: str, entity: str, since: Optional[datetime] = None, limit: int = 500
    ) -> SyncPullResponse:
        """Rows changed after ``since``, soft-deleted ones included."""
        model, _, out_schema = self._entity(entity)
        since = to_naive_utc(since)
        query = self.db.query(model).filter(model.user_id == user_id)
        if since is not None:
            query = query.filter(model.updated_at > since)
        rows = query.order_by(model.updated_at.asc()).limit(limit).all()
        records = [out_schema.model_validate(row).model_dump(mode="json") for row in rows]
        return SyncPullResponse(entity=entity, since=since, count=len(records), records=records)
