"""Glucose readings, summary and alerts."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import GlucoseReading, User
from diabfit.schemas.insights import GlucoseAlert, GlucoseSummary
from diabfit.schemas.records import (
    GlucoseReadingCreate,
    GlucoseReadingOut,
    GlucoseReadingUpdate,
)
from diabfit.services.glucose_service import GlucoseService, classify_level
from diabfit.api.v1.records import build_record_router

router = APIRouter()


def get_glucose_service(db: Session = Depends(get_db)) -> GlucoseService:
    return GlucoseService(db)


def reading_out(reading: GlucoseReading) -> GlucoseReadingOut:
    """Serialize a reading with its low/normal/high status."""
    out = GlucoseReadingOut.model_validate(reading)
    out.status = classify_level(reading.level).value
    return out


# Static paths go before the /{record_id} routes.
@router.get("/summary", response_model=GlucoseSummary)
async def get_glucose_summary(
    days: int = Query(30, ge=1, le=365),
    user: User = Depends(get_current_user),
    service: GlucoseService = Depends(get_glucose_service),
):
    """Statistics, time in range, trend, risk and recommendations."""
    return service.summarize(user.id, days=days)


@router.get("/alerts", response_model=List[GlucoseAlert])
async def get_glucose_alerts(
    days: int = Query(1, ge=1, le=30),
    user: User = Depends(get_current_user),
    service: GlucoseService = Depends(get_glucose_service),
):
    return service.alerts_for(user.id, days=days)


build_record_router(
    GlucoseReading,
    GlucoseReadingCreate,
    GlucoseReadingUpdate,
    GlucoseReadingOut,
    to_out=reading_out,
    router=router,
)
