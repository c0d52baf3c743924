"""App analytics events."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import User
from diabfit.schemas.account import AnalyticsEventCreate, AnalyticsEventOut
from diabfit.services.preference_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post(
    "/events", response_model=AnalyticsEventOut, status_code=status.HTTP_201_CREATED
)
async def log_event(
    payload: AnalyticsEventCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AnalyticsService(db).log_event(
        user.id, payload.event_type, payload.event_data, payload.session_id
    )


@router.get("/events", response_model=List[AnalyticsEventOut])
async def list_events(
    event_type: Optional[str] = Query(None, description="Filter by event type"),
    limit: int = Query(100, ge=1, le=500),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AnalyticsService(db).list_events(user.id, event_type=event_type, limit=limit)
