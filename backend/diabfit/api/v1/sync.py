"""Offline-first client sync."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import User
from diabfit.schemas.account import SyncPullResponse, SyncPushRequest, SyncPushResult
from diabfit.services.sync_service import SyncService

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/{entity}", response_model=SyncPushResult)
async def push_records(
    entity: str,
    payload: SyncPushRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Upsert a batch of client records keyed on their ids.

    Replaying the same batch updates rows instead of duplicating them.
    """
    return SyncService(db).push(user.id, entity, payload.records)


@router.get("/{entity}", response_model=SyncPullResponse)
async def pull_records(
    entity: str,
    since: Optional[datetime] = Query(None, description="Only rows changed after this"),
    limit: int = Query(500, ge=1, le=2000),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SyncService(db).pull(user.id, entity, since=since, limit=limit)
