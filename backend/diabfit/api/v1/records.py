"""
Owner-scoped CRUD endpoints for the tracking tables.

Each table gets the same five routes; the caller only ever sees rows whose
user_id is their own profile id.
"""

from datetime import datetime
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import Exercise, HealthMetric, Meal, MealAnalysis, User
from diabfit.schemas.common import DeleteResponse
from diabfit.schemas.records import (
    ExerciseCreate,
    ExerciseOut,
    ExerciseUpdate,
    HealthMetricCreate,
    HealthMetricOut,
    HealthMetricUpdate,
    MealAnalysisCreate,
    MealAnalysisOut,
    MealAnalysisUpdate,
    MealCreate,
    MealOut,
    MealUpdate,
)
from diabfit.services.record_service import OwnedRecordService


def build_record_router(
    model,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
    order_by: str = "timestamp",
    to_out: Optional[Callable] = None,
    router: Optional[APIRouter] = None,
) -> APIRouter:
    """
    List/create/get/update/delete routes for one user-owned model.

    Pass ``router`` to add the routes after paths already defined on it.
    """
    if router is None:
        router = APIRouter()
    serialize = to_out or out_schema.model_validate

    def get_service(db: Session = Depends(get_db)) -> OwnedRecordService:
        return OwnedRecordService(db, model, order_by=order_by)

    @router.get("", response_model=List[out_schema])
    async def list_records(
        start: Optional[datetime] = Query(None, description="Earliest timestamp"),
        end: Optional[datetime] = Query(None, description="Latest timestamp"),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        user: User = Depends(get_current_user),
        service: OwnedRecordService = Depends(get_service),
    ):
        records = service.list(user.id, start=start, end=end, limit=limit, offset=offset)
        return [serialize(r) for r in records]

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: create_schema,
        user: User = Depends(get_current_user),
        service: OwnedRecordService = Depends(get_service),
    ):
        return serialize(service.create(user.id, payload.model_dump()))

    @router.get("/{record_id}", response_model=out_schema)
    async def get_record(
        record_id: str,
        user: User = Depends(get_current_user),
        service: OwnedRecordService = Depends(get_service),
    ):
        return serialize(service.get(user.id, record_id))

    @router.patch("/{record_id}", response_model=out_schema)
    async def update_record(
        record_id: str,
        payload: update_schema,
        user: User = Depends(get_current_user),
        service: OwnedRecordService = Depends(get_service),
    ):
        data = payload.model_dump(exclude_unset=True)
        return serialize(service.update(user.id, record_id, data))

    @router.delete("/{record_id}", response_model=DeleteResponse)
    async def delete_record(
        record_id: str,
        user: User = Depends(get_current_user),
        service: OwnedRecordService = Depends(get_service),
    ):
        service.delete(user.id, record_id)
        return DeleteResponse(id=record_id)

    return router


meals_router = build_record_router(Meal, MealCreate, MealUpdate, MealOut)
exercises_router = build_record_router(Exercise, ExerciseCreate, ExerciseUpdate, ExerciseOut)
health_metrics_router = build_record_router(
    HealthMetric, HealthMetricCreate, HealthMetricUpdate, HealthMetricOut
)
meal_analyses_router = build_record_router(
    MealAnalysis, MealAnalysisCreate, MealAnalysisUpdate, MealAnalysisOut
)
