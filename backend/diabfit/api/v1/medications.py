"""Medications, dose tracking and adherence."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import Medication, User
from diabfit.schemas.insights import (
    AdherencePeriod,
    AdherenceReport,
    DoseCreate,
    DoseGenerationRequest,
    DoseGenerationResult,
    DoseOut,
    DoseUpdate,
    OverallAdherence,
)
from diabfit.schemas.records import MedicationCreate, MedicationOut, MedicationUpdate
from diabfit.services.medication_service import MedicationService
from diabfit.api.v1.records import build_record_router

router = APIRouter()


def get_medication_service(db: Session = Depends(get_db)) -> MedicationService:
    return MedicationService(db)


# ============================================================
# ADHERENCE & DOSES (static paths before /{record_id})
# ============================================================


@router.get("/adherence", response_model=OverallAdherence)
async def get_overall_adherence(
    period: AdherencePeriod = Query(AdherencePeriod.WEEK),
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    """Mean adherence across active medications."""
    return service.overall_adherence(user.id, period)


@router.post("/doses/mark-missed")
async def mark_missed_doses(
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    """Flip overdue scheduled doses to missed."""
    changed = service.mark_missed_doses(user.id)
    return {"success": True, "updated": changed}


@router.patch("/doses/{dose_id}", response_model=DoseOut)
async def update_dose(
    dose_id: str,
    payload: DoseUpdate,
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    """Record a dose as taken, skipped or missed."""
    return service.record_dose(
        user.id,
        dose_id,
        payload.status,
        taken_time=payload.taken_time,
        notes=payload.notes,
    )


@router.post(
    "/{medication_id}/doses",
    response_model=DoseOut,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_dose(
    medication_id: str,
    payload: DoseCreate,
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    return service.schedule_dose(
        user.id, medication_id, payload.scheduled_time, notes=payload.notes
    )


@router.post("/{medication_id}/doses/generate", response_model=DoseGenerationResult)
async def generate_doses(
    medication_id: str,
    payload: Optional[DoseGenerationRequest] = None,
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    """
    Fill in scheduled doses from the medication's reminder times.

    Safe to call repeatedly; doses that already exist are left alone.
    """
    payload = payload or DoseGenerationRequest()
    doses = service.generate_doses(user.id, medication_id, start=payload.start, end=payload.end)
    return DoseGenerationResult(
        medication_id=medication_id,
        created=len(doses),
        doses=[DoseOut.model_validate(dose) for dose in doses],
    )


@router.get("/{medication_id}/doses", response_model=List[DoseOut])
async def list_doses(
    medication_id: str,
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    return service.list_doses(user.id, medication_id, start=start, end=end)


@router.get("/{medication_id}/adherence", response_model=AdherenceReport)
async def get_adherence(
    medication_id: str,
    period: AdherencePeriod = Query(AdherencePeriod.WEEK),
    user: User = Depends(get_current_user),
    service: MedicationService = Depends(get_medication_service),
):
    return service.adherence_report(user.id, medication_id, period)


# ============================================================
# MEDICATION CRUD
# ============================================================

build_record_router(
    Medication,
    MedicationCreate,
    MedicationUpdate,
    MedicationOut,
    order_by="created_at",
    router=router,
)
