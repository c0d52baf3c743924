"""Database maintenance endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_admin
from diabfit.models import User
from diabfit.schemas.account import MaintenanceReport, VerificationReport
from diabfit.services.maintenance_service import MaintenanceService

router = APIRouter(prefix="/admin/maintenance", tags=["admin"])


@router.get("/verify", response_model=VerificationReport)
async def verify_database(
    user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Row counts, orphans, duplicate emails and unversioned analyses."""
    return MaintenanceService(db).verify()


@router.post("/run", response_model=MaintenanceReport)
async def run_maintenance(
    dry_run: bool = Query(True, description="Report without deleting"),
    user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return MaintenanceService(db).run_all(dry_run=dry_run)
