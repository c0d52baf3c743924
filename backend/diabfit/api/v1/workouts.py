"""
Workout programs.

The catalog (plans, exercises, achievements) is public and read-only.
Enrollments, logged sessions and earned achievements need a signed-in user.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from diabfit.core.database import get_db
from diabfit.core.dependencies import get_current_user
from diabfit.models import User
from diabfit.schemas.workouts import (
    AchievementOut,
    EnrollmentCreate,
    EnrollmentOut,
    EnrollmentStatus,
    EnrollmentUpdate,
    ExerciseLibraryOut,
    UserAchievementOut,
    WorkoutLogCreate,
    WorkoutLogOut,
    WorkoutLogResult,
    WorkoutPlanDetail,
    WorkoutPlanOut,
    WorkoutProgress,
)
from diabfit.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_workout_service(db: Session = Depends(get_db)) -> WorkoutService:
    return WorkoutService(db)


def _log_result(session, enrollment, achievements) -> WorkoutLogResult:
    return WorkoutLogResult(
        session=WorkoutLogOut.model_validate(session),
        enrollment=EnrollmentOut.model_validate(enrollment) if enrollment else None,
        new_achievements=[UserAchievementOut.model_validate(a) for a in achievements],
    )


# ============================================================
# CATALOG
# ============================================================


@router.get("/plans", response_model=List[WorkoutPlanOut])
async def list_plans(
    target_condition: Optional[str] = Query(None, description="e.g. type2_diabetes, glp1_users"),
    fitness_level: Optional[str] = Query(None, description="beginner, intermediate, advanced, athlete"),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.list_plans(target_condition=target_condition, fitness_level=fitness_level)


@router.get("/plans/{plan_id}", response_model=WorkoutPlanDetail)
async def get_plan(plan_id: str, service: WorkoutService = Depends(get_workout_service)):
    """Plan with its sessions and each session's exercises."""
    return service.get_plan(plan_id)


@router.get("/exercises", response_model=List[ExerciseLibraryOut])
async def list_exercises(
    category: Optional[str] = Query(None),
    difficulty_level: Optional[str] = Query(None),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.list_exercises(category=category, difficulty_level=difficulty_level)


@router.get("/exercises/{exercise_id}", response_model=ExerciseLibraryOut)
async def get_exercise(exercise_id: str, service: WorkoutService = Depends(get_workout_service)):
    return service.get_exercise(exercise_id)


@router.get("/achievements", response_model=List[AchievementOut])
async def list_achievements(service: WorkoutService = Depends(get_workout_service)):
    return service.list_achievements()


# ============================================================
# ENROLLMENTS
# ============================================================


@router.get("/enrollments", response_model=List[EnrollmentOut])
async def list_enrollments(
    status_filter: Optional[EnrollmentStatus] = Query(None, alias="status"),
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.list_enrollments(user.id, status=status_filter)


@router.post("/enrollments", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
async def enroll(
    payload: EnrollmentCreate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.enroll(
        user.id, payload.workout_plan_id, start_date=payload.start_date, notes=payload.notes
    )


@router.get("/enrollments/{enrollment_id}", response_model=EnrollmentOut)
async def get_enrollment(
    enrollment_id: str,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.enrollments.get(user.id, enrollment_id)


@router.patch("/enrollments/{enrollment_id}", response_model=EnrollmentOut)
async def update_enrollment(
    enrollment_id: str,
    payload: EnrollmentUpdate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Pause, resume or cancel an enrollment."""
    return service.update_enrollment(
        user.id, enrollment_id, payload.model_dump(exclude_unset=True)
    )


@router.post(
    "/enrollments/{enrollment_id}/sessions",
    response_model=WorkoutLogResult,
    status_code=status.HTTP_201_CREATED,
)
async def log_enrolled_workout(
    enrollment_id: str,
    payload: WorkoutLogCreate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Log a session of an enrolled plan and advance its progress."""
    return _log_result(*service.log_workout(user.id, payload, enrollment_id=enrollment_id))


# ============================================================
# LOGGED SESSIONS & PROGRESS
# ============================================================


@router.post("/sessions", response_model=WorkoutLogResult, status_code=status.HTTP_201_CREATED)
async def log_workout(
    payload: WorkoutLogCreate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return _log_result(*service.log_workout(user.id, payload))


@router.get("/sessions", response_model=List[WorkoutLogOut])
async def list_sessions(
    start: Optional[datetime] = Query(None, description="Earliest completion time"),
    end: Optional[datetime] = Query(None, description="Latest completion time"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.list_logs(user.id, start=start, end=end, limit=limit, offset=offset)


@router.get("/me/achievements", response_model=List[UserAchievementOut])
async def list_my_achievements(
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.list_user_achievements(user.id)


@router.get("/progress", response_model=WorkoutProgress)
async def get_progress(
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Totals across completed sessions plus earned achievement points."""
    return service.progress(user.id)
