"""
Workout program schemas: catalog reads, enrollments, logged sessions and
achievements.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .common import ApiModel, OrmModel


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkoutSessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


# ============================================================
# CATALOG
# ============================================================


class ExerciseLibraryOut(OrmModel):
    id: str
    name: str
    category: str
    subcategory: Optional[str] = None
    difficulty_level: str
    equipment_needed: Optional[List[str]] = None
    muscle_groups: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    safety_tips: Optional[List[str]] = None
    modifications: Optional[List[str]] = None
    diabetes_benefits: Optional[List[str]] = None
    glp1_considerations: Optional[List[str]] = None
    contraindications: Optional[List[str]] = None
    calories_per_minute: Optional[float] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class SessionExerciseOut(OrmModel):
    id: str
    order_in_session: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    rest_seconds: int
    intensity_percentage: Optional[int] = None
    notes: Optional[str] = None
    is_optional: bool = False
    exercise: ExerciseLibraryOut


class WorkoutSessionOut(OrmModel):
    id: str
    session_number: int
    week_number: int
    day_number: int
    name: str
    description: Optional[str] = None
    warm_up_duration: int
    cool_down_duration: int
    total_duration: int
    intensity_level: Optional[str] = None
    focus_areas: Optional[List[str]] = None
    exercises: List[SessionExerciseOut] = []


class WorkoutPlanOut(OrmModel):
    id: str
    name: str
    description: Optional[str] = None
    target_condition: str
    fitness_level: str
    duration_weeks: int
    sessions_per_week: int
    session_duration_minutes: int
    total_sessions: int
    equipment_needed: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    precautions: Optional[List[str]] = None
    image_url: Optional[str] = None


class WorkoutPlanDetail(WorkoutPlanOut):
    sessions: List[WorkoutSessionOut] = []


class AchievementOut(OrmModel):
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    category: Optional[str] = None
    condition_type: str
    criteria: Dict[str, Any]
    reward_points: int


# ============================================================
# USER PROGRESS
# ============================================================


class EnrollmentCreate(ApiModel):
    workout_plan_id: str
    start_date: Optional[date] = None
    notes: Optional[str] = None


class EnrollmentUpdate(ApiModel):
    status: Optional[EnrollmentStatus] = None
    notes: Optional[str] = None


class EnrollmentOut(OrmModel):
    id: str
    workout_plan_id: str
    start_date: date
    target_end_date: Optional[date] = None
    current_week: int
    current_session: int
    status: EnrollmentStatus
    progress_percentage: float
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ExercisePerformanceCreate(ApiModel):
    exercise_id: str
    sets_completed: Optional[int] = Field(None, ge=0)
    reps_completed: Optional[int] = Field(None, ge=0)
    duration_completed_seconds: Optional[int] = Field(None, ge=0)
    weight_used: Optional[float] = Field(None, ge=0)
    difficulty_rating: Optional[int] = Field(None, ge=1, le=5)
    form_rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class ExercisePerformanceOut(OrmModel):
    id: str
    exercise_id: str
    sets_completed: Optional[int] = None
    reps_completed: Optional[int] = None
    duration_completed_seconds: Optional[int] = None
    weight_used: Optional[float] = None
    difficulty_rating: Optional[int] = None
    form_rating: Optional[int] = None
    notes: Optional[str] = None


class WorkoutLogCreate(ApiModel):
    workout_session_id: Optional[str] = None
    status: WorkoutSessionStatus = WorkoutSessionStatus.COMPLETED
    completed_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[int] = Field(None, ge=0)
    perceived_exertion: Optional[int] = Field(None, ge=1, le=10)
    glucose_before: Optional[int] = Field(None, gt=0)
    glucose_after: Optional[int] = Field(None, gt=0)
    mood_before: Optional[str] = None
    mood_after: Optional[str] = None
    notes: Optional[str] = None
    performances: List[ExercisePerformanceCreate] = []


class WorkoutLogOut(OrmModel):
    id: str
    user_workout_plan_id: Optional[str] = None
    workout_session_id: Optional[str] = None
    status: WorkoutSessionStatus
    completed_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    calories_burned: Optional[int] = None
    perceived_exertion: Optional[int] = None
    glucose_before: Optional[int] = None
    glucose_after: Optional[int] = None
    mood_before: Optional[str] = None
    mood_after: Optional[str] = None
    notes: Optional[str] = None
    performances: List[ExercisePerformanceOut] = []
    created_at: datetime


class UserAchievementOut(OrmModel):
    id: str
    earned_at: datetime
    progress_data: Optional[Dict[str, Any]] = None
    achievement: AchievementOut


class WorkoutLogResult(BaseModel):
    session: WorkoutLogOut
    enrollment: Optional[EnrollmentOut] = None
    new_achievements: List[UserAchievementOut] = []


class WorkoutProgress(BaseModel):
    sessions_completed: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    average_glucose_change: Optional[float] = Field(
        None, description="Mean of glucose_after - glucose_before where both were recorded"
    )
    active_enrollments: int = 0
    achievement_points: int = 0
