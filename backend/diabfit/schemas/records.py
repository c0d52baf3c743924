"""
Request/response schemas for user-owned tracking records.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from ..utils.time_utils import normalize_reminder_times
from .common import ApiModel, OrmModel


class RecordOut(OrmModel):
    id: str
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    last_synced_at: Optional[datetime] = None
    is_deleted: bool = False


# ============================================================
# MEALS
# ============================================================


class MealCreate(ApiModel):
    name: str = Field(..., min_length=1)
    meal_type: Optional[str] = None
    carbs: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    calories: int = Field(0, ge=0)
    timestamp: datetime
    notes: Optional[str] = None


class MealUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1)
    meal_type: Optional[str] = None
    carbs: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    calories: Optional[int] = Field(None, ge=0)
    timestamp: Optional[datetime] = None
    notes: Optional[str] = None


class MealOut(RecordOut):
    name: str
    meal_type: Optional[str] = None
    carbs: float
    protein: float
    calories: int
    timestamp: datetime
    notes: Optional[str] = None


# ============================================================
# GLUCOSE
# ============================================================


class GlucoseReadingCreate(ApiModel):
    level: int = Field(..., gt=0, le=1000, description="mg/dL")
    timestamp: datetime
    notes: Optional[str] = None


class GlucoseReadingUpdate(ApiModel):
    level: Optional[int] = Field(None, gt=0, le=1000)
    timestamp: Optional[datetime] = None
    notes: Optional[str] = None


class GlucoseReadingOut(RecordOut):
    level: int
    timestamp: datetime
    notes: Optional[str] = None
    status: Optional[str] = None


# ============================================================
# EXERCISE
# ============================================================


class ExerciseCreate(ApiModel):
    type: str = Field(..., min_length=1)
    duration: int = Field(..., ge=0, description="minutes")
    intensity: Optional[str] = None
    timestamp: datetime
    notes: Optional[str] = None


class ExerciseUpdate(ApiModel):
    type: Optional[str] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, ge=0)
    intensity: Optional[str] = None
    timestamp: Optional[datetime] = None
    notes: Optional[str] = None


class ExerciseOut(RecordOut):
    type: str
    duration: int
    intensity: Optional[str] = None
    timestamp: datetime
    notes: Optional[str] = None


# ============================================================
# HEALTH METRICS
# ============================================================


class HealthMetricCreate(ApiModel):
    systolic_bp: Optional[int] = Field(None, gt=0)
    diastolic_bp: Optional[int] = Field(None, gt=0)
    heart_rate: Optional[int] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    temperature: Optional[float] = None
    timestamp: datetime


class HealthMetricUpdate(ApiModel):
    systolic_bp: Optional[int] = Field(None, gt=0)
    diastolic_bp: Optional[int] = Field(None, gt=0)
    heart_rate: Optional[int] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    temperature: Optional[float] = None
    timestamp: Optional[datetime] = None


class HealthMetricOut(RecordOut):
    systolic_bp: Optional[int] = None
    diastolic_bp: Optional[int] = None
    heart_rate: Optional[int] = None
    weight: Optional[float] = None
    temperature: Optional[float] = None
    timestamp: datetime


# ============================================================
# MEAL ANALYSES
# ============================================================


class MealAnalysisCreate(ApiModel):
    meal_name: str = Field("Unknown Meal", min_length=1)
    analysis_data: Optional[Dict[str, Any]] = None
    recommendations: Optional[List[Any]] = None
    nutritional_score: float = 0.0
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    total_calories: int = Field(0, ge=0)
    carbohydrates: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    glycemic_index: int = Field(0, ge=0)
    glp1_compatibility_score: float = 0.0
    overall_health_score: float = 0.0
    primary_dish: Optional[str] = None
    key_recommendations: Optional[str] = None
    warnings: Optional[str] = None
    analysis_version: str = "1.0"
    image_url: Optional[str] = None
    user_rating: Optional[int] = Field(None, ge=1, le=5)
    user_notes: Optional[str] = None
    is_favorite: bool = False
    timestamp: datetime


class MealAnalysisUpdate(ApiModel):
    meal_name: Optional[str] = Field(None, min_length=1)
    user_rating: Optional[int] = Field(None, ge=1, le=5)
    user_notes: Optional[str] = None
    is_favorite: Optional[bool] = None
    key_recommendations: Optional[str] = None
    warnings: Optional[str] = None


class MealAnalysisOut(RecordOut):
    meal_name: str
    analysis_data: Optional[Dict[str, Any]] = None
    recommendations: Optional[List[Any]] = None
    nutritional_score: Optional[float] = None
    confidence: Optional[float] = None
    total_calories: Optional[int] = None
    carbohydrates: Optional[float] = None
    protein: Optional[float] = None
    fat: Optional[float] = None
    glycemic_index: Optional[int] = None
    glp1_compatibility_score: Optional[float] = None
    overall_health_score: Optional[float] = None
    primary_dish: Optional[str] = None
    key_recommendations: Optional[str] = None
    warnings: Optional[str] = None
    analysis_version: Optional[str] = None
    image_url: Optional[str] = None
    user_rating: Optional[int] = None
    user_notes: Optional[str] = None
    is_favorite: Optional[bool] = None
    timestamp: datetime


# ============================================================
# MEDICATIONS
# ============================================================


class MedicationCreate(ApiModel):
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    medication_type: Optional[str] = None
    instructions: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True
    reminder_times: List[str] = Field(default_factory=list, description="Daily HH:MM times")

    @field_validator("reminder_times")
    @classmethod
    def check_reminder_times(cls, v: List[str]) -> List[str]:
        return normalize_reminder_times(v)


class MedicationUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    medication_type: Optional[str] = None
    instructions: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
    reminder_times: Optional[List[str]] = None

    @field_validator("reminder_times")
    @classmethod
    def check_reminder_times(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else normalize_reminder_times(v)


class MedicationOut(RecordOut):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    medication_type: Optional[str] = None
    instructions: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool
    reminder_times: List[str] = []

    @field_validator("reminder_times", mode="before")
    @classmethod
    def default_reminder_times(cls, v: Any) -> Any:
        return v or []
