"""
Glucose insight and medication adherence schemas.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import ApiModel, OrmModel


class GlucoseStatus(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TrendDirection(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeInRange(BaseModel):
    """Percentages of readings below, within and above the target range."""

    in_range: float = 0.0
    below_range: float = 0.0
    above_range: float = 0.0


class GlucosePattern(BaseModel):
    type: str
    description: str
    confidence: float


class GlucoseSummary(BaseModel):
    days: int
    count: int
    average: Optional[float] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    standard_deviation: Optional[float] = None
    time_in_range: TimeInRange = Field(default_factory=TimeInRange)
    trend: TrendDirection = TrendDirection.STABLE
    variability_risk: RiskLevel = RiskLevel.LOW
    risk_factors: List[str] = Field(default_factory=list)
    patterns: List[GlucosePattern] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class GlucoseAlertType(str, Enum):
    LOW = "low_glucose"
    HIGH = "high_glucose"
    RAPID_RISE = "rapid_rise"
    RAPID_FALL = "rapid_fall"


class GlucoseAlert(BaseModel):
    type: GlucoseAlertType
    severity: RiskLevel
    level: int
    timestamp: datetime
    reading_id: Optional[str] = None
    rate_per_minute: Optional[float] = None


# ============================================================
# MEDICATION DOSES & ADHERENCE
# ============================================================


class DoseStatus(str, Enum):
    SCHEDULED = "scheduled"
    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"


class AdherencePeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    YEAR = "year"


class DoseCreate(ApiModel):
    scheduled_time: datetime
    notes: Optional[str] = None


class DoseUpdate(ApiModel):
    status: DoseStatus
    taken_time: Optional[datetime] = None
    notes: Optional[str] = None


class DoseOut(OrmModel):
    id: str
    user_id: Optional[str] = None
    medication_id: Optional[str] = None
    scheduled_time: datetime
    taken_time: Optional[datetime] = None
    status: DoseStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DoseGenerationRequest(ApiModel):
    """Optional window; omitted bounds come from the medication's dates."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None


class DoseGenerationResult(BaseModel):
    medication_id: str
    created: int
    doses: List[DoseOut] = []


class AdherenceReport(BaseModel):
    medication_id: str
    period: AdherencePeriod
    start_date: datetime
    end_date: datetime
    total_doses: int = 0
    taken_doses: int = 0
    skipped_doses: int = 0
    missed_doses: int = 0
    adherence_percentage: float = 0.0
    streak: int = 0
    longest_streak: int = 0


class OverallAdherence(BaseModel):
    period: AdherencePeriod
    adherence_percentage: float
    reports: List[AdherenceReport] = Field(default_factory=list)
