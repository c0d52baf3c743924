"""
Glucose analytics: classification, time in range, trend, variability risk
and alerts over a user's readings.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import GlucoseReading
from ..schemas.insights import (
    GlucoseAlert,
    GlucoseAlertType,
    GlucosePattern,
    GlucoseStatus,
    GlucoseSummary,
    RiskLevel,
    TimeInRange,
    TrendDirection,
)
from ..utils.time_utils import utcnow

logger = logging.getLogger(__name__)

TREND_WINDOW = 10
TREND_DELTA = 5
HIGH_VARIABILITY_SD = 50
MODERATE_VARIABILITY_SD = 30
TARGET_TIME_IN_RANGE = 70.0
RAPID_CHANGE_PER_MINUTE = 2.0
DAWN_HOURS = range(6, 10)
DAWN_MIN_READINGS = 5
DAWN_THRESHOLD = 140


def classify_level(
    level: int, low: Optional[int] = None, high: Optional[int] = None
) -> GlucoseStatus:
    """Below low is low, above high is high, the bounds themselves are normal."""
    settings = get_settings()
    low = settings.glucose_low_threshold if low is None else low
    high = settings.glucose_high_threshold if high is None else high
    if level < low:
        return GlucoseStatus.LOW
    if level > high:
        return GlucoseStatus.HIGH
    return GlucoseStatus.NORMAL


class GlucoseService:
    """Glucose insights for one user."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        settings = get_settings()
        self.low = settings.glucose_low_threshold
        self.high = settings.glucose_high_threshold

    def classify(self, level: int) -> GlucoseStatus:
        return classify_level(level, self.low, self.high)

    def readings_for(
        self, user_id: str, days: int, now: Optional[datetime] = None
    ) -> List[GlucoseReading]:
        """Non-deleted readings in the last ``days`` days, oldest first."""
        now = now or utcnow()
        since = now - timedelta(days=days)
        return (
            self.db.query(GlucoseReading)
            .filter(
                GlucoseReading.user_id == user_id,
                GlucoseReading.is_deleted.is_(False),
                GlucoseReading.timestamp >= since,
                GlucoseReading.timestamp <= now,
            )
            .order_by(GlucoseReading.timestamp.asc())
            .all()
        )

    # ------------------------------------------------------------------
    # Pure calculations
    # ------------------------------------------------------------------

    def time_in_range(self, levels: Sequence[int]) -> TimeInRange:
        if not levels:
            return TimeInRange()
        total = len(levels)
        below = sum(1 for level in levels if level < self.low)
        above = sum(1 for level in levels if level > self.high)
        inside = total - below - above
        return TimeInRange(
            in_range=round(inside / total * 100, 2),
            below_range=round(below / total * 100, 2),
            above_range=round(above / total * 100, 2),
        )

    @staticmethod
    def trend(levels: Sequence[int]) -> TrendDirection:
        """Last minus first of the most recent readings (input oldest first)."""
        window = list(levels)[-TREND_WINDOW:]
        if len(window) < 2:
            return TrendDirection.STABLE
        delta = window[-1] - window[0]
        if delta > TREND_DELTA:
            return TrendDirection.RISING
        if delta < -TREND_DELTA:
            return TrendDirection.FALLING
        return TrendDirection.STABLE

    @staticmethod
    def standard_deviation(levels: Sequence[int]) -> float:
        """Population standard deviation."""
        if not levels:
            return 0.0
        mean = sum(levels) / len(levels)
        variance = sum((level - mean) ** 2 for level in levels) / len(levels)
        return math.sqrt(variance)

    def assess_risk(self, average: float, sd: float):
        risk = RiskLevel.LOW
        factors: List[str] = []
        if sd > HIGH_VARIABILITY_SD:
            factors.append("High glucose variability")
            risk = RiskLevel.HIGH
        elif sd > MODERATE_VARIABILITY_SD:
            factors.append("Moderate glucose variability")
            risk = RiskLevel.MEDIUM
        if average > self.high:
            factors.append("Elevated average glucose")
            risk = RiskLevel.HIGH
        return risk, factors

    @staticmethod
    def detect_patterns(readings: Sequence[GlucoseReading]) -> List[GlucosePattern]:
        patterns: List[GlucosePattern] = []
        morning = [r.level for r in readings if r.timestamp.hour in DAWN_HOURS]
        if len(morning) >= DAWN_MIN_READINGS:
            avg_morning = sum(morning) / len(morning)
            if avg_morning > DAWN_THRESHOLD:
                patterns.append(
                    GlucosePattern(
                        type="dawn_phenomenon",
                        description="Elevated morning glucose levels detected",
                        confidence=0.8,
                    )
                )
        return patterns

    def recommendations(self, average: float, tir: TimeInRange, factors: List[str]) -> List[str]:
        recs: List[str] = []
        if tir.in_range < TARGET_TIME_IN_RANGE:
            recs.append(
                f"Your time in range is {int(tir.in_range)}%. Aim for 70% or higher."
            )
        if average > self.high:
            recs.append(
                f"Your average glucose is {int(average)} mg/dL. "
                "Consider consulting your healthcare provider."
            )
        if "High glucose variability" in factors:
            recs.append("Focus on consistent meal timing and carb counting")
        return recs

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def summarize(
        self, user_id: str, days: int = 30, now: Optional[datetime] = None
    ) -> GlucoseSummary:
        readings = self.readings_for(user_id, days, now)
        if not readings:
            return GlucoseSummary(days=days, count=0)

        levels = [r.level for r in readings]
        average = sum(levels) / len(levels)
        sd = self.standard_deviation(levels)
        tir = self.time_in_range(levels)
        risk, factors = self.assess_risk(average, sd)

        return GlucoseSummary(
            days=days,
            count=len(levels),
            average=round(average, 1),
            minimum=min(levels),
            maximum=max(levels),
            standard_deviation=round(sd, 1),
            time_in_range=tir,
            trend=self.trend(levels),
            variability_risk=risk,
            risk_factors=factors,
            patterns=self.detect_patterns(readings),
            recommendations=self.recommendations(average, tir, factors),
        )

    def detect_alerts(self, readings: Sequence[GlucoseReading]) -> List[GlucoseAlert]:
        """
        Out-of-range and rapid-change alerts.

        ``readings`` must be ordered oldest first. Rapid change compares each
        reading with the previous one.
        """
        alerts: List[GlucoseAlert] = []
        previous = None
        for reading in readings:
            status = self.classify(reading.level)
            if status is GlucoseStatus.LOW:
                alerts.append(
                    GlucoseAlert(
                        type=GlucoseAlertType.LOW,
                        severity=RiskLevel.HIGH,
                        level=reading.level,
                        timestamp=reading.timestamp,
                        reading_id=reading.id,
                    )
                )
            elif status is GlucoseStatus.HIGH:
                alerts.append(
                    GlucoseAlert(
                        type=GlucoseAlertType.HIGH,
                        severity=RiskLevel.HIGH,
                        level=reading.level,
                        timestamp=reading.timestamp,
                        reading_id=reading.id,
                    )
                )

            if previous is not None:
                minutes = (reading.timestamp - previous.timestamp).total_seconds() / 60
                if minutes > 0:
                    rate = (reading.level - previous.level) / minutes
                    if abs(rate) >= RAPID_CHANGE_PER_MINUTE:
                        alerts.append(
                            GlucoseAlert(
                                type=(
                                    GlucoseAlertType.RAPID_RISE
                                    if rate > 0
                                    else GlucoseAlertType.RAPID_FALL
                                ),
                                severity=RiskLevel.MEDIUM,
                                level=reading.level,
                                timestamp=reading.timestamp,
                                reading_id=reading.id,
                                rate_per_minute=round(rate, 2),
                            )
                        )
            previous = reading
        return alerts

    def alerts_for(
        self, user_id: str, days: int = 1, now: Optional[datetime] = None
    ) -> List[GlucoseAlert]:
        return self.detect_alerts(self.readings_for(user_id, days, now))
