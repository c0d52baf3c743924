"""
Test glucose classification, statistics, risk and alerts.
"""

from datetime import datetime, timedelta

import pytest

from diabfit.models import GlucoseReading, User
from diabfit.schemas.insights import (
    GlucoseAlertType,
    GlucoseStatus,
    RiskLevel,
    TrendDirection,
)
from diabfit.services.glucose_service import GlucoseService, classify_level


@pytest.fixture
def user(db):
    user = User(email="jane@example.com")
    db.add(user)
    db.commit()
    return user


def add_readings(db, user, levels, start, step=timedelta(hours=1)):
    readings = []
    for i, level in enumerate(levels):
        reading = GlucoseReading(user_id=user.id, level=level, timestamp=start + i * step)
        db.add(reading)
        readings.append(reading)
    db.commit()
    return readings


@pytest.mark.parametrize(
    "level,expected",
    [
        (69, GlucoseStatus.LOW),
        (70, GlucoseStatus.NORMAL),
        (180, GlucoseStatus.NORMAL),
        (181, GlucoseStatus.HIGH),
    ],
)
def test_classify_bounds(level, expected):
    assert classify_level(level) is expected


def test_time_in_range(db):
    tir = GlucoseService(db).time_in_range([60, 100, 150, 200])
    assert tir.in_range == 50.0
    assert tir.below_range == 25.0
    assert tir.above_range == 25.0


def test_trend_uses_last_ten_readings():
    # The leading 300 falls outside the window: 112 - 100 = 12
    levels = [300, 100, 104, 108, 112, 106, 107, 108, 109, 110, 112]
    assert GlucoseService.trend(levels) is TrendDirection.RISING
    assert GlucoseService.trend([150, 120, 110]) is TrendDirection.FALLING
    assert GlucoseService.trend([100, 105]) is TrendDirection.STABLE
    assert GlucoseService.trend([100]) is TrendDirection.STABLE


def test_trend_ignores_older_readings():
    levels = [50] * 5 + [120] * 10
    assert GlucoseService.trend(levels) is TrendDirection.STABLE


@pytest.mark.parametrize(
    "average,sd,expected",
    [
        (120, 20, RiskLevel.LOW),
        (120, 35, RiskLevel.MEDIUM),
        (120, 55, RiskLevel.HIGH),
        (190, 10, RiskLevel.HIGH),
    ],
)
def test_assess_risk(db, average, sd, expected):
    risk, _ = GlucoseService(db).assess_risk(average, sd)
    assert risk is expected


def test_summarize(db, user):
    now = datetime(2024, 5, 20, 12, 0)
    add_readings(db, user, [100, 110, 120, 130], now - timedelta(hours=4))

    summary = GlucoseService(db).summarize(user.id, days=7, now=now)
    assert summary.count == 4
    assert summary.average == 115.0
    assert summary.minimum == 100
    assert summary.maximum == 130
    assert summary.trend is TrendDirection.RISING
    assert summary.time_in_range.in_range == 100.0
    assert summary.variability_risk is RiskLevel.LOW
    assert summary.recommendations == []


def test_summarize_without_readings(db, user):
    summary = GlucoseService(db).summarize(user.id)
    assert summary.count == 0
    assert summary.average is None


def test_summarize_ignores_deleted_and_foreign_readings(db, user):
    now = datetime(2024, 5, 20, 12, 0)
    other = User(email="other@example.com")
    db.add(other)
    db.commit()
    add_readings(db, other, [300], now - timedelta(hours=1))
    deleted = add_readings(db, user, [250], now - timedelta(hours=2))[0]
    deleted.is_deleted = True
    add_readings(db, user, [110], now - timedelta(hours=1))
    db.commit()

    summary = GlucoseService(db).summarize(user.id, days=1, now=now)
    assert summary.count == 1
    assert summary.average == 110.0


def test_high_average_recommendations(db, user):
    now = datetime(2024, 5, 20, 12, 0)
    add_readings(db, user, [200, 210, 220], now - timedelta(hours=3))

    summary = GlucoseService(db).summarize(user.id, days=1, now=now)
    assert summary.variability_risk is RiskLevel.HIGH
    assert "Elevated average glucose" in summary.risk_factors
    assert any("time in range is 0%" in r for r in summary.recommendations)
    assert any("average glucose is 210" in r for r in summary.recommendations)


def test_dawn_phenomenon_detected(db, user):
    start = datetime(2024, 5, 14, 7, 0)
    add_readings(db, user, [150, 160, 155, 170, 165], start, step=timedelta(days=1))

    summary = GlucoseService(db).summarize(user.id, days=30, now=datetime(2024, 5, 20, 12, 0))
    assert [p.type for p in summary.patterns] == ["dawn_phenomenon"]


def test_dawn_phenomenon_needs_five_readings(db, user):
    start = datetime(2024, 5, 16, 7, 0)
    add_readings(db, user, [150, 160, 155, 170], start, step=timedelta(days=1))

    summary = GlucoseService(db).summarize(user.id, days=30, now=datetime(2024, 5, 20, 12, 0))
    assert summary.patterns == []


def test_detect_alerts(db, user):
    start = datetime(2024, 5, 20, 8, 0)
    readings = add_readings(
        db, user, [100, 105, 150, 190, 60], start, step=timedelta(minutes=15)
    )

    alerts = GlucoseService(db).detect_alerts(readings)
    kinds = [(a.type, a.level) for a in alerts]
    assert (GlucoseAlertType.RAPID_RISE, 150) in kinds
    assert (GlucoseAlertType.HIGH, 190) in kinds
    assert (GlucoseAlertType.LOW, 60) in kinds
    assert (GlucoseAlertType.RAPID_FALL, 60) in kinds
    # 100 -> 105 in 15 minutes is not rapid
    assert all(a.level != 105 for a in alerts)

    rapid = next(a for a in alerts if a.type is GlucoseAlertType.RAPID_FALL)
    assert rapid.severity is RiskLevel.MEDIUM
    assert rapid.rate_per_minute == round((60 - 190) / 15, 2)
