"""
Test dose tracking and adherence reporting.
"""

from datetime import date, datetime, timedelta

import pytest

from diabfit.core.exceptions import NotFoundError, ValidationFailedError
from diabfit.models import MedicationDose, User
from diabfit.schemas.insights import AdherencePeriod, DoseStatus
from diabfit.services.medication_service import MedicationService, period_bounds, streaks
from diabfit.utils.time_utils import utcnow

# Wednesday
NOW = datetime(2024, 5, 22, 12, 0)


@pytest.fixture
def user(db):
    user = User(email="jane@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def service(db):
    return MedicationService(db)


@pytest.fixture
def medication(service, user):
    return service.medications.create(
        user.id,
        {"name": "Semaglutide", "dosage": "0.5 mg", "frequency": "weekly", "medication_type": "glp1"},
    )


def test_period_bounds():
    assert period_bounds(AdherencePeriod.WEEK, NOW) == (
        datetime(2024, 5, 20),
        datetime(2024, 5, 27),
    )
    assert period_bounds(AdherencePeriod.MONTH, NOW) == (
        datetime(2024, 5, 1),
        datetime(2024, 6, 1),
    )
    assert period_bounds(AdherencePeriod.MONTH, datetime(2024, 12, 5)) == (
        datetime(2024, 12, 1),
        datetime(2025, 1, 1),
    )
    assert period_bounds(AdherencePeriod.THREE_MONTHS, NOW) == (NOW - timedelta(days=90), NOW)
    assert period_bounds(AdherencePeriod.YEAR, NOW) == (
        datetime(2024, 1, 1),
        datetime(2025, 1, 1),
    )


def test_streaks():
    statuses = ["taken", "taken", "missed", "taken", "taken", "taken", "skipped"]
    assert streaks(statuses) == (2, 3)
    assert streaks(["missed", "taken"]) == (0, 1)
    assert streaks([]) == (0, 0)


def test_schedule_and_record_dose(service, user, medication):
    dose = service.schedule_dose(user.id, medication.id, NOW)
    assert dose.status == "scheduled"

    taken = service.record_dose(user.id, dose.id, DoseStatus.TAKEN)
    assert taken.status == "taken"
    assert taken.taken_time is not None

    skipped = service.record_dose(user.id, dose.id, DoseStatus.SKIPPED, notes="nausea")
    assert skipped.taken_time is None
    assert skipped.notes == "nausea"


def test_cannot_schedule_for_inactive_medication(service, user, medication):
    service.medications.update(user.id, medication.id, {"is_active": False})
    with pytest.raises(ValidationFailedError):
        service.schedule_dose(user.id, medication.id, NOW)


def test_doses_are_owner_scoped(db, service, user, medication):
    other = User(email="other@example.com")
    db.add(other)
    db.commit()
    dose = service.schedule_dose(user.id, medication.id, NOW)

    with pytest.raises(NotFoundError):
        service.get_dose(other.id, dose.id)
    with pytest.raises(NotFoundError):
        service.list_doses(other.id, medication.id)


def test_mark_missed_doses(db, service, user, medication):
    service.schedule_dose(user.id, medication.id, NOW - timedelta(hours=2))
    service.schedule_dose(user.id, medication.id, NOW + timedelta(hours=2))

    assert service.mark_missed_doses(user.id, now=NOW) == 1
    statuses = sorted(d.status for d in db.query(MedicationDose).all())
    assert statuses == ["missed", "scheduled"]


def test_adherence_report(service, user, medication):
    plan = [
        (datetime(2024, 5, 20, 8), DoseStatus.TAKEN),
        (datetime(2024, 5, 21, 8), DoseStatus.MISSED),
        (datetime(2024, 5, 22, 8), DoseStatus.TAKEN),
        (datetime(2024, 5, 23, 8), None),  # not due yet
        (datetime(2024, 5, 13, 8), DoseStatus.TAKEN),  # previous week
    ]
    for scheduled, status in plan:
        dose = service.schedule_dose(user.id, medication.id, scheduled)
        if status is not None:
            service.record_dose(user.id, dose.id, status, taken_time=scheduled)

    report = service.adherence_report(user.id, medication.id, AdherencePeriod.WEEK, now=NOW)
    assert report.total_doses == 3
    assert report.taken_doses == 2
    assert report.missed_doses == 1
    assert report.skipped_doses == 0
    assert report.adherence_percentage == 66.67
    assert report.streak == 1
    assert report.longest_streak == 1

    monthly = service.adherence_report(user.id, medication.id, AdherencePeriod.MONTH, now=NOW)
    assert monthly.total_doses == 4
    assert monthly.streak == 1
    assert monthly.longest_streak == 2


def test_adherence_without_doses(service, user, medication):
    report = service.adherence_report(user.id, medication.id, AdherencePeriod.YEAR, now=NOW)
    assert report.total_doses == 0
    assert report.adherence_percentage == 0.0


def test_overall_adherence(service, user, medication):
    second = service.medications.create(user.id, {"name": "Metformin"})
    service.medications.create(user.id, {"name": "Unused"})

    first_dose = service.schedule_dose(user.id, medication.id, datetime(2024, 5, 21, 8))
    service.record_dose(user.id, first_dose.id, DoseStatus.TAKEN)
    second_dose = service.schedule_dose(user.id, second.id, datetime(2024, 5, 21, 8))
    service.record_dose(user.id, second_dose.id, DoseStatus.SKIPPED)

    overall = service.overall_adherence(user.id, AdherencePeriod.WEEK, now=NOW)
    assert overall.adherence_percentage == 50.0
    assert len(overall.reports) == 2


def test_dose_api_flow(client, auth_headers):
    medication = client.post(
        "/api/v1/medications",
        json={"name": "Semaglutide", "frequency": "weekly"},
        headers=auth_headers,
    ).json()

    dose = client.post(
        f"/api/v1/medications/{medication['id']}/doses",
        json={"scheduled_time": (utcnow() - timedelta(hours=1)).isoformat()},
        headers=auth_headers,
    )
    assert dose.status_code == 201

    updated = client.patch(
        f"/api/v1/medications/doses/{dose.json()['id']}",
        json={"status": "taken"},
        headers=auth_headers,
    )
    assert updated.json()["status"] == "taken"

    report = client.get(
        f"/api/v1/medications/{medication['id']}/adherence?period=three_months",
        headers=auth_headers,
    ).json()
    assert report["taken_doses"] == 1
    assert report["adherence_percentage"] == 100.0

    overall = client.get("/api/v1/medications/adherence", headers=auth_headers)
    assert overall.status_code == 200


def test_generate_doses_from_reminder_times(db, service, user):
    medication = service.medications.create(
        user.id,
        {
            "name": "Metformin",
            "frequency": "twice_daily",
            "reminder_times": ["20:00", "08:00"],
            "start_date": date(2024, 5, 1),
            "end_date": date(2024, 5, 3),
        },
    )

    created = service.generate_doses(user.id, medication.id)
    assert [d.scheduled_time for d in created[:3]] == [
        datetime(2024, 5, 1, 8, 0),
        datetime(2024, 5, 1, 20, 0),
        datetime(2024, 5, 2, 8, 0),
    ]
    assert len(created) == 6
    assert all(d.status == DoseStatus.SCHEDULED.value for d in created)

    assert service.generate_doses(user.id, medication.id) == []
    assert db.query(MedicationDose).count() == 6


def test_generate_doses_skips_doses_in_the_same_minute(db, service, user):
    medication = service.medications.create(
        user.id,
        {"name": "Metformin", "reminder_times": ["08:00"], "start_date": date(2024, 5, 1)},
    )
    service.schedule_dose(user.id, medication.id, datetime(2024, 5, 2, 8, 0, 30))

    created = service.generate_doses(
        user.id, medication.id, start=datetime(2024, 5, 1), end=datetime(2024, 5, 3, 23, 59)
    )
    assert [d.scheduled_time.day for d in created] == [1, 3]
    assert db.query(MedicationDose).count() == 3


def test_generate_doses_defaults_to_one_year(service, user):
    medication = service.medications.create(
        user.id,
        {"name": "Insulin", "reminder_times": ["09:00"], "start_date": date(2024, 1, 1)},
    )
    created = service.generate_doses(user.id, medication.id)
    # 2024 is a leap year; the window ends at midnight on 2025-01-01.
    assert len(created) == 366
    assert created[-1].scheduled_time == datetime(2024, 12, 31, 9, 0)


def test_generate_doses_uses_frequency_defaults(service, user, medication):
    created = service.generate_doses(
        user.id, medication.id, start=datetime(2024, 5, 1), end=datetime(2024, 5, 31, 23, 59)
    )
    assert [d.scheduled_time for d in created] == [
        datetime(2024, 5, day, 8, 0) for day in (1, 8, 15, 22, 29)
    ]


def test_generate_doses_clipped_to_medication_dates(service, user):
    medication = service.medications.create(
        user.id,
        {
            "name": "Metformin",
            "frequency": "once_daily",
            "start_date": date(2024, 5, 10),
            "end_date": date(2024, 5, 11),
        },
    )
    created = service.generate_doses(
        user.id, medication.id, start=datetime(2024, 5, 1), end=datetime(2024, 6, 1)
    )
    assert [d.scheduled_time.day for d in created] == [10, 11]


def test_generate_doses_for_as_needed_medication(service, user):
    medication = service.medications.create(
        user.id, {"name": "Glucose tablets", "frequency": "as_needed"}
    )
    assert service.generate_doses(user.id, medication.id) == []


def test_generate_doses_api(client, auth_headers):
    medication = client.post(
        "/api/v1/medications",
        json={
            "name": "Metformin",
            "frequency": "twice_daily",
            "reminder_times": ["8:00", "20:00", "08:00"],
            "start_date": "2024-05-01",
            "end_date": "2024-05-02",
        },
        headers=auth_headers,
    ).json()
    assert medication["reminder_times"] == ["08:00", "20:00"]

    url = f"/api/v1/medications/{medication['id']}/doses/generate"
    first = client.post(url, headers=auth_headers).json()
    assert first["created"] == 4
    second = client.post(url, json={}, headers=auth_headers).json()
    assert second["created"] == 0

    doses = client.get(
        f"/api/v1/medications/{medication['id']}/doses", headers=auth_headers
    ).json()
    assert len(doses) == 4

    bad = client.post(
        "/api/v1/medications",
        json={"name": "Metformin", "reminder_times": ["25:00"]},
        headers=auth_headers,
    )
    assert bad.status_code == 422
