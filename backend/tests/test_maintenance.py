"""
Test duplicate-user cleanup, orphan removal and meal analysis backfill.
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from diabfit.models import (
    Exercise,
    GlucoseReading,
    Meal,
    MealAnalysis,
    Medication,
    MedicationDose,
    User,
    UserSetting,
)
from diabfit.services.maintenance_service import DOSE_MEDICATION_KEY, MaintenanceService
from diabfit.utils.time_utils import utcnow


def make_user(db, email, age_days=0, **kwargs):
    user = User(email=email, created_at=utcnow() - timedelta(days=age_days), **kwargs)
    db.add(user)
    db.commit()
    return user


def test_find_duplicate_users_newest_first(db):
    old = make_user(db, "dup@example.com", age_days=10)
    new = make_user(db, "dup@example.com", age_days=1)
    make_user(db, "solo@example.com")

    duplicates = MaintenanceService(db).find_duplicate_users()
    assert duplicates == {"dup@example.com": [new.id, old.id]}


def test_deduplicate_keeps_newest_and_cascades(db):
    old = make_user(db, "dup@example.com", age_days=10, auth_user_id=None)
    new = make_user(db, "dup@example.com", age_days=1)
    db.add(Meal(user_id=old.id, name="Toast", timestamp=utcnow()))
    db.add(Meal(user_id=new.id, name="Salad", timestamp=utcnow()))
    db.commit()
    old_id, new_id = old.id, new.id

    removed = MaintenanceService(db).deduplicate_users()
    db.commit()

    assert removed == 1
    assert [u.id for u in db.query(User).all()] == [new_id]
    assert db.get(User, old_id) is None
    assert [m.name for m in db.query(Meal).all()] == ["Salad"]


def test_deduplicate_dry_run_changes_nothing(db):
    make_user(db, "dup@example.com", age_days=3)
    make_user(db, "dup@example.com", age_days=2)
    make_user(db, "dup@example.com", age_days=1)

    assert MaintenanceService(db).deduplicate_users(dry_run=True) == 2
    assert db.query(User).count() == 3


def test_delete_orphans(db):
    user = make_user(db, "jane@example.com")
    db.add_all(
        [
            Meal(user_id=user.id, name="Kept", timestamp=utcnow()),
            Meal(user_id="missing-user", name="Gone", timestamp=utcnow()),
            Meal(user_id=None, name="No owner", timestamp=utcnow()),
            GlucoseReading(user_id="missing-user", level=100, timestamp=utcnow()),
            Exercise(user_id=user.id, type="run", duration=20, timestamp=utcnow()),
            UserSetting(user_id="missing-user", setting_key="units", setting_value="mg/dL"),
        ]
    )
    db.commit()

    service = MaintenanceService(db)
    counts = service.find_orphans()
    assert counts["meals"] == 2
    assert counts["glucose_readings"] == 1
    assert counts["exercises"] == 0
    assert counts["user_settings"] == 1

    removed = service.delete_orphans()
    db.commit()
    assert removed == counts
    assert [m.name for m in db.query(Meal).all()] == ["Kept"]
    assert db.query(GlucoseReading).count() == 0
    assert db.query(Exercise).count() == 1
    assert sum(service.find_orphans().values()) == 0


def test_doses_without_medication_are_orphans(db):
    user = make_user(db, "jane@example.com")
    medication = Medication(user_id=user.id, name="Semaglutide")
    db.add(medication)
    db.commit()
    db.add_all(
        [
            MedicationDose(user_id=user.id, medication_id=medication.id, scheduled_time=utcnow()),
            MedicationDose(user_id=user.id, medication_id="gone", scheduled_time=utcnow()),
        ]
    )
    db.commit()

    removed = MaintenanceService(db).delete_orphans()
    db.commit()
    assert removed[DOSE_MEDICATION_KEY] == 1
    assert db.query(MedicationDose).count() == 1


def test_backfill_meal_analyses(db, settings):
    user = make_user(db, "jane@example.com")
    analysis = MealAnalysis(
        user_id=user.id,
        meal_name="Pasta",
        timestamp=utcnow(),
        analysis_version="1.0",
        total_calories=640,
    )
    db.add(analysis)
    db.commit()
    # Simulate rows written before the enrichment columns existed.
    db.query(MealAnalysis).update(
        {
            MealAnalysis.meal_name: "",
            MealAnalysis.analysis_version: None,
            MealAnalysis.fat: None,
            MealAnalysis.is_favorite: None,
        },
        synchronize_session=False,
    )
    db.commit()

    service = MaintenanceService(db)
    assert service.count_missing_analysis_version() == 1
    assert service.backfill_meal_analyses() == 1
    db.commit()

    row = db.query(MealAnalysis).one()
    assert row.meal_name == settings.default_meal_name
    assert row.analysis_version == "1.0"
    assert row.fat == 0.0
    assert row.is_favorite is False
    assert row.total_calories == 640
    assert service.backfill_meal_analyses() == 0


def test_run_all_and_verify(db):
    make_user(db, "dup@example.com", age_days=5)
    make_user(db, "dup@example.com", age_days=1)
    db.add(Meal(user_id="missing-user", name="Gone", timestamp=utcnow()))
    db.commit()

    service = MaintenanceService(db)
    before = service.verify()
    assert before.healthy is False
    assert before.duplicate_emails == 1
    assert before.orphan_counts["meals"] == 1

    dry = service.run_all(dry_run=True)
    assert dry.dry_run is True
    assert dry.duplicate_users_removed == 1
    assert db.query(User).count() == 2

    report = service.run_all()
    assert report.duplicate_users_removed == 1
    assert report.total_orphans == 1

    after = service.verify()
    assert after.healthy is True
    assert after.table_counts["users"] == 1


def test_run_all_rolls_back_on_database_error(db, monkeypatch):
    make_user(db, "dup@example.com", age_days=5)
    make_user(db, "dup@example.com", age_days=1)
    service = MaintenanceService(db)

    def fail(dry_run=False):
        raise OperationalError("DELETE", {}, Exception("database is locked"))

    monkeypatch.setattr(service, "delete_orphans", fail)
    with pytest.raises(OperationalError):
        service.run_all()
    assert db.query(User).count() == 2
