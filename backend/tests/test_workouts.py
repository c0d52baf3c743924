"""
Test workout programs: catalog, enrollment progress and achievements.
"""

from datetime import date, datetime, timedelta

import pytest

from diabfit.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from diabfit.models import User, UserAchievement, WorkoutPlan
from diabfit.schemas.workouts import EnrollmentStatus, WorkoutLogCreate, WorkoutSessionStatus
from diabfit.services.workout_catalog import catalog_id, seed_workout_catalog
from diabfit.services.workout_service import WorkoutService, longest_daily_streak

T2_BEGINNER = catalog_id("plan", "Type 2 Diabetes Beginner Program")
GLP1_BEGINNER = catalog_id("plan", "GLP-1 Beginner Fitness Program")


@pytest.fixture
def catalog(db):
    return seed_workout_catalog(db)


@pytest.fixture
def user(db):
    user = User(email="jane@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def service(db, catalog):
    return WorkoutService(db)


def completed(**extra):
    return WorkoutLogCreate(duration_minutes=30, calories_burned=150, **extra)


def earned_names(achievements):
    return {a.achievement.name for a in achievements}


def test_seed_is_idempotent(db, catalog):
    assert catalog > 0
    assert seed_workout_catalog(db) == 0


def test_longest_daily_streak():
    days = [date(2024, 5, d) for d in (1, 2, 3, 5, 6, 6)]
    assert longest_daily_streak(days) == 3
    assert longest_daily_streak([]) == 0


def test_list_plans_filters_and_orders(db, service):
    type2 = service.list_plans(target_condition="type2_diabetes")
    assert [p.fitness_level for p in type2] == ["beginner", "intermediate", "advanced"]

    athletes = service.list_plans(fitness_level="athlete")
    assert [p.name for p in athletes] == ["Type 1 Diabetes Athlete Program"]

    db.get(WorkoutPlan, T2_BEGINNER).is_active = False
    db.commit()
    assert len(service.list_plans(target_condition="type2_diabetes")) == 2
    with pytest.raises(NotFoundError):
        service.get_plan(T2_BEGINNER)


def test_enroll_and_reject_duplicate(service, user):
    enrollment = service.enroll(user.id, T2_BEGINNER, start_date=date(2024, 5, 1))
    assert enrollment.status == EnrollmentStatus.ACTIVE.value
    assert enrollment.target_end_date == date(2024, 6, 26)
    assert (enrollment.current_week, enrollment.current_session) == (1, 1)

    with pytest.raises(ConflictError):
        service.enroll(user.id, T2_BEGINNER)

    service.update_enrollment(user.id, enrollment.id, {"status": "cancelled"})
    again = service.enroll(user.id, T2_BEGINNER)
    assert again.id != enrollment.id

    with pytest.raises(ValidationFailedError):
        service.update_enrollment(user.id, enrollment.id, {"status": "active"})


def test_logging_sessions_advances_progress(service, user):
    enrollment = service.enroll(user.id, T2_BEGINNER)

    for _ in range(3):
        _, enrollment, _ = service.log_workout(user.id, completed(), enrollment_id=enrollment.id)
    assert enrollment.progress_percentage == 12.5
    assert (enrollment.current_week, enrollment.current_session) == (2, 4)

    _, enrollment, earned = service.log_workout(
        user.id, WorkoutLogCreate(status=WorkoutSessionStatus.SKIPPED), enrollment_id=enrollment.id
    )
    assert enrollment.current_session == 4
    assert earned == []


def test_finishing_every_session_completes_enrollment(db, service, user):
    short = WorkoutPlan(
        name="Two Session Taster",
        target_condition="type2_diabetes",
        fitness_level="beginner",
        duration_weeks=1,
        sessions_per_week=2,
    )
    db.add(short)
    db.commit()
    enrollment = service.enroll(user.id, short.id)

    service.log_workout(user.id, completed(), enrollment_id=enrollment.id)
    _, enrollment, _ = service.log_workout(user.id, completed(), enrollment_id=enrollment.id)
    assert enrollment.status == EnrollmentStatus.COMPLETED.value
    assert enrollment.progress_percentage == 100.0

    with pytest.raises(ValidationFailedError):
        service.log_workout(user.id, completed(), enrollment_id=enrollment.id)


def test_planned_session_must_belong_to_the_plan(service, user):
    enrollment = service.enroll(user.id, GLP1_BEGINNER)
    with pytest.raises(NotFoundError):
        service.log_workout(
            user.id,
            completed(workout_session_id=catalog_id("session", "Gentle Introduction")),
            enrollment_id=enrollment.id,
        )


def test_achievements_follow_condition_and_criteria(db, service, user):
    enrollment = service.enroll(user.id, T2_BEGINNER)

    earned = set()
    for _ in range(10):
        _, _, new = service.log_workout(
            user.id,
            completed(glucose_before=150, glucose_after=120),
            enrollment_id=enrollment.id,
        )
        earned |= earned_names(new)

    assert earned == {"First Steps", "Consistency Champion", "Glucose Guardian"}
    assert db.query(UserAchievement).filter(UserAchievement.user_id == user.id).count() == 3

    # Already earned achievements are not awarded twice.
    _, _, new = service.log_workout(user.id, completed(), enrollment_id=enrollment.id)
    assert new == []


def test_consecutive_days_achievement(service, user):
    enrollment = service.enroll(user.id, GLP1_BEGINNER)
    start = datetime(2024, 5, 1, 7, 30)

    earned = set()
    for day in range(30):
        _, _, new = service.log_workout(
            user.id,
            completed(completed_at=start + timedelta(days=day)),
            enrollment_id=enrollment.id,
        )
        earned |= earned_names(new)
    assert "GLP-1 Warrior" in earned
    assert "Glucose Guardian" not in earned


def test_progress_summary(service, user):
    service.log_workout(user.id, completed(glucose_before=160, glucose_after=130))
    service.log_workout(user.id, completed(glucose_before=140, glucose_after=130))
    service.log_workout(user.id, WorkoutLogCreate(status=WorkoutSessionStatus.SKIPPED))

    progress = service.progress(user.id)
    assert progress.sessions_completed == 2
    assert progress.total_minutes == 60
    assert progress.total_calories == 300
    assert progress.average_glucose_change == -20.0
    assert progress.achievement_points == 10


def test_catalog_api_is_public(client, db, catalog):
    plans = client.get("/api/v1/workouts/plans", params={"target_condition": "glp1_users"})
    assert plans.status_code == 200
    assert len(plans.json()) == 3

    detail = client.get(f"/api/v1/workouts/plans/{T2_BEGINNER}").json()
    assert detail["total_sessions"] == 24
    assert [s["name"] for s in detail["sessions"]] == [
        "Gentle Introduction",
        "Building Confidence",
        "Week 1 Progress",
    ]
    assert [e["exercise"]["name"] for e in detail["sessions"][0]["exercises"]] == [
        "Gentle Walking",
        "Chair Exercises",
        "Gentle Yoga Flow",
    ]

    strength = client.get(
        "/api/v1/workouts/exercises", params={"category": "strength", "difficulty_level": "beginner"}
    ).json()
    assert {e["name"] for e in strength} == {
        "Wall Push-ups",
        "Bodyweight Squats",
        "Seated Leg Extensions",
    }
    assert len(client.get("/api/v1/workouts/achievements").json()) == 5
    assert client.get("/api/v1/workouts/plans/missing").status_code == 404


def test_enrollment_api_flow(client, catalog, auth_headers, other_auth_headers):
    created = client.post(
        "/api/v1/workouts/enrollments",
        json={"workout_plan_id": T2_BEGINNER, "start_date": "2024-05-01"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    enrollment_id = created.json()["id"]

    duplicate = client.post(
        "/api/v1/workouts/enrollments",
        json={"workout_plan_id": T2_BEGINNER},
        headers=auth_headers,
    )
    assert duplicate.status_code == 409

    logged = client.post(
        f"/api/v1/workouts/enrollments/{enrollment_id}/sessions",
        json={
            "workout_session_id": catalog_id("session", "Gentle Introduction"),
            "duration_minutes": 30,
            "glucose_before": 165,
            "glucose_after": 128,
            "performances": [
                {"exercise_id": catalog_id("exercise", "Gentle Walking"), "duration_completed_seconds": 600}
            ],
        },
        headers=auth_headers,
    )
    assert logged.status_code == 201
    body = logged.json()
    assert body["session"]["status"] == "completed"
    assert len(body["session"]["performances"]) == 1
    assert body["enrollment"]["current_session"] == 2
    assert [a["achievement"]["name"] for a in body["new_achievements"]] == ["First Steps"]

    unknown_exercise = client.post(
        "/api/v1/workouts/sessions",
        json={"performances": [{"exercise_id": "missing"}]},
        headers=auth_headers,
    )
    assert unknown_exercise.status_code == 404

    assert len(client.get("/api/v1/workouts/sessions", headers=auth_headers).json()) == 1
    assert client.get("/api/v1/workouts/progress", headers=auth_headers).json()[
        "achievement_points"
    ] == 10
    assert len(client.get("/api/v1/workouts/me/achievements", headers=auth_headers).json()) == 1

    paused = client.patch(
        f"/api/v1/workouts/enrollments/{enrollment_id}",
        json={"status": "paused"},
        headers=auth_headers,
    )
    assert paused.json()["status"] == "paused"

    # Other users cannot see or log against this enrollment.
    assert (
        client.get(f"/api/v1/workouts/enrollments/{enrollment_id}", headers=other_auth_headers).status_code
        == 404
    )
    assert client.get("/api/v1/workouts/enrollments", headers=other_auth_headers).json() == []
    assert client.post("/api/v1/workouts/enrollments", json={"workout_plan_id": T2_BEGINNER}).status_code == 401
