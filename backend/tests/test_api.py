"""
Test API endpoints.
"""

from datetime import timedelta, timezone

from fastapi.testclient import TestClient

from diabfit.models import User
from diabfit.utils.time_utils import utcnow


def test_root_endpoint(client: TestClient):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["status"] == "running"


def test_health_check(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "timestamp" in data


def test_protected_route_requires_token(client: TestClient):
    response = client.get("/api/v1/meals")
    assert response.status_code == 401


def test_invalid_token_rejected(client: TestClient):
    response = client.get("/api/v1/meals", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_me_returns_profile(client: TestClient, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "jane@example.com"
    assert data["name"] == "Jane"


def test_update_profile(client: TestClient, auth_headers):
    response = client.patch(
        "/api/v1/users/me",
        json={"has_diabetes": True, "diabetes_type": "type2", "weight": 82.5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["has_diabetes"] is True
    assert data["diabetes_type"] == "type2"
    assert data["name"] == "Jane"


def test_meal_crud(client: TestClient, auth_headers):
    payload = {
        "name": "Oatmeal",
        "meal_type": "breakfast",
        "carbs": 45,
        "protein": 8,
        "calories": 320,
        "timestamp": utcnow().isoformat(),
    }
    created = client.post("/api/v1/meals", json=payload, headers=auth_headers)
    assert created.status_code == 201
    meal_id = created.json()["id"]

    listed = client.get("/api/v1/meals", headers=auth_headers).json()
    assert [m["id"] for m in listed] == [meal_id]

    updated = client.patch(
        f"/api/v1/meals/{meal_id}", json={"calories": 350}, headers=auth_headers
    )
    assert updated.json()["calories"] == 350
    assert updated.json()["name"] == "Oatmeal"

    deleted = client.delete(f"/api/v1/meals/{meal_id}", headers=auth_headers)
    assert deleted.json() == {"success": True, "id": meal_id}
    assert client.get("/api/v1/meals", headers=auth_headers).json() == []
    assert client.get(f"/api/v1/meals/{meal_id}", headers=auth_headers).status_code == 404


def test_records_are_owner_scoped(client: TestClient, auth_headers, other_auth_headers):
    created = client.post(
        "/api/v1/exercises",
        json={"type": "walking", "duration": 30, "timestamp": utcnow().isoformat()},
        headers=auth_headers,
    ).json()

    assert client.get("/api/v1/exercises", headers=other_auth_headers).json() == []
    response = client.get(f"/api/v1/exercises/{created['id']}", headers=other_auth_headers)
    assert response.status_code == 404
    assert response.json()["success"] is False

    response = client.delete(f"/api/v1/exercises/{created['id']}", headers=other_auth_headers)
    assert response.status_code == 404


def test_validation_error(client: TestClient, auth_headers):
    response = client.post(
        "/api/v1/glucose",
        json={"level": -5, "timestamp": utcnow().isoformat()},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_glucose_readings_carry_status(client: TestClient, auth_headers):
    now = utcnow()
    for minutes, level in ((30, 65), (20, 120), (10, 200)):
        client.post(
            "/api/v1/glucose",
            json={"level": level, "timestamp": (now - timedelta(minutes=minutes)).isoformat()},
            headers=auth_headers,
        )

    readings = client.get("/api/v1/glucose", headers=auth_headers).json()
    assert [(r["level"], r["status"]) for r in readings] == [
        (200, "high"),
        (120, "normal"),
        (65, "low"),
    ]

    summary = client.get("/api/v1/glucose/summary?days=7", headers=auth_headers).json()
    assert summary["count"] == 3
    assert summary["minimum"] == 65
    assert summary["maximum"] == 200

    alerts = client.get("/api/v1/glucose/alerts", headers=auth_headers).json()
    types = {a["type"] for a in alerts}
    assert {"low_glucose", "high_glucose"} <= types


def test_settings_endpoints(client: TestClient, auth_headers):
    response = client.put(
        "/api/v1/settings/units", json={"value": "mg/dL"}, headers=auth_headers
    )
    assert response.status_code == 200
    client.put("/api/v1/settings/units", json={"value": "mmol/L"}, headers=auth_headers)

    settings = client.get("/api/v1/settings", headers=auth_headers).json()
    assert len(settings) == 1
    assert settings[0]["setting_value"] == "mmol/L"

    assert client.delete("/api/v1/settings/units", headers=auth_headers).status_code == 200
    assert client.get("/api/v1/settings/units", headers=auth_headers).status_code == 404


def test_analytics_events(client: TestClient, auth_headers):
    client.post(
        "/api/v1/analytics/events",
        json={"event_type": "screen_view", "event_data": {"screen": "dashboard"}},
        headers=auth_headers,
    )
    events = client.get(
        "/api/v1/analytics/events?event_type=screen_view", headers=auth_headers
    ).json()
    assert len(events) == 1
    assert events[0]["event_data"] == {"screen": "dashboard"}

    # Sign-up logs a profile_created event
    all_events = client.get("/api/v1/analytics/events", headers=auth_headers).json()
    assert "profile_created" in {e["event_type"] for e in all_events}


def test_launch_endpoint_is_public(client: TestClient):
    response = client.post(
        "/api/v1/launch",
        json={"elapsed_seconds": 3, "is_authenticated": False, "is_biometric_enabled": True},
    )
    assert response.status_code == 200
    assert response.json()["screen"] == "login"


def test_admin_maintenance(client: TestClient, admin_headers):
    report = client.get("/api/v1/admin/maintenance/verify", headers=admin_headers).json()
    assert report["healthy"] is True
    assert report["table_counts"]["users"] == 1

    run = client.post("/api/v1/admin/maintenance/run", headers=admin_headers).json()
    assert run["dry_run"] is True
    assert run["duplicate_users_removed"] == 0


def test_admin_maintenance_requires_admin(client: TestClient, auth_headers, db):
    db.add(User(email="other@example.com"))
    db.add(User(email="other@example.com"))
    db.commit()

    response = client.post(
        "/api/v1/admin/maintenance/run?dry_run=false", headers=auth_headers
    )
    assert response.status_code == 403
    assert client.get("/api/v1/admin/maintenance/verify", headers=auth_headers).status_code == 403

    db.expire_all()
    assert db.query(User).filter(User.email == "other@example.com").count() == 2


def test_record_list_window_accepts_utc_offsets(client: TestClient, auth_headers):
    client.post(
        "/api/v1/meals",
        json={"name": "Lunch", "carbs": 60, "timestamp": utcnow().isoformat()},
        headers=auth_headers,
    )
    # Wall clock 30 minutes ahead, but at -02:00 that instant is 90 minutes later in UTC.
    start = (utcnow() + timedelta(minutes=30)).replace(tzinfo=timezone(timedelta(hours=-2)))
    listed = client.get(
        "/api/v1/meals", params={"start": start.isoformat()}, headers=auth_headers
    ).json()
    assert listed == []

    # At +02:00 the same wall clock is 90 minutes earlier in UTC.
    start = start.replace(tzinfo=timezone(timedelta(hours=2)))
    listed = client.get(
        "/api/v1/meals", params={"start": start.isoformat()}, headers=auth_headers
    ).json()
    assert [m["name"] for m in listed] == ["Lunch"]
