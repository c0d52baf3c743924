"""
Test utility functions.
"""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from diabfit import main
from diabfit.core.database import auto_create_enabled
from diabfit.services.user_service import display_name_from_email
from diabfit.utils.time_utils import to_naive_utc, utcnow


def test_utcnow_is_naive():
    now = utcnow()
    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)


def test_to_naive_utc_converts_aware_values():
    aware = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_naive_utc(aware) == datetime(2024, 3, 1, 8, 0)


def test_to_naive_utc_keeps_naive_values():
    naive = datetime(2024, 3, 1, 10, 0)
    assert to_naive_utc(naive) is naive
    assert to_naive_utc(None) is None


def test_display_name_from_email():
    assert display_name_from_email("jane.doe@example.com") == "Jane.doe"
    assert display_name_from_email("@example.com") == "User"


def test_auto_create_only_for_debug_or_sqlite():
    assert auto_create_enabled("sqlite:///./diabfit.db", debug=False) is True
    assert auto_create_enabled("postgresql://localhost/diabfit", debug=False) is False
    assert auto_create_enabled("postgresql://localhost/diabfit", debug=True) is True


def test_startup_leaves_postgres_schema_to_alembic(monkeypatch):
    calls = []
    monkeypatch.setattr(main, "auto_create_enabled", lambda: False)
    monkeypatch.setattr(main, "init_db", lambda: calls.append("init_db"))

    with TestClient(main.app) as client:
        assert client.get("/health").status_code == 200
    assert calls == []

    monkeypatch.setattr(main, "auto_create_enabled", lambda: True)
    with TestClient(main.app):
        pass
    assert calls == ["init_db"]
