"""
Basic test configuration and fixtures.

Tests run against an in-memory SQLite database; the URL must be set before
the application modules are imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from diabfit.core.database import SessionLocal, drop_db, init_db
from diabfit.main import app
from diabfit.models import AuthConfig
from diabfit.models.auth import AUTH_CONFIG_ID


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    drop_db()
    init_db()
    yield
    drop_db()


@pytest.fixture
def db():
    """Database session fixture."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Test client fixture."""
    return TestClient(app)


@pytest.fixture
def settings():
    """Settings fixture for testing."""
    from diabfit.core.config import get_settings

    return get_settings()


@pytest.fixture
def confirmations_off(db):
    """Auth config with email confirmation switched off."""
    db.add(
        AuthConfig(
            id=AUTH_CONFIG_ID,
            enable_signup=True,
            enable_confirmations=False,
            enable_email_confirmations=False,
        )
    )
    db.commit()


def sign_up(client: TestClient, email: str = "jane@example.com", password: str = "secret123"):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": password, "name": "Jane"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client, confirmations_off):
    """Bearer headers for a freshly signed-up user."""
    token = sign_up(client)["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(client, confirmations_off):
    """Bearer headers for a second, unrelated user."""
    token = sign_up(client, email="other@example.com")["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, confirmations_off, settings, monkeypatch):
    """Bearer headers for an account on the operator allowlist."""
    monkeypatch.setattr(settings, "admin_emails", ["Ops@Example.com"])
    token = sign_up(client, email="ops@example.com")["access_token"]
    return {"Authorization": f"Bearer {token}"}
