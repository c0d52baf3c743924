"""
Test sign-up, sign-in and email confirmation handling.
"""

from datetime import datetime

import pytest

from diabfit.core.exceptions import (
    AuthenticationError,
    ConflictError,
    EmailNotConfirmedError,
    ValidationFailedError,
)
from diabfit.core.security import create_access_token, decode_access_token
from diabfit.models import AuthUser, User
from diabfit.services.auth_service import AuthService
from diabfit.services.user_service import UserService


@pytest.mark.parametrize(
    "email,password,message",
    [
        ("", "secret123", "Please fill in all fields"),
        ("jane@example.com", "", "Please fill in all fields"),
        ("jane.example.com", "secret123", "Please enter a valid email"),
        ("jane@example.com", "12345", "Password must be at least 6 characters"),
    ],
)
def test_credential_validation(db, email, password, message):
    with pytest.raises(ValidationFailedError) as exc:
        AuthService(db).sign_up(email, password)
    assert exc.value.message == message


def test_sign_up_creates_account_and_profile(db):
    account, user = AuthService(db).sign_up("Jane@Example.com", "secret123", "Jane")
    assert account.email == "jane@example.com"
    assert user.auth_user_id == account.id
    assert user.name == "Jane"


def test_sign_up_without_name_uses_email(db):
    _, user = AuthService(db).sign_up("jane.doe@example.com", "secret123")
    assert user.name == "Jane.doe"


def test_duplicate_sign_up_conflicts(db):
    service = AuthService(db)
    service.sign_up("jane@example.com", "secret123")
    with pytest.raises(ConflictError):
        service.sign_up("jane@example.com", "other-pass")


def test_sign_in_wrong_password(db, confirmations_off):
    service = AuthService(db)
    service.sign_up("jane@example.com", "secret123")
    with pytest.raises(AuthenticationError):
        service.sign_in("jane@example.com", "wrong-pass")


def test_unconfirmed_account_cannot_sign_in(db):
    service = AuthService(db)
    account, _ = service.sign_up("jane@example.com", "secret123")
    assert account.email_confirmed_at is None
    with pytest.raises(EmailNotConfirmedError):
        service.sign_in("jane@example.com", "secret123")


def test_new_accounts_auto_confirmed_when_confirmation_disabled(db, confirmations_off):
    account, _ = AuthService(db).sign_up("jane@example.com", "secret123")
    assert account.email_confirmed_at is not None
    assert account.confirmed_at is not None


def test_disabling_confirmation_confirms_pending_accounts(db):
    service = AuthService(db)
    service.sign_up("a@example.com", "secret123")
    service.sign_up("b@example.com", "secret123")

    config, confirmed = service.set_email_confirmation(False)
    assert confirmed == 2
    assert config.enable_email_confirmations is False
    assert db.query(AuthUser).filter(AuthUser.email_confirmed_at.is_(None)).count() == 0

    account, _ = service.sign_in("a@example.com", "secret123")
    assert account.is_confirmed


def test_sign_in_relinks_existing_profile_by_email(db, confirmations_off):
    legacy = User(email="jane@example.com", name="Legacy Jane")
    db.add(legacy)
    db.commit()

    _, user = AuthService(db).sign_up("jane@example.com", "secret123")
    assert user.id == legacy.id
    assert user.name == "Legacy Jane"
    assert db.query(User).count() == 1


def test_token_round_trip(db, confirmations_off):
    service = AuthService(db)
    account, user = service.sign_up("jane@example.com", "secret123")
    token = service.issue_token(account)["access_token"]

    resolved_account, resolved_user = service.authenticate_token(token)
    assert resolved_account.id == account.id
    assert resolved_user.id == user.id


def test_expired_token_rejected(settings, monkeypatch):
    monkeypatch.setattr(settings, "access_token_ttl_minutes", -1)
    token = create_access_token("some-id", "jane@example.com")["access_token"]
    with pytest.raises(AuthenticationError) as exc:
        decode_access_token(token)
    assert exc.value.message == "Token expired"


def test_sign_up_api_without_confirmation_returns_no_token(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "jane@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["access_token"] is None
    assert data["email_confirmed"] is False

    response = client.post(
        "/api/v1/auth/signin",
        json={"email": "jane@example.com", "password": "secret123"},
    )
    assert response.status_code == 403


def test_email_confirmation_toggle_api(client, admin_headers):
    response = client.put(
        "/api/v1/auth/config/email-confirmation",
        json={"enabled": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["config"]["enable_email_confirmations"] is True

    config = client.get("/api/v1/auth/config", headers=admin_headers).json()
    assert config["enable_confirmations"] is True


def test_resolve_user_id_falls_back_to_newest_profile_by_email(db):
    older = User(email="jane@example.com", created_at=datetime(2024, 1, 1))
    newer = User(email="jane@example.com", created_at=datetime(2024, 6, 1))
    db.add_all([older, newer])
    db.commit()

    users = UserService(db)
    assert users.resolve_user_id("unknown-auth-id", "jane@example.com") == newer.id
    assert users.resolve_user_id("unknown-auth-id", None) is None


def test_email_confirmation_toggle_requires_admin(client, auth_headers, settings):
    assert "jane@example.com" not in settings.admin_emails

    response = client.put(
        "/api/v1/auth/config/email-confirmation",
        json={"enabled": True},
        headers=auth_headers,
    )
    assert response.status_code == 403
    assert client.get("/api/v1/auth/config", headers=auth_headers).status_code == 403

    # The toggle was not applied
    signup = client.post(
        "/api/v1/auth/signup",
        json={"email": "new@example.com", "password": "secret123"},
    )
    assert signup.json()["email_confirmed"] is True
