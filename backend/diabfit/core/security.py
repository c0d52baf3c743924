"""Password hashing and access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from .config import get_settings
from .exceptions import AuthenticationError


def hash_password(raw: str) -> str:
    return generate_password_hash(raw)


def verify_password(raw: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, raw)


def create_access_token(auth_user_id: str, email: str) -> Dict[str, Any]:
    """
    Issue a signed JWT for an auth account.

    Returns:
        Dict with the encoded token and its expiry timestamp
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=settings.access_token_ttl_minutes)
    payload = {
        "sub": auth_user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return {"access_token": token, "expires_at": expires_at}


def decode_access_token(token: str) -> Dict[str, Any]:
    """Validate signature and expiry; raises AuthenticationError."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token", detail=str(exc)) from exc

    if not payload.get("sub"):
        raise AuthenticationError("Invalid token", detail="missing subject")
    return payload
