"""
Shared dependencies for FastAPI dependency injection.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from diabfit.core.config import get_settings
from diabfit.core.database import get_db
from diabfit.core.exceptions import DiabfitError
from diabfit.models import User
from diabfit.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get an auth service bound to the request session."""
    return AuthService(db)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the bearer token to the caller's profile.

    Every owner-scoped route filters on the returned user's id.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        _, user = auth_service.authenticate_token(credentials.credentials)
    except DiabfitError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def is_admin(user: User) -> bool:
    """Whether the profile's email is on the operator allowlist."""
    admins = {email.strip().lower() for email in get_settings().admin_emails}
    return bool(user.email) and user.email.strip().lower() in admins


def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Like ``get_current_user`` but only for operator accounts."""
    if not is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return user
