"""Profile lookup and linking between auth accounts and users rows."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models import AppAnalyticsEvent, AuthUser, User
from ..utils.time_utils import utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {
    "name",
    "date_of_birth",
    "gender",
    "height",
    "weight",
    "has_diabetes",
    "diabetes_type",
    "diagnosis_date",
}


def display_name_from_email(email: str) -> str:
    """'jane.doe@example.com' -> 'Jane.doe'."""
    local = email.split("@", 1)[0]
    return local.capitalize() if local else "User"


class UserService:
    """Resolves and maintains the profile that belongs to an auth account."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def get_by_auth_user_id(self, auth_user_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.auth_user_id == auth_user_id)
            .order_by(desc(User.created_at))
            .first()
        )

    def get_latest_by_email(self, email: str) -> Optional[User]:
        """Most recently created profile for an email."""
        return (
            self.db.query(User)
            .filter(User.email == email)
            .order_by(desc(User.created_at))
            .first()
        )

    def resolve_user(self, auth_user_id: str, email: Optional[str]) -> Optional[User]:
        """
        Find the profile for an authenticated caller.

        Looks up by auth_user_id first, then falls back to the newest
        profile with the caller's email.
        """
        user = self.get_by_auth_user_id(auth_user_id)
        if user is None and email:
            user = self.get_latest_by_email(email)
        return user

    def resolve_user_id(self, auth_user_id: str, email: Optional[str]) -> Optional[str]:
        user = self.resolve_user(auth_user_id, email)
        return user.id if user else None

    def ensure_profile(self, account: AuthUser, name: Optional[str] = None) -> User:
        """
        Return the profile linked to ``account``, creating or relinking it.

        A profile that already exists for the same email is relinked
        instead of inserting a duplicate.
        """
        user = self.get_by_auth_user_id(account.id)
        if user is not None:
            return user

        user = self.get_latest_by_email(account.email)
        if user is not None:
            logger.info(f"Relinking existing profile {user.id} to account {account.email}")
            user.auth_user_id = account.id
            user.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(user)
            return user

        meta_name = (account.raw_user_meta_data or {}).get("name")
        user = User(
            auth_user_id=account.id,
            email=account.email,
            name=name or meta_name or display_name_from_email(account.email),
        )
        self.db.add(user)
        self.db.flush()
        self.db.add(
            AppAnalyticsEvent(
                user_id=user.id,
                event_type="profile_created",
                event_data={"email": account.email, "auth_user_id": account.id},
            )
        )
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Created user profile for {account.email}")
        return user

    def get_profile(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User profile not found")
        return user

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> User:
        """Apply allowed profile fields; unknown keys are ignored."""
        user = self.get_profile(user_id)
        for key, value in fields.items():
            if key in PROFILE_FIELDS:
                setattr(user, key, value)
        user.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(user)
        return user
