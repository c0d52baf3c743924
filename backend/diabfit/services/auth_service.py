"""Sign-up, sign-in and the email confirmation toggle."""

import logging
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    EmailNotConfirmedError,
    ValidationFailedError,
)
from ..core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ..models import AuthConfig, AuthUser, User
from ..models.auth import AUTH_CONFIG_ID, confirmations_required
from ..utils.time_utils import utcnow
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Account lifecycle on top of the auth_users and auth_config tables."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.settings = get_settings()
        self.users = UserService(db)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_credentials(
        self, email: str, password: str, name: Optional[str] = None, require_name: bool = False
    ) -> None:
        if not email or not password or (require_name and not name):
            raise ValidationFailedError("Please fill in all fields")
        if "@" not in email:
            raise ValidationFailedError("Please enter a valid email")
        if len(password) < self.settings.min_password_length:
            raise ValidationFailedError(
                f"Password must be at least {self.settings.min_password_length} characters"
            )

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def get_auth_config(self) -> AuthConfig:
        """Return the config row, creating it with defaults if missing."""
        config = self.db.get(AuthConfig, AUTH_CONFIG_ID)
        if config is None:
            config = AuthConfig(
                id=AUTH_CONFIG_ID,
                enable_signup=True,
                enable_confirmations=True,
                enable_email_confirmations=True,
            )
            self.db.add(config)
            self.db.commit()
            self.db.refresh(config)
        return config

    def set_email_confirmation(self, enabled: bool) -> Tuple[AuthConfig, int]:
        """
        Turn email confirmation on or off.

        Turning it off also confirms every account still waiting for
        confirmation. Returns the config and the number of accounts confirmed.
        """
        config = self.get_auth_config()
        config.enable_signup = True
        config.enable_confirmations = enabled
        config.enable_email_confirmations = enabled

        confirmed = 0
        if not enabled:
            confirmed = self.confirm_pending_accounts()

        self.db.commit()
        self.db.refresh(config)
        logger.info(
            f"Email confirmation {'enabled' if enabled else 'disabled'}; "
            f"confirmed {confirmed} pending accounts"
        )
        return config, confirmed

    def confirm_pending_accounts(self) -> int:
        now = utcnow()
        return (
            self.db.query(AuthUser)
            .filter(AuthUser.email_confirmed_at.is_(None))
            .update(
                {AuthUser.email_confirmed_at: now, AuthUser.confirmed_at: now},
                synchronize_session=False,
            )
        )

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def sign_up(
        self, email: str, password: str, name: Optional[str] = None
    ) -> Tuple[AuthUser, User]:
        email = (email or "").strip().lower()
        self.validate_credentials(email, password, name)

        config = self.get_auth_config()
        if not config.enable_signup:
            raise AuthenticationError("Sign-ups are disabled")

        if self.db.query(AuthUser).filter(AuthUser.email == email).first():
            raise ConflictError("An account with this email already exists")

        account = AuthUser(
            email=email,
            password_hash=hash_password(password),
            raw_user_meta_data={"name": name} if name else None,
        )
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        logger.info(f"Registered account {email}")

        user = self.users.ensure_profile(account, name=name)
        return account, user

    def sign_in(self, email: str, password: str) -> Tuple[AuthUser, User]:
        email = (email or "").strip().lower()
        self.validate_credentials(email, password)

        account = self.db.query(AuthUser).filter(AuthUser.email == email).first()
        if account is None or not verify_password(password, account.password_hash):
            raise AuthenticationError("Invalid email or password")

        if not account.is_confirmed and confirmations_required(self.db):
            raise EmailNotConfirmedError("Email address has not been confirmed")

        user = self.users.ensure_profile(account)
        return account, user

    def issue_token(self, account: AuthUser) -> Dict:
        return create_access_token(account.id, account.email)

    def authenticate_token(self, token: str) -> Tuple[AuthUser, User]:
        """Resolve a bearer token to its account and profile."""
        payload = decode_access_token(token)
        account = self.db.get(AuthUser, payload["sub"])
        if account is None:
            raise AuthenticationError("Account no longer exists")

        user = self.users.resolve_user(account.id, account.email)
        if user is None:
            user = self.users.ensure_profile(account)
        return account, user
