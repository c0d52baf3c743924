"""Authentication accounts and the auth configuration row."""

import logging

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, event
from sqlalchemy.orm import Session

from ..utils.time_utils import utcnow
from .base import Base, new_id

logger = logging.getLogger(__name__)

AUTH_CONFIG_ID = 1


class AuthUser(Base):
    """
    Login identity. Profiles in ``users`` link to it through auth_user_id.
    """

    __tablename__ = "auth_users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    raw_user_meta_data = Column(JSON, nullable=True)

    email_confirmed_at = Column(DateTime, nullable=True)
    confirmed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def is_confirmed(self) -> bool:
        return self.email_confirmed_at is not None


class AuthConfig(Base):
    """Single-row auth configuration (id is always 1)."""

    __tablename__ = "auth_config"

    id = Column(Integer, primary_key=True, default=AUTH_CONFIG_ID)
    enable_signup = Column(Boolean, nullable=False, default=True)
    enable_confirmations = Column(Boolean, nullable=False, default=True)
    enable_email_confirmations = Column(Boolean, nullable=False, default=True)


def confirmations_required(session: Session) -> bool:
    """True unless the config row switches email confirmation off."""
    config = session.get(AuthConfig, AUTH_CONFIG_ID)
    if config is None:
        return True
    return bool(config.enable_confirmations and config.enable_email_confirmations)


@event.listens_for(Session, "before_flush")
def auto_confirm_new_auth_users(session, flush_context, instances):
    """Stamp confirmation times on new accounts while confirmation is off."""
    new_accounts = [obj for obj in session.new if isinstance(obj, AuthUser)]
    if not new_accounts:
        return

    with session.no_autoflush:
        required = confirmations_required(session)
    if required:
        return

    now = utcnow()
    for account in new_accounts:
        if account.email_confirmed_at is None:
            account.email_confirmed_at = now
        if account.confirmed_at is None:
            account.confirmed_at = now
        logger.debug(f"Auto-confirmed new account {account.email}")
