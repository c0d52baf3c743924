"""
Auth and profile schemas.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from .common import ApiModel, OrmModel


class SignUpRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None


class SignInRequest(BaseModel):
    email: str
    password: str


class UserProfile(OrmModel):
    """Profile row from the users table."""

    id: str
    auth_user_id: Optional[str] = None
    email: str
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    has_diabetes: bool = False
    diabetes_type: Optional[str] = None
    diagnosis_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    last_synced_at: Optional[datetime] = None


class UserProfileUpdate(ApiModel):
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    has_diabetes: Optional[bool] = None
    diabetes_type: Optional[str] = None
    diagnosis_date: Optional[date] = None


class TokenResponse(BaseModel):
    """Returned by sign-in and sign-up."""

    access_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[datetime] = None
    email_confirmed: bool
    user: UserProfile


class AuthConfigOut(OrmModel):
    enable_signup: bool
    enable_confirmations: bool
    enable_email_confirmations: bool


class EmailConfirmationUpdate(BaseModel):
    enabled: bool


class EmailConfirmationResult(BaseModel):
    config: AuthConfigOut
    confirmed_accounts: int
