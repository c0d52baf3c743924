"""Sign-up, sign-in and auth configuration endpoints."""

from fastapi import APIRouter, Depends, status

from diabfit.core.dependencies import get_auth_service, get_current_admin, get_current_user
from diabfit.models import User
from diabfit.models.auth import confirmations_required
from diabfit.schemas.auth import (
    AuthConfigOut,
    EmailConfirmationResult,
    EmailConfirmationUpdate,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserProfile,
)
from diabfit.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(auth_service: AuthService, account, user) -> TokenResponse:
    """A token is only issued to confirmed accounts unless confirmation is off."""
    response = TokenResponse(
        email_confirmed=account.is_confirmed,
        user=UserProfile.model_validate(user),
    )
    if account.is_confirmed or not confirmations_required(auth_service.db):
        token = auth_service.issue_token(account)
        response.access_token = token["access_token"]
        response.expires_at = token["expires_at"]
    return response


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Create an account and its profile.

    While email confirmation is disabled the account is confirmed on insert
    and a token comes back straight away.
    """
    account, user = auth_service.sign_up(payload.email, payload.password, payload.name)
    return _token_response(auth_service, account, user)


@router.post("/signin", response_model=TokenResponse)
async def sign_in(
    payload: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    account, user = auth_service.sign_in(payload.email, payload.password)
    return _token_response(auth_service, account, user)


@router.get("/me", response_model=UserProfile)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.get("/config", response_model=AuthConfigOut)
async def get_auth_config(
    user: User = Depends(get_current_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    return auth_service.get_auth_config()


@router.put("/config/email-confirmation", response_model=EmailConfirmationResult)
async def set_email_confirmation(
    payload: EmailConfirmationUpdate,
    user: User = Depends(get_current_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Enable or disable email confirmation; disabling confirms pending accounts."""
    config, confirmed = auth_service.set_email_confirmation(payload.enabled)
    return EmailConfirmationResult(
        config=AuthConfigOut.model_validate(config), confirmed_accounts=confirmed
    )
