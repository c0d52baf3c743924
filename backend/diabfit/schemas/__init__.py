"""
Schemas package initialization.
"""

from diabfit.schemas.common import HealthCheck, ErrorResponse, DeleteResponse
from diabfit.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    TokenResponse,
    UserProfile,
    UserProfileUpdate,
)
from diabfit.schemas.account import (
    LaunchDecision,
    LaunchRequest,
    LaunchScreen,
    MaintenanceReport,
    VerificationReport,
)

__all__ = [
    "HealthCheck",
    "ErrorResponse",
    "DeleteResponse",
    "SignUpRequest",
    "SignInRequest",
    "TokenResponse",
    "UserProfile",
    "UserProfileUpdate",
    "LaunchDecision",
    "LaunchRequest",
    "LaunchScreen",
    "MaintenanceReport",
    "VerificationReport",
]
