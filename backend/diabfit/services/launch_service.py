"""Which screen the app shows at launch."""

from typing import Optional

from ..core.config import get_settings
from ..schemas.account import LaunchDecision, LaunchScreen


class LaunchService:
    """
    Launch gating: a timed splash, then main content for signed-in users,
    the biometric prompt when it is enabled and the device supports it, and
    the login form otherwise.
    """

    def __init__(self, splash_duration: Optional[float] = None):
        if splash_duration is None:
            splash_duration = get_settings().splash_duration_seconds
        self.splash_duration = splash_duration

    def resolve_screen(
        self,
        elapsed_seconds: float,
        is_authenticated: bool,
        is_biometric_enabled: bool,
        biometric_available: bool,
    ) -> LaunchDecision:
        remaining = max(self.splash_duration - elapsed_seconds, 0.0)
        if remaining > 0:
            screen = LaunchScreen.SPLASH
        elif is_authenticated:
            screen = LaunchScreen.MAIN
        elif is_biometric_enabled and biometric_available:
            screen = LaunchScreen.BIOMETRIC_AUTH
        else:
            screen = LaunchScreen.LOGIN
        return LaunchDecision(screen=screen, remaining_splash_seconds=round(remaining, 3))
