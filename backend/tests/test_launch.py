"""
Test launch screen gating.
"""

import pytest

from diabfit.schemas.account import LaunchScreen
from diabfit.services.launch_service import LaunchService


@pytest.mark.parametrize(
    "elapsed,authenticated,biometric_enabled,biometric_available,expected",
    [
        (0.0, True, True, True, LaunchScreen.SPLASH),
        (2.4, True, False, False, LaunchScreen.SPLASH),
        (2.5, True, True, True, LaunchScreen.MAIN),
        (3.0, False, True, True, LaunchScreen.BIOMETRIC_AUTH),
        (3.0, False, True, False, LaunchScreen.LOGIN),
        (3.0, False, False, True, LaunchScreen.LOGIN),
        (3.0, False, False, False, LaunchScreen.LOGIN),
    ],
)
def test_resolve_screen(elapsed, authenticated, biometric_enabled, biometric_available, expected):
    decision = LaunchService(splash_duration=2.5).resolve_screen(
        elapsed, authenticated, biometric_enabled, biometric_available
    )
    assert decision.screen is expected


def test_remaining_splash_seconds():
    service = LaunchService(splash_duration=2.5)
    assert service.resolve_screen(1.0, False, False, False).remaining_splash_seconds == 1.5
    assert service.resolve_screen(4.0, False, False, False).remaining_splash_seconds == 0.0


def test_default_splash_duration(settings):
    assert LaunchService().splash_duration == settings.splash_duration_seconds
