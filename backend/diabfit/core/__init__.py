"""
Core package initialization.
"""

from diabfit.core.config import settings, get_settings
from diabfit.core.exceptions import DiabfitError

__all__ = [
    "settings",
    "get_settings",
    "DiabfitError",
]
