"""
API package initialization.
"""

from diabfit.api.v1 import router

__all__ = ["router"]
