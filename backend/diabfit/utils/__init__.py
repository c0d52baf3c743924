"""
Utils package initialization.
"""

from diabfit.utils.time_utils import utcnow, to_naive_utc

__all__ = [
    "utcnow",
    "to_naive_utc",
]
