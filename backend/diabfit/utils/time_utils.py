"""
Time helpers.

All timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, time, timezone
from typing import Iterable, List, Optional


def utcnow() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to naive UTC.

    Args:
        value: Aware or naive datetime (naive values are assumed to be UTC)

    Returns:
        Naive UTC datetime, or None
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_reminder_time(value: str) -> time:
    """
    Parse an ``HH:MM`` reminder time.

    Raises:
        ValueError: If the value is not a valid 24-hour time
    """
    return datetime.strptime(value.strip(), "%H:%M").time()


def normalize_reminder_times(values: Optional[Iterable[str]]) -> List[str]:
    """Sorted, de-duplicated ``HH:MM`` strings."""
    if not values:
        return []
    parsed = {parse_reminder_time(v) for v in values}
    return [t.strftime("%H:%M") for t in sorted(parsed)]
