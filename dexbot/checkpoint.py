"""Daily rotation boundaries anchored to a fixed UTC hour."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .utils import utc_now

DEFAULT_RESET_HOUR = 14  # 2 PM UTC


def validate_reset_hour(hour: int) -> int:
    if not 0 <= hour <= 23:
        raise ValueError(f"Reset hour must be between 0 and 23, got {hour}.")
    return hour


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def current_checkpoint(now: Optional[datetime] = None, *, reset_hour: int = DEFAULT_RESET_HOUR) -> datetime:
    """Return the most recent reset boundary at or before ``now``."""
    moment = _as_utc(now or utc_now())
    if moment.hour < reset_hour:
        moment -= timedelta(days=1)
    return moment.replace(hour=reset_hour, minute=0, second=0, microsecond=0)


def next_checkpoint(now: Optional[datetime] = None, *, reset_hour: int = DEFAULT_RESET_HOUR) -> datetime:
    return current_checkpoint(now, reset_hour=reset_hour) + timedelta(days=1)


__all__ = [
    "DEFAULT_RESET_HOUR",
    "current_checkpoint",
    "next_checkpoint",
    "validate_reset_hour",
]
