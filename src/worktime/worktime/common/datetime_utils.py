from __future__ import annotations

import math
from datetime import date, datetime, time


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``, half-up rounded, never negative."""
    minutes = math.floor((end - start).total_seconds() / 60 + 0.5)
    return max(0, minutes)


def minute_of_day(moment: datetime) -> int:
    """Minutes since midnight in the timestamp's own (local) representation."""
    return moment.hour * 60 + moment.minute


def format_minutes(minutes: int) -> str:
    """Render minutes as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
