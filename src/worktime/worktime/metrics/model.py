from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.constants import (
    DEFAULT_GRACE_EARLY_MINUTES,
    DEFAULT_GRACE_LATE_MINUTES,
    DEFAULT_REQUIRED_DAILY_MINUTES,
    DEFAULT_WORKDAY_END_MINUTES,
    DEFAULT_WORKDAY_START_MINUTES,
)
from ..core.enums import AttendanceStatus, BreakType


@dataclass(frozen=True)
class AttendancePolicy:
    """Per-organization attendance rules. Unset fields fall back to defaults.

    All values are minute counts; ``workday_*`` are minutes since midnight.
    Threshold ordering (half day <= full day, start < end) is not validated.
    """

    required_daily_minutes: Optional[int] = None
    half_day_threshold_minutes: Optional[int] = None
    workday_start_minutes: Optional[int] = None
    workday_end_minutes: Optional[int] = None
    grace_late_minutes: Optional[int] = None
    grace_early_minutes: Optional[int] = None

    def merged(self, fallback: "AttendancePolicy") -> "AttendancePolicy":
        """Fill unset fields from ``fallback`` (e.g. deployment-wide settings)."""
        values = {}
        for f in fields(self):
            own = getattr(self, f.name)
            values[f.name] = own if own is not None else getattr(fallback, f.name)
        return AttendancePolicy(**values)

    def resolve(self) -> "ResolvedPolicy":
        required = _or_default(self.required_daily_minutes, DEFAULT_REQUIRED_DAILY_MINUTES)
        return ResolvedPolicy(
            required_daily_minutes=required,
            half_day_threshold_minutes=_or_default(self.half_day_threshold_minutes, required // 2),
            workday_start_minutes=_or_default(self.workday_start_minutes, DEFAULT_WORKDAY_START_MINUTES),
            workday_end_minutes=_or_default(self.workday_end_minutes, DEFAULT_WORKDAY_END_MINUTES),
            grace_late_minutes=_or_default(self.grace_late_minutes, DEFAULT_GRACE_LATE_MINUTES),
            grace_early_minutes=_or_default(self.grace_early_minutes, DEFAULT_GRACE_EARLY_MINUTES),
        )


def _or_default(value: Optional[int], default: int) -> int:
    return default if value is None else int(value)


@dataclass(frozen=True)
class ResolvedPolicy:
    required_daily_minutes: int
    half_day_threshold_minutes: int
    workday_start_minutes: int
    workday_end_minutes: int
    grace_late_minutes: int
    grace_early_minutes: int


class BreakLike(Protocol):
    kind: BreakType
    start: Optional[datetime]
    end: Optional[datetime]


class ClockRecordLike(Protocol):
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    breaks: Sequence[BreakLike]


@dataclass(frozen=True)
class BreakPeriod:
    kind: BreakType
    start: Optional[datetime]
    end: Optional[datetime] = None


@dataclass(frozen=True)
class ClockRecord:
    """Plain input record: one work session with its breaks."""

    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    breaks: Sequence[BreakPeriod] = field(default_factory=tuple)


@dataclass(frozen=True)
class AttendanceMetrics:
    net_minutes: int = 0
    external_break_minutes: int = 0
    overtime_minutes: int = 0
    late_minutes: int = 0
    early_leave_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.ABSENT
