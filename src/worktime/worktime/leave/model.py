from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


def leave_days(start: date, end: date, is_half_day: bool = False) -> float:
    """Days a request consumes: 0.5 for a half day, else the inclusive span (at least one)."""
    if is_half_day:
        return 0.5
    return max(1, (end - start).days + 1)


@dataclass(frozen=True)
class LeaveType:
    org_id: int
    code: str
    name: str
    default_annual_quota: Optional[int] = None


@dataclass(frozen=True)
class LeaveBalance:
    """Per-user yearly allowance; overrides the leave type's default quota."""

    org_id: int
    user_id: int
    leave_type_code: str
    year: int
    balance: int


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    org_id: int
    user_id: int
    leave_type_code: str
    start_date: date
    end_date: date
    status: LeaveStatus = LeaveStatus.PENDING
    is_half_day: bool = False
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    manager_id: Optional[int] = None
    admin_id: Optional[int] = None
    decided_at: Optional[datetime] = None

    @property
    def requested_days(self) -> float:
        return leave_days(self.start_date, self.end_date, self.is_half_day)

    def days_within(self, start: date, end: date) -> int:
        """Days of this leave falling inside [start, end], at least one."""
        overlap = min(end, self.end_date) - max(start, self.start_date)
        return max(1, overlap.days + 1)


@dataclass(frozen=True)
class NewLeaveRequest:
    leave_type_code: str
    start_date: date
    end_date: date
    is_half_day: bool = False
    reason: Optional[str] = None
