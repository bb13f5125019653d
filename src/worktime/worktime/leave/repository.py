from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveRequest, LeaveType, NewLeaveRequest


class LeaveRepository(Protocol):
    def get_leave_type(self, *, org_id: int, code: str) -> Optional[LeaveType]:
        raise NotImplementedError

    def get_balance(self, *, org_id: int, user_id: int, leave_type_code: str, year: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def create(self, *, org_id: int, user_id: int, data: NewLeaveRequest, created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user_overlapping(
        self,
        *,
        org_id: int,
        user_id: int,
        leave_type_code: str,
        start_date: date,
        end_date: date,
        statuses: Collection[LeaveStatus],
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_at: datetime,
        manager_id: Optional[int] = None,
        admin_id: Optional[int] = None,
    ) -> bool:
        raise NotImplementedError

    def list_approved_overlapping(self, *, org_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Approved leave requests with start <= end_date and end >= start_date."""

        raise NotImplementedError
