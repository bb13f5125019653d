from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.validators import require_date_range
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import LeaveRequest, NewLeaveRequest, leave_days
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_APPROVE = "approve"
_REJECT = "reject"
_COUNTED = (LeaveStatus.APPROVED, LeaveStatus.PENDING)


class LeaveService:
    """Leave requests: employee submission with quota check, manager/admin decision."""

    def __init__(self, leave: LeaveRepository, audit: AuditService):
        self._leave = leave
        self._audit = audit

    def submit(self, *, org_id: int, user_id: int, data: NewLeaveRequest, now: datetime | None = None) -> int:
        require_date_range(data.start_date, data.end_date)
        now = now or now_local()

        if not self._leave.get_leave_type(org_id=org_id, code=data.leave_type_code):
            raise NotFoundError("Leave type not found")

        requested = leave_days(data.start_date, data.end_date, data.is_half_day)
        self._check_quota(
            org_id=org_id,
            user_id=user_id,
            leave_type_code=data.leave_type_code,
            start_date=data.start_date,
            requested=requested,
        )

        leave_id = self._leave.create(org_id=org_id, user_id=user_id, data=data, created_at=now)
        self._audit.log(
            org_id=org_id,
            actor_id=user_id,
            action="create_leave_request",
            entity="leave_request",
            entity_id=leave_id,
            after={"leave_type": data.leave_type_code, "days": requested, "status": LeaveStatus.PENDING.value},
            now=now,
        )
        return leave_id

    def decide(
        self,
        *,
        org_id: int,
        actor_id: int,
        actor_role: Role,
        leave_id: int,
        action: str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if action not in {_APPROVE, _REJECT}:
            raise ValidationError("Action must be approve or reject")

        request = self._leave.get_by_id(leave_id)
        if not request or request.org_id != org_id:
            raise NotFoundError("Leave request not found")

        if actor_role == Role.MANAGER:
            actor = "manager"
        elif actor_role == Role.ORG_ADMIN:
            actor = "admin"
        else:
            raise AuthorizationError("Only managers or org admins can decide leave requests")

        if request.status != LeaveStatus.PENDING:
            raise ValidationError("Already decided")

        now = now or now_local()
        status = LeaveStatus.APPROVED if action == _APPROVE else LeaveStatus.REJECTED
        if status == LeaveStatus.APPROVED:
            self._check_quota(
                org_id=org_id,
                user_id=request.user_id,
                leave_type_code=request.leave_type_code,
                start_date=request.start_date,
                requested=request.requested_days,
                exclude_leave_id=request.leave_id,
            )

        self._leave.decide(
            leave_id=leave_id,
            status=status,
            decided_at=now,
            manager_id=actor_id if actor_role == Role.MANAGER else None,
            admin_id=actor_id if actor_role == Role.ORG_ADMIN else None,
        )
        self._audit.log(
            org_id=org_id,
            actor_id=actor_id,
            action=f"{actor}_{action}_leave_request",
            entity="leave_request",
            entity_id=leave_id,
            before={"status": request.status.value},
            after={"status": status.value},
            now=now,
        )
        logger.info("leave request %s %s by %s %s", leave_id, status.value.lower(), actor, actor_id)
        return self._leave.get_by_id(leave_id) or request

    def available_days(self, *, org_id: int, user_id: int, leave_type_code: str, year: int) -> Optional[float]:
        """Remaining allowance for the year, or None when the leave type is unlimited."""
        limit = self._quota_limit(org_id=org_id, user_id=user_id, leave_type_code=leave_type_code, year=year)
        if limit is None:
            return None
        used = self._used_days(org_id=org_id, user_id=user_id, leave_type_code=leave_type_code, year=year)
        return max(0, limit - used)

    def _quota_limit(self, *, org_id: int, user_id: int, leave_type_code: str, year: int) -> Optional[int]:
        balance = self._leave.get_balance(org_id=org_id, user_id=user_id, leave_type_code=leave_type_code, year=year)
        if balance:
            return balance.balance
        leave_type = self._leave.get_leave_type(org_id=org_id, code=leave_type_code)
        return leave_type.default_annual_quota if leave_type else None

    def _used_days(
        self,
        *,
        org_id: int,
        user_id: int,
        leave_type_code: str,
        year: int,
        exclude_leave_id: Optional[int] = None,
    ) -> float:
        existing = self._leave.list_for_user_overlapping(
            org_id=org_id,
            user_id=user_id,
            leave_type_code=leave_type_code,
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
            statuses=_COUNTED,
        )
        return sum(r.requested_days for r in existing if r.leave_id != exclude_leave_id)

    def _check_quota(
        self,
        *,
        org_id: int,
        user_id: int,
        leave_type_code: str,
        start_date: date,
        requested: float,
        exclude_leave_id: Optional[int] = None,
    ) -> None:
        year = start_date.year
        limit = self._quota_limit(org_id=org_id, user_id=user_id, leave_type_code=leave_type_code, year=year)
        if limit is None:
            return
        used = self._used_days(
            org_id=org_id,
            user_id=user_id,
            leave_type_code=leave_type_code,
            year=year,
            exclude_leave_id=exclude_leave_id,
        )
        if used + requested > limit:
            raise ValidationError(f"Quota exceeded. Available: {max(0, limit - used):g} day(s).")
