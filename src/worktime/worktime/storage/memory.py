from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from itertools import count
from typing import Collection, Optional, Sequence

from ..attendance.model import AttendanceDay, Break
from ..audit.model import AuditEntry
from ..core.enums import BreakType, CorrectionStatus, LeaveStatus
from ..corrections.model import CorrectionRequest, NewCorrection
from ..leave.model import LeaveBalance, LeaveRequest, LeaveType, NewLeaveRequest
from ..metrics.model import AttendanceMetrics
from ..organizations.model import Organization
from ..users.model import User


class InMemoryAttendanceRepository:
    """Dict-backed attendance store keyed by (org, user, work date)."""

    def __init__(self):
        self._days: dict[int, AttendanceDay] = {}
        self._by_key: dict[tuple[int, int, date], int] = {}
        self._breaks: dict[int, Break] = {}
        self._day_ids = count(1)
        self._break_ids = count(1)

    def _with_breaks(self, day: AttendanceDay) -> AttendanceDay:
        breaks = sorted(
            (b for b in self._breaks.values() if b.attendance_id == day.attendance_id),
            key=lambda b: b.break_id,
        )
        return replace(day, breaks=tuple(breaks))

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        day = self._days.get(attendance_id)
        return self._with_breaks(day) if day else None

    def upsert_for_user_and_date(self, *, org_id: int, user_id: int, work_date: date) -> AttendanceDay:
        key = (org_id, user_id, work_date)
        attendance_id = self._by_key.get(key)
        if attendance_id is None:
            attendance_id = next(self._day_ids)
            self._days[attendance_id] = AttendanceDay(
                attendance_id=attendance_id,
                org_id=org_id,
                user_id=user_id,
                work_date=work_date,
            )
            self._by_key[key] = attendance_id
        return self._with_breaks(self._days[attendance_id])

    def update_clock(self, *, attendance_id: int, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> bool:
        day = self._days.get(attendance_id)
        if not day:
            return False
        self._days[attendance_id] = replace(day, clock_in=clock_in, clock_out=clock_out)
        return True

    def create_break(
        self,
        *,
        attendance_id: int,
        kind: BreakType,
        start: datetime,
        end: Optional[datetime] = None,
    ) -> int:
        break_id = next(self._break_ids)
        self._breaks[break_id] = Break(break_id=break_id, attendance_id=attendance_id, kind=kind, start=start, end=end)
        return break_id

    def update_break(self, *, break_id: int, start: Optional[datetime], end: Optional[datetime]) -> bool:
        b = self._breaks.get(break_id)
        if not b:
            return False
        self._breaks[break_id] = replace(b, start=start, end=end)
        return True

    def save_metrics(self, *, attendance_id: int, metrics: AttendanceMetrics) -> bool:
        day = self._days.get(attendance_id)
        if not day:
            return False
        self._days[attendance_id] = replace(
            day,
            net_minutes=metrics.net_minutes,
            external_break_minutes=metrics.external_break_minutes,
            overtime_minutes=metrics.overtime_minutes,
            late_minutes=metrics.late_minutes,
            early_leave_minutes=metrics.early_leave_minutes,
            status=metrics.status,
        )
        return True

    def list_for_org_between(self, *, org_id: int, start_date: date, end_date: date) -> Sequence[AttendanceDay]:
        days = [
            self._with_breaks(d)
            for d in self._days.values()
            if d.org_id == org_id and start_date <= d.work_date <= end_date
        ]
        days.sort(key=lambda d: (d.work_date, d.user_id))
        return days


class InMemoryOrganizationRepository:
    def __init__(self, organizations: Sequence[Organization] = ()):
        self._orgs = {o.org_id: o for o in organizations}

    def add(self, org: Organization) -> None:
        self._orgs[org.org_id] = org

    def get_by_id(self, org_id: int) -> Optional[Organization]:
        return self._orgs.get(org_id)


class InMemoryUserRepository:
    def __init__(self, users: Sequence[User] = ()):
        self._users = {u.user_id: u for u in users}

    def add(self, user: User) -> None:
        self._users[user.user_id] = user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        return [self._users[i] for i in user_ids if i in self._users]


class InMemoryLeaveRepository:
    def __init__(
        self,
        requests: Sequence[LeaveRequest] = (),
        *,
        leave_types: Sequence[LeaveType] = (),
        balances: Sequence[LeaveBalance] = (),
    ):
        self._requests: dict[int, LeaveRequest] = {}
        self._types = {(t.org_id, t.code): t for t in leave_types}
        self._balances = {(b.org_id, b.user_id, b.leave_type_code, b.year): b for b in balances}
        self._next_id = 1
        for r in requests:
            self.add(r)

    def add(self, request: LeaveRequest) -> None:
        self._requests[request.leave_id] = request
        self._next_id = max(self._next_id, request.leave_id + 1)

    def add_leave_type(self, leave_type: LeaveType) -> None:
        self._types[(leave_type.org_id, leave_type.code)] = leave_type

    def set_balance(self, balance: LeaveBalance) -> None:
        self._balances[(balance.org_id, balance.user_id, balance.leave_type_code, balance.year)] = balance

    def get_leave_type(self, *, org_id: int, code: str) -> Optional[LeaveType]:
        return self._types.get((org_id, code))

    def get_balance(self, *, org_id: int, user_id: int, leave_type_code: str, year: int) -> Optional[LeaveBalance]:
        return self._balances.get((org_id, user_id, leave_type_code, year))

    def create(self, *, org_id: int, user_id: int, data: NewLeaveRequest, created_at: datetime) -> int:
        leave_id = self._next_id
        self.add(
            LeaveRequest(
                leave_id=leave_id,
                org_id=org_id,
                user_id=user_id,
                leave_type_code=data.leave_type_code,
                start_date=data.start_date,
                end_date=data.end_date,
                status=LeaveStatus.PENDING,
                is_half_day=data.is_half_day,
                reason=data.reason,
                created_at=created_at,
            )
        )
        return leave_id

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        return self._requests.get(leave_id)

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
        return [
            r
            for r in self._requests.values()
            if r.org_id == org_id
            and r.user_id == user_id
            and r.leave_type_code == leave_type_code
            and r.status in statuses
            and r.start_date <= end_date
            and r.end_date >= start_date
        ]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_at: datetime,
        manager_id: Optional[int] = None,
        admin_id: Optional[int] = None,
    ) -> bool:
        r = self._requests.get(leave_id)
        if not r:
            return False
        self._requests[leave_id] = replace(
            r,
            status=status,
            decided_at=decided_at,
            manager_id=manager_id if manager_id is not None else r.manager_id,
            admin_id=admin_id if admin_id is not None else r.admin_id,
        )
        return True

    def list_approved_overlapping(self, *, org_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        return [
            r
            for r in self._requests.values()
            if r.org_id == org_id
            and r.status == LeaveStatus.APPROVED
            and r.start_date <= end_date
            and r.end_date >= start_date
        ]


class InMemoryCorrectionRepository:
    def __init__(self):
        self._items: dict[int, CorrectionRequest] = {}
        self._ids = count(1)

    def create(self, *, org_id: int, user_id: int, data: NewCorrection, created_at: datetime) -> int:
        correction_id = next(self._ids)
        self._items[correction_id] = CorrectionRequest(
            correction_id=correction_id,
            org_id=org_id,
            user_id=user_id,
            work_date=data.work_date,
            kind=data.kind,
            status=CorrectionStatus.PENDING,
            created_at=created_at,
            proposed_clock_in=data.proposed_clock_in,
            proposed_clock_out=data.proposed_clock_out,
            proposed_break_start=data.proposed_break_start,
            proposed_break_end=data.proposed_break_end,
            note=data.note,
        )
        return correction_id

    def get_by_id(self, correction_id: int) -> Optional[CorrectionRequest]:
        return self._items.get(correction_id)

    def list_for_user(self, *, org_id: int, user_id: int, limit: int = 100) -> Sequence[CorrectionRequest]:
        items = [c for c in self._items.values() if c.org_id == org_id and c.user_id == user_id]
        items.sort(key=lambda c: c.created_at, reverse=True)
        return items[:limit]

    def list_for_org(
        self,
        *,
        org_id: int,
        status: Optional[CorrectionStatus] = None,
        limit: int = 200,
    ) -> Sequence[CorrectionRequest]:
        items = [c for c in self._items.values() if c.org_id == org_id and (status is None or c.status == status)]
        items.sort(key=lambda c: c.created_at, reverse=True)
        return items[:limit]

    def decide(
        self,
        *,
        correction_id: int,
        status: CorrectionStatus,
        decided_at: datetime,
        manager_id: Optional[int] = None,
        admin_id: Optional[int] = None,
    ) -> bool:
        c = self._items.get(correction_id)
        if not c:
            return False
        self._items[correction_id] = replace(
            c,
            status=status,
            decided_at=decided_at,
            manager_id=manager_id if manager_id is not None else c.manager_id,
            admin_id=admin_id if admin_id is not None else c.admin_id,
        )
        return True


class InMemoryAuditRepository:
    def __init__(self):
        self._entries: list[AuditEntry] = []

    def append(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    def list_for_org(self, org_id: Optional[int], *, limit: int = 200) -> Sequence[AuditEntry]:
        items = [e for e in self._entries if e.org_id == org_id]
        return list(reversed(items))[:limit]
