from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceMetricsService
from ..common.datetime_utils import now_local
from ..common.validators import require_date_range
from ..core.enums import AttendanceStatus
from ..leave.repository import LeaveRepository
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class PayrollRow:
    user_id: int
    name: str  # display name, email when the user has none
    email: str
    present_days: int = 0
    half_days: int = 0
    leave_days: int = 0
    absent_days: int = 0
    net_minutes: int = 0
    external_break_minutes: int = 0
    overtime_minutes: int = 0
    leave_by_type: dict[str, int] = field(default_factory=dict)

    def count_status(self, status: AttendanceStatus) -> None:
        if status == AttendanceStatus.PRESENT:
            self.present_days += 1
        elif status == AttendanceStatus.HALF:
            self.half_days += 1
        elif status == AttendanceStatus.LEAVE:
            self.leave_days += 1
        elif status == AttendanceStatus.ABSENT:
            self.absent_days += 1


@dataclass(frozen=True)
class PayrollReport:
    start: date
    end: date
    rows: list[PayrollRow]

    def as_dicts(self) -> list[dict]:
        """Rows keyed by the export column names, leave types as CODE:days|..."""
        return [
            {
                "Employee": r.name,
                "Email": r.email,
                "PresentDays": r.present_days,
                "HalfDays": r.half_days,
                "LeaveDays": r.leave_days,
                "AbsentDays": r.absent_days,
                "NetMinutes": r.net_minutes,
                "ExternalBreakMinutes": r.external_break_minutes,
                "OvertimeMinutes": r.overtime_minutes,
                "LeaveByType": "|".join(f"{code}:{count}" for code, count in r.leave_by_type.items()),
            }
            for r in self.rows
        ]


class PayrollReportService:
    """Aggregate attendance metrics per employee over a pay period."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        leave: LeaveRepository,
        metrics: AttendanceMetricsService,
    ):
        self._attendance = attendance
        self._users = users
        self._leave = leave
        self._metrics = metrics

    def build_payroll_report(
        self,
        *,
        org_id: int,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> PayrollReport:
        """Aggregate freshly computed metrics for every day record in [start, end].

        Stored snapshots are ignored and each day is recomputed against ``now``.
        A past day left without a clock-out is therefore measured up to ``now``,
        so a forgotten clock-out shows up as a very large net and overtime total.
        """
        require_date_range(start, end)
        now = now or now_local()
        policy = self._metrics.policy_for(org_id)

        days = self._attendance.list_for_org_between(org_id=org_id, start_date=start, end_date=end)
        users = {u.user_id: u for u in self._users.list_by_ids(sorted({d.user_id for d in days}))}

        rows: dict[int, PayrollRow] = {}
        for day in days:
            row = rows.get(day.user_id)
            if not row:
                user = users.get(day.user_id)
                row = PayrollRow(
                    user_id=day.user_id,
                    name=user.display_name if user else "",
                    email=user.email if user else "",
                )
                rows[day.user_id] = row

            metrics = self._metrics.compute(day, now=now, policy=policy)
            row.net_minutes += metrics.net_minutes
            row.external_break_minutes += metrics.external_break_minutes
            row.overtime_minutes += metrics.overtime_minutes

            # Leave days carry no clock events; keep their stored classification.
            if day.status == AttendanceStatus.LEAVE and not day.clock_in:
                row.count_status(AttendanceStatus.LEAVE)
            else:
                row.count_status(metrics.status)

        for leave in self._leave.list_approved_overlapping(org_id=org_id, start_date=start, end_date=end):
            row = rows.get(leave.user_id)
            if not row:
                continue
            code = leave.leave_type_code
            row.leave_by_type[code] = row.leave_by_type.get(code, 0) + leave.days_within(start, end)

        logger.info("payroll report org=%s %s..%s: %d employees, %d days", org_id, start, end, len(rows), len(days))
        ordered = sorted(rows.values(), key=lambda r: (r.name.lower(), r.user_id))
        return PayrollReport(start=start, end=end, rows=ordered)
