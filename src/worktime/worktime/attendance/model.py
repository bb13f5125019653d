from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import AttendanceStatus, BreakType
from ..metrics.model import AttendanceMetrics


@dataclass(frozen=True)
class Break:
    break_id: int
    attendance_id: int
    kind: BreakType
    start: Optional[datetime]
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one user's attendance for one work day.

    The metric fields are a stored snapshot of the last recompute; they are
    refreshed whenever clock times or breaks change.
    """

    attendance_id: int
    org_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    breaks: Tuple[Break, ...] = ()
    net_minutes: int = 0
    external_break_minutes: int = 0
    overtime_minutes: int = 0
    late_minutes: int = 0
    early_leave_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.ABSENT

    def open_break(self, kind: BreakType) -> Optional[Break]:
        """Most recently started break of ``kind`` that has not ended."""
        candidates = [b for b in self.breaks if b.is_open and b.kind == kind]
        if not candidates:
            return None
        return max(candidates, key=lambda b: b.start or datetime.min)

    def first_break(self, kind: BreakType) -> Optional[Break]:
        for b in self.breaks:
            if b.kind == kind:
                return b
        return None

    @property
    def metrics(self) -> AttendanceMetrics:
        return AttendanceMetrics(
            net_minutes=self.net_minutes,
            external_break_minutes=self.external_break_minutes,
            overtime_minutes=self.overtime_minutes,
            late_minutes=self.late_minutes,
            early_leave_minutes=self.early_leave_minutes,
            status=self.status,
        )
