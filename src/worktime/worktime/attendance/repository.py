from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BreakType
from ..metrics.model import AttendanceMetrics
from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def upsert_for_user_and_date(self, *, org_id: int, user_id: int, work_date: date) -> AttendanceDay:
        """Return the day record, creating an empty one if none exists."""

        raise NotImplementedError

    def update_clock(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
    ) -> bool:
        raise NotImplementedError

    def create_break(
        self,
        *,
        attendance_id: int,
        kind: BreakType,
        start: datetime,
        end: Optional[datetime] = None,
    ) -> int:
        raise NotImplementedError

    def update_break(self, *, break_id: int, start: Optional[datetime], end: Optional[datetime]) -> bool:
        raise NotImplementedError

    def save_metrics(self, *, attendance_id: int, metrics: AttendanceMetrics) -> bool:
        raise NotImplementedError

    def list_for_org_between(self, *, org_id: int, start_date: date, end_date: date) -> Sequence[AttendanceDay]:
        raise NotImplementedError
