from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_minutes, now_local
from ..core.enums import BreakType, ClockAction
from ..core.exceptions import NotFoundError, ValidationError
from ..metrics.calculator import AttendanceMetricsCalculator
from ..metrics.model import AttendanceMetrics, AttendancePolicy
from ..organizations.repository import OrganizationRepository
from .model import AttendanceDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceMetricsService:
    """Recompute and store the metric snapshot of a day record."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        organizations: OrganizationRepository,
        *,
        calculator: Optional[AttendanceMetricsCalculator] = None,
        default_policy: Optional[AttendancePolicy] = None,
    ):
        self._attendance = attendance
        self._organizations = organizations
        self._calculator = calculator or AttendanceMetricsCalculator()
        self._default_policy = default_policy or AttendancePolicy()

    def policy_for(self, org_id: int) -> AttendancePolicy:
        org = self._organizations.get_by_id(org_id)
        if not org:
            raise NotFoundError("Organization not found")
        return org.policy.merged(self._default_policy)

    def compute(self, record: AttendanceDay, *, now: datetime, policy: Optional[AttendancePolicy] = None) -> AttendanceMetrics:
        policy = policy or self.policy_for(record.org_id)
        return self._calculator.compute(record, policy, now)

    def recompute(self, attendance_id: int, *, now: datetime) -> Optional[AttendanceDay]:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            return None

        metrics = self.compute(record, now=now)
        self._attendance.save_metrics(attendance_id=attendance_id, metrics=metrics)
        logger.debug(
            "recomputed attendance %s: net=%s overtime=%s status=%s",
            attendance_id,
            format_minutes(metrics.net_minutes),
            metrics.overtime_minutes,
            metrics.status.value,
        )
        return self._attendance.get_by_id(attendance_id)


class ClockService:
    """Clock-in/out and break tracking for the current work day."""

    def __init__(self, attendance: AttendanceRepository, metrics: AttendanceMetricsService):
        self._attendance = attendance
        self._metrics = metrics

    def perform(
        self,
        *,
        org_id: int,
        user_id: int,
        action: ClockAction | str,
        break_kind: BreakType | str | None = None,
        now: datetime | None = None,
    ) -> AttendanceDay:
        try:
            action = ClockAction(action)
        except ValueError:
            raise ValidationError("Unsupported action")

        kind = self._break_kind(break_kind)
        now = now or now_local()
        # Fail early for an unknown organization before touching the record.
        self._metrics.policy_for(org_id)

        record = self._attendance.upsert_for_user_and_date(org_id=org_id, user_id=user_id, work_date=now.date())

        if action == ClockAction.CLOCK_IN:
            return self.clock_in(record, now=now)
        if action == ClockAction.CLOCK_OUT:
            return self.clock_out(record, now=now)
        if action == ClockAction.BREAK_IN:
            return self.start_break(record, kind=kind, now=now)
        return self.end_break(record, kind=kind, now=now)

    @staticmethod
    def _break_kind(value: BreakType | str | None) -> BreakType:
        if value is None:
            return BreakType.EXTERNAL
        try:
            return BreakType(value)
        except ValueError:
            raise ValidationError("Invalid break type")

    def clock_in(self, record: AttendanceDay, *, now: datetime) -> AttendanceDay:
        if record.clock_in:
            raise ValidationError("Already clocked in")

        self._attendance.update_clock(attendance_id=record.attendance_id, clock_in=now, clock_out=record.clock_out)
        logger.info("user %s clocked in at %s", record.user_id, now.isoformat())
        return self._reload(record)

    def clock_out(self, record: AttendanceDay, *, now: datetime) -> AttendanceDay:
        if not record.clock_in:
            raise ValidationError("Clock-in required before clock-out")

        self._attendance.update_clock(attendance_id=record.attendance_id, clock_in=record.clock_in, clock_out=now)
        logger.info("user %s clocked out at %s", record.user_id, now.isoformat())
        return self._metrics.recompute(record.attendance_id, now=now) or self._reload(record)

    def start_break(self, record: AttendanceDay, *, kind: BreakType, now: datetime) -> AttendanceDay:
        if record.open_break(kind):
            raise ValidationError("Break already started")

        self._attendance.create_break(attendance_id=record.attendance_id, kind=kind, start=now)
        return self._metrics.recompute(record.attendance_id, now=now) or self._reload(record)

    def end_break(self, record: AttendanceDay, *, kind: BreakType, now: datetime) -> AttendanceDay:
        open_break = record.open_break(kind)
        if not open_break:
            raise ValidationError("No active break to end")

        self._attendance.update_break(break_id=open_break.break_id, start=open_break.start, end=now)
        return self._metrics.recompute(record.attendance_id, now=now) or self._reload(record)

    def _reload(self, record: AttendanceDay) -> AttendanceDay:
        return self._attendance.get_by_id(record.attendance_id) or record
