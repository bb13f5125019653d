from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import minute_of_day, minutes_between
from ..core.enums import AttendanceStatus, BreakType
from .model import AttendanceMetrics, AttendancePolicy, ClockRecordLike


class AttendanceMetricsCalculator:
    """Derive worked time, overtime, lateness and day status for one session.

    Pure and total: missing clock-out or break ends are measured up to ``now``
    and every time difference is clamped at zero, so malformed or partial
    records produce a best-effort snapshot instead of an error. ``now`` is
    taken once from the caller and reused for every open interval.
    """

    def compute(self, record: ClockRecordLike, policy: AttendancePolicy, now: datetime) -> AttendanceMetrics:
        rules = policy.resolve()

        break_minutes = 0
        external_break_minutes = 0
        for b in record.breaks or ():
            if not b.start:
                continue
            minutes = minutes_between(b.start, b.end or now)
            break_minutes += minutes
            if b.kind == BreakType.EXTERNAL:
                external_break_minutes += minutes

        if not record.clock_in:
            return AttendanceMetrics(external_break_minutes=external_break_minutes)

        gross = minutes_between(record.clock_in, record.clock_out or now)
        net = max(0, gross - break_minutes)

        late = max(0, minute_of_day(record.clock_in) - rules.workday_start_minutes - rules.grace_late_minutes)

        early_leave = 0
        if record.clock_out:
            early_leave = max(0, rules.workday_end_minutes - minute_of_day(record.clock_out) - rules.grace_early_minutes)

        overtime = max(0, net - rules.required_daily_minutes)

        if not record.clock_out:
            status = AttendanceStatus.PRESENT
        elif net >= rules.required_daily_minutes:
            status = AttendanceStatus.PRESENT
        elif net >= rules.half_day_threshold_minutes:
            status = AttendanceStatus.HALF
        else:
            status = AttendanceStatus.ABSENT

        return AttendanceMetrics(
            net_minutes=net,
            external_break_minutes=external_break_minutes,
            overtime_minutes=overtime,
            late_minutes=late,
            early_leave_minutes=early_leave,
            status=status,
        )


def compute_attendance_metrics(record: ClockRecordLike, policy: AttendancePolicy, now: datetime) -> AttendanceMetrics:
    return AttendanceMetricsCalculator().compute(record, policy, now)
