"""Example: drive the service layer directly (no HTTP, no database).

Business rules live in the services; storage is the in-memory default.
"""

from datetime import date, datetime

from worktime.container import build_container
from worktime.core.enums import BreakType, ClockAction, Role
from worktime.leave.model import LeaveType, NewLeaveRequest
from worktime.metrics.model import AttendancePolicy
from worktime.organizations.model import Organization
from worktime.users.model import User


def main():
    container = build_container()
    container.organizations_repo.add(
        Organization(org_id=1, name="Acme", policy=AttendancePolicy(grace_late_minutes=10))
    )
    container.users_repo.add(User(user_id=1, org_id=1, name="Ada", email="ada@example.com"))

    clock = container.clock_service
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_IN, now=datetime(2025, 3, 3, 9, 20))
    clock.perform(org_id=1, user_id=1, action=ClockAction.BREAK_IN, break_kind=BreakType.ORDINARY, now=datetime(2025, 3, 3, 13, 0))
    clock.perform(org_id=1, user_id=1, action=ClockAction.BREAK_OUT, break_kind=BreakType.ORDINARY, now=datetime(2025, 3, 3, 13, 30))
    day = clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_OUT, now=datetime(2025, 3, 3, 18, 45))
    print(day.metrics)

    container.leave_repo.add_leave_type(LeaveType(org_id=1, code="ANNUAL", name="Annual leave", default_annual_quota=20))
    leave_id = container.leave_service.submit(
        org_id=1,
        user_id=1,
        data=NewLeaveRequest(leave_type_code="ANNUAL", start_date=date(2025, 3, 4), end_date=date(2025, 3, 5)),
        now=datetime(2025, 3, 3, 19, 0),
    )
    container.leave_service.decide(
        org_id=1, actor_id=2, actor_role=Role.MANAGER, leave_id=leave_id, action="approve", now=datetime(2025, 3, 3, 19, 5)
    )
    report = container.payroll_report_service.build_payroll_report(
        org_id=1, start=date(2025, 3, 1), end=date(2025, 3, 31), now=datetime(2025, 4, 1)
    )
    for row in report.as_dicts():
        print(row)


if __name__ == "__main__":
    main()
