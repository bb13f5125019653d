from __future__ import annotations

import pytest

from worktime.attendance.service import AttendanceMetricsService, ClockService
from worktime.audit.service import AuditService
from worktime.corrections.service import CorrectionService
from worktime.core.enums import Role
from worktime.leave.service import LeaveService
from worktime.metrics.model import AttendancePolicy
from worktime.organizations.model import Organization
from worktime.payroll.service import PayrollReportService
from worktime.storage.memory import (
    InMemoryAttendanceRepository,
    InMemoryAuditRepository,
    InMemoryCorrectionRepository,
    InMemoryLeaveRepository,
    InMemoryOrganizationRepository,
    InMemoryUserRepository,
)
from worktime.users.model import User

ORG_ID = 1


@pytest.fixture
def organizations():
    return InMemoryOrganizationRepository(
        [Organization(org_id=ORG_ID, name="Acme", policy=AttendancePolicy(grace_late_minutes=10))]
    )


@pytest.fixture
def users():
    return InMemoryUserRepository(
        [
            User(user_id=1, org_id=ORG_ID, name="Bea", email="bea@example.com"),
            User(user_id=2, org_id=ORG_ID, name=None, email="al@example.com"),
            User(user_id=10, org_id=ORG_ID, name="Mona", email="mona@example.com", role=Role.MANAGER),
        ]
    )


@pytest.fixture
def attendance():
    return InMemoryAttendanceRepository()


@pytest.fixture
def leave():
    return InMemoryLeaveRepository()


@pytest.fixture
def audit_repo():
    return InMemoryAuditRepository()


@pytest.fixture
def metrics(attendance, organizations):
    return AttendanceMetricsService(attendance, organizations)


@pytest.fixture
def clock(attendance, metrics):
    return ClockService(attendance, metrics)


@pytest.fixture
def corrections(attendance, metrics, audit_repo):
    return CorrectionService(InMemoryCorrectionRepository(), attendance, metrics, AuditService(audit_repo))


@pytest.fixture
def payroll(attendance, users, leave, metrics):
    return PayrollReportService(attendance, users, leave, metrics)


@pytest.fixture
def leave_service(leave, audit_repo):
    return LeaveService(leave, AuditService(audit_repo))
