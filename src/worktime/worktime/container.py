from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceMetricsService, ClockService
from .audit.repository import AuditRepository
from .audit.service import AuditService
from .core.logging_setup import configure_logging
from .corrections.repository import CorrectionRepository
from .corrections.service import CorrectionService
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .metrics.calculator import AttendanceMetricsCalculator
from .metrics.model import AttendancePolicy
from .organizations.repository import OrganizationRepository
from .payroll.service import PayrollReportService
from .storage.memory import (
    InMemoryAttendanceRepository,
    InMemoryAuditRepository,
    InMemoryCorrectionRepository,
    InMemoryLeaveRepository,
    InMemoryOrganizationRepository,
    InMemoryUserRepository,
)
from .users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    organizations_repo: OrganizationRepository
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    corrections_repo: CorrectionRepository
    audit_repo: AuditRepository

    metrics_service: AttendanceMetricsService
    clock_service: ClockService
    correction_service: CorrectionService
    leave_service: LeaveService
    audit_service: AuditService
    payroll_report_service: PayrollReportService


def load_settings(settings_module: Optional[str] = None):
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def build_container(
    *,
    settings_module: Optional[str] = None,
    organizations_repo: Optional[OrganizationRepository] = None,
    users_repo: Optional[UserRepository] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
    leave_repo: Optional[LeaveRepository] = None,
    corrections_repo: Optional[CorrectionRepository] = None,
    audit_repo: Optional[AuditRepository] = None,
) -> Container:
    """Wire repositories and services; missing repositories default to in-memory stores."""
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    default_policy = AttendancePolicy(**(getattr(settings, "ATTENDANCE_POLICY", None) or {}))
    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s default_policy=%s", settings.__name__, default_policy.resolve())

    organizations_repo = organizations_repo or InMemoryOrganizationRepository()
    users_repo = users_repo or InMemoryUserRepository()
    attendance_repo = attendance_repo or InMemoryAttendanceRepository()
    leave_repo = leave_repo or InMemoryLeaveRepository()
    corrections_repo = corrections_repo or InMemoryCorrectionRepository()
    audit_repo = audit_repo or InMemoryAuditRepository()

    metrics_service = AttendanceMetricsService(
        attendance_repo,
        organizations_repo,
        calculator=AttendanceMetricsCalculator(),
        default_policy=default_policy,
    )
    audit_service = AuditService(audit_repo)
    clock_service = ClockService(attendance_repo, metrics_service)
    correction_service = CorrectionService(corrections_repo, attendance_repo, metrics_service, audit_service)
    leave_service = LeaveService(leave_repo, audit_service)
    payroll_report_service = PayrollReportService(attendance_repo, users_repo, leave_repo, metrics_service)

    return Container(
        organizations_repo=organizations_repo,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        corrections_repo=corrections_repo,
        audit_repo=audit_repo,
        metrics_service=metrics_service,
        clock_service=clock_service,
        correction_service=correction_service,
        leave_service=leave_service,
        audit_service=audit_service,
        payroll_report_service=payroll_report_service,
    )
