from __future__ import annotations

import importlib
import logging
from datetime import date, datetime

import pytest

from config import get_settings_module
from worktime.container import build_container
from worktime.core.enums import AttendanceStatus, ClockAction, LeaveStatus, Role
from worktime.core.logging_setup import PACKAGE_LOGGER, configure_logging
from worktime.leave.model import LeaveType, NewLeaveRequest
from worktime.metrics.model import AttendancePolicy
from worktime.organizations.model import Organization


@pytest.mark.parametrize(
    "env,expected",
    [
        ("production", "config.production"),
        ("live", "config.production"),
        ("TEST", "config.testing"),
        ("ci", "config.testing"),
        ("dev", "config.development"),
        (" Local ", "config.development"),
        ("anything", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.delenv("WORKTIME_ENV", raising=False)
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_worktime_env_takes_precedence_over_app_env(monkeypatch):
    monkeypatch.setenv("WORKTIME_ENV", "prod")
    monkeypatch.setenv("APP_ENV", "testing")

    assert get_settings_module() == "config.production"


def test_unknown_env_warns_and_uses_development(monkeypatch, caplog):
    monkeypatch.delenv("WORKTIME_ENV", raising=False)
    monkeypatch.setenv("APP_ENV", "staging")

    with caplog.at_level(logging.WARNING, logger="config"):
        assert get_settings_module() == "config.development"

    assert "unknown environment 'staging'" in caplog.text


def test_policy_env_values_are_parsed(monkeypatch):
    monkeypatch.setenv("WORKDAY_START", "08:30")
    monkeypatch.setenv("GRACE_LATE_MINUTES", "7")
    monkeypatch.delenv("REQUIRED_DAILY_MINUTES", raising=False)
    import config.config as base

    base = importlib.reload(base)

    assert base.ATTENDANCE_POLICY["workday_start_minutes"] == 510
    assert base.ATTENDANCE_POLICY["grace_late_minutes"] == 7
    assert base.ATTENDANCE_POLICY["required_daily_minutes"] is None


def test_container_wires_services_end_to_end():
    c = build_container(settings_module="config.testing")
    c.organizations_repo.add(Organization(org_id=5, name="Five", policy=AttendancePolicy(required_daily_minutes=420)))

    c.clock_service.perform(org_id=5, user_id=1, action=ClockAction.CLOCK_IN, now=datetime(2025, 5, 5, 9))
    day = c.clock_service.perform(org_id=5, user_id=1, action=ClockAction.CLOCK_OUT, now=datetime(2025, 5, 5, 16))

    assert day.net_minutes == 420
    assert day.status == AttendanceStatus.PRESENT


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    logger = configure_logging("WARNING")

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.WARNING
    assert sum(1 for h in logger.handlers if getattr(h, "_worktime_handler", False)) == 1


def test_container_leave_service_shares_repositories():
    c = build_container(settings_module="config.testing")
    c.leave_repo.add_leave_type(LeaveType(org_id=5, code="ANNUAL", name="Annual", default_annual_quota=2))

    leave_id = c.leave_service.submit(
        org_id=5,
        user_id=1,
        data=NewLeaveRequest(leave_type_code="ANNUAL", start_date=date(2025, 5, 5), end_date=date(2025, 5, 6)),
        now=datetime(2025, 5, 1, 9),
    )
    c.leave_service.decide(org_id=5, actor_id=9, actor_role=Role.ORG_ADMIN, leave_id=leave_id, action="approve")

    assert c.leave_repo.get_by_id(leave_id).status == LeaveStatus.APPROVED
    assert [e.action for e in c.audit_repo.list_for_org(5)] == ["admin_approve_leave_request", "create_leave_request"]
