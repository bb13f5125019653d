from datetime import date, datetime

import pytest

from worktime.core.enums import AttendanceStatus, BreakType, ClockAction, CorrectionKind, CorrectionStatus, Role
from worktime.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from worktime.corrections.model import NewCorrection

DAY = date(2025, 2, 3)
DECIDED = datetime(2025, 2, 4, 10, 0)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 2, 3, hour, minute)


def submit_clock_fix(corrections, **proposed) -> int:
    data = NewCorrection(work_date=DAY, kind=CorrectionKind.CLOCK, **proposed)
    return corrections.submit(org_id=1, user_id=1, data=data, now=at(20))


def test_submit_requires_a_proposed_time(corrections):
    with pytest.raises(ValidationError, match="at least one corrected time"):
        corrections.submit(
            org_id=1,
            user_id=1,
            data=NewCorrection(work_date=DAY, kind=CorrectionKind.BREAK, proposed_clock_in=at(9)),
        )


def test_submit_rejects_long_note(corrections):
    with pytest.raises(ValidationError, match="at most 500"):
        submit_clock_fix(corrections, proposed_clock_in=at(9), note="x" * 501)


def test_submitted_correction_is_pending(corrections):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))

    [item] = corrections.list_for_user(org_id=1, user_id=1)
    assert corrections.list_for_org(org_id=1, status=CorrectionStatus.PENDING) == [item]
    assert corrections.list_for_org(org_id=1, status=CorrectionStatus.REJECTED) == []
    assert item.correction_id == cid
    assert item.status == CorrectionStatus.PENDING


def test_manager_approval_applies_clock_times_and_recomputes(corrections, clock, attendance, audit_repo):
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_IN, now=at(11))
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9), proposed_clock_out=at(17, 30))

    decided = corrections.decide(
        org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="approve", now=DECIDED
    )

    assert decided.status == CorrectionStatus.MANAGER_APPROVED
    assert decided.manager_id == 10
    day = attendance.upsert_for_user_and_date(org_id=1, user_id=1, work_date=DAY)
    assert day.clock_in == at(9)
    assert day.clock_out == at(17, 30)
    assert day.net_minutes == 510
    assert day.late_minutes == 0
    assert day.early_leave_minutes == 30
    assert day.status == AttendanceStatus.PRESENT

    [entry] = audit_repo.list_for_org(1)
    assert entry.action == "manager_approve_correction"
    assert entry.entity == "correction_request"
    assert entry.before == {"status": "PENDING"}
    assert entry.after == {"status": "MANAGER_APPROVED"}


def test_partial_clock_correction_keeps_existing_time(corrections, clock, attendance):
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_IN, now=at(9))
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_OUT, now=at(13))
    cid = submit_clock_fix(corrections, proposed_clock_out=at(17))

    corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve", now=DECIDED)

    day = attendance.upsert_for_user_and_date(org_id=1, user_id=1, work_date=DAY)
    assert day.clock_in == at(9)
    assert day.net_minutes == 480
    assert day.status == AttendanceStatus.PRESENT


def test_break_correction_creates_external_break(corrections, clock, attendance):
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_IN, now=at(9))
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_OUT, now=at(18))
    data = NewCorrection(
        work_date=DAY,
        kind=CorrectionKind.BREAK,
        proposed_break_start=at(14),
        proposed_break_end=at(14, 45),
    )
    cid = corrections.submit(org_id=1, user_id=1, data=data)

    corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve", now=DECIDED)

    day = attendance.upsert_for_user_and_date(org_id=1, user_id=1, work_date=DAY)
    [b] = day.breaks
    assert b.kind == BreakType.EXTERNAL
    assert (b.start, b.end) == (at(14), at(14, 45))
    assert day.external_break_minutes == 45
    assert day.net_minutes == 495


def test_break_correction_edits_first_external_break(corrections, clock, attendance):
    clock.perform(org_id=1, user_id=1, action=ClockAction.CLOCK_IN, now=at(9))
    clock.perform(org_id=1, user_id=1, action=ClockAction.BREAK_IN, now=at(12))
    data = NewCorrection(work_date=DAY, kind=CorrectionKind.BREAK, proposed_break_end=at(12, 20))
    cid = corrections.submit(org_id=1, user_id=1, data=data)

    corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve", now=at(15))

    day = attendance.upsert_for_user_and_date(org_id=1, user_id=1, work_date=DAY)
    [b] = day.breaks
    assert (b.start, b.end) == (at(12), at(12, 20))
    assert day.external_break_minutes == 20


def test_break_correction_without_start_uses_midnight(corrections, attendance):
    data = NewCorrection(work_date=DAY, kind=CorrectionKind.BREAK, proposed_break_end=at(0, 30))
    cid = corrections.submit(org_id=1, user_id=1, data=data)

    corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve", now=DECIDED)

    day = attendance.upsert_for_user_and_date(org_id=1, user_id=1, work_date=DAY)
    assert day.breaks[0].start == datetime(2025, 2, 3, 0, 0)
    assert day.external_break_minutes == 30
    assert day.status == AttendanceStatus.ABSENT


def test_reject_does_not_touch_attendance(corrections, attendance, audit_repo):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))

    decided = corrections.decide(
        org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="reject", now=DECIDED
    )

    assert decided.status == CorrectionStatus.REJECTED
    assert attendance.list_for_org_between(org_id=1, start_date=DAY, end_date=DAY) == []
    assert audit_repo.list_for_org(1)[0].action == "manager_reject_correction"


def test_manager_cannot_decide_twice_but_may_reapply(corrections, audit_repo):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))
    corrections.decide(org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="approve", now=DECIDED)

    again = corrections.decide(
        org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="approve", now=DECIDED
    )
    assert again.status == CorrectionStatus.MANAGER_APPROVED
    assert len(audit_repo.list_for_org(1)) == 1

    with pytest.raises(ValidationError, match="Already decided"):
        corrections.decide(org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="reject")


def test_admin_can_finalize_manager_approved(corrections):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))
    corrections.decide(org_id=1, actor_id=10, actor_role=Role.MANAGER, correction_id=cid, action="approve", now=DECIDED)

    decided = corrections.decide(
        org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="reject", now=DECIDED
    )

    assert decided.status == CorrectionStatus.REJECTED
    assert decided.admin_id == 3
    with pytest.raises(ValidationError, match="Already decided"):
        corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve")


def test_decide_guards(corrections):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))

    with pytest.raises(ValidationError):
        corrections.decide(org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="maybe")
    with pytest.raises(NotFoundError):
        corrections.decide(org_id=2, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve")
    with pytest.raises(AuthorizationError):
        corrections.decide(org_id=1, actor_id=1, actor_role=Role.EMPLOYEE, correction_id=cid, action="approve")


def test_apply_failure_does_not_fail_decision(corrections, attendance, monkeypatch, caplog):
    cid = submit_clock_fix(corrections, proposed_clock_in=at(9))

    def boom(**kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(attendance, "update_clock", boom)

    decided = corrections.decide(
        org_id=1, actor_id=3, actor_role=Role.ORG_ADMIN, correction_id=cid, action="approve", now=DECIDED
    )

    assert decided.status == CorrectionStatus.ADMIN_APPROVED
    assert "applying correction" in caplog.text
