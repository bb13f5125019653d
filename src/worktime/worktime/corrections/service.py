from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceMetricsService
from ..audit.service import AuditService
from ..common.datetime_utils import now_local, start_of_day
from ..common.validators import require_max_length
from ..core.constants import CORRECTION_NOTE_MAX_LENGTH
from ..core.enums import BreakType, CorrectionKind, CorrectionStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import CorrectionRequest, NewCorrection
from .repository import CorrectionRepository

logger = logging.getLogger(__name__)

_APPROVE = "approve"
_REJECT = "reject"


class CorrectionService:
    def __init__(
        self,
        corrections: CorrectionRepository,
        attendance: AttendanceRepository,
        metrics: AttendanceMetricsService,
        audit: AuditService,
    ):
        self._corrections = corrections
        self._attendance = attendance
        self._metrics = metrics
        self._audit = audit

    def submit(self, *, org_id: int, user_id: int, data: NewCorrection, now: datetime | None = None) -> int:
        if not data.has_proposed_time():
            raise ValidationError("Provide at least one corrected time")
        require_max_length(data.note, "Note", CORRECTION_NOTE_MAX_LENGTH)

        return self._corrections.create(org_id=org_id, user_id=user_id, data=data, created_at=now or now_local())

    def list_for_user(self, *, org_id: int, user_id: int) -> Sequence[CorrectionRequest]:
        return self._corrections.list_for_user(org_id=org_id, user_id=user_id)

    def list_for_org(self, *, org_id: int, status: Optional[CorrectionStatus] = None) -> Sequence[CorrectionRequest]:
        return self._corrections.list_for_org(org_id=org_id, status=status)

    def decide(
        self,
        *,
        org_id: int,
        actor_id: int,
        actor_role: Role,
        correction_id: int,
        action: str,
        now: datetime | None = None,
    ) -> CorrectionRequest:
        if action not in {_APPROVE, _REJECT}:
            raise ValidationError("Action must be approve or reject")

        now = now or now_local()
        correction = self._corrections.get_by_id(correction_id)
        if not correction or correction.org_id != org_id:
            raise NotFoundError("Correction not found")

        if actor_role == Role.MANAGER:
            return self._manager_decide(correction, actor_id=actor_id, action=action, now=now)
        if actor_role == Role.ORG_ADMIN:
            return self._admin_decide(correction, actor_id=actor_id, action=action, now=now)
        raise AuthorizationError("Only managers or org admins can decide corrections")

    def _manager_decide(self, correction: CorrectionRequest, *, actor_id: int, action: str, now: datetime) -> CorrectionRequest:
        if correction.status != CorrectionStatus.PENDING:
            if correction.status == CorrectionStatus.MANAGER_APPROVED and action == _APPROVE:
                # Re-applying is idempotent and repairs a previously failed apply.
                self.apply(correction, now=now)
                return correction
            raise ValidationError("Already decided")

        status = CorrectionStatus.MANAGER_APPROVED if action == _APPROVE else CorrectionStatus.REJECTED
        self._corrections.decide(correction_id=correction.correction_id, status=status, decided_at=now, manager_id=actor_id)
        return self._after_decision(correction, status=status, actor_id=actor_id, actor="manager", now=now)

    def _admin_decide(self, correction: CorrectionRequest, *, actor_id: int, action: str, now: datetime) -> CorrectionRequest:
        if correction.status not in {CorrectionStatus.PENDING, CorrectionStatus.MANAGER_APPROVED}:
            raise ValidationError("Already decided")

        status = CorrectionStatus.ADMIN_APPROVED if action == _APPROVE else CorrectionStatus.REJECTED
        self._corrections.decide(correction_id=correction.correction_id, status=status, decided_at=now, admin_id=actor_id)
        return self._after_decision(correction, status=status, actor_id=actor_id, actor="admin", now=now)

    def _after_decision(
        self,
        correction: CorrectionRequest,
        *,
        status: CorrectionStatus,
        actor_id: int,
        actor: str,
        now: datetime,
    ) -> CorrectionRequest:
        verb = "reject" if status == CorrectionStatus.REJECTED else "approve"
        self._audit.log(
            org_id=correction.org_id,
            actor_id=actor_id,
            action=f"{actor}_{verb}_correction",
            entity="correction_request",
            entity_id=correction.correction_id,
            before={"status": correction.status.value},
            after={"status": status.value},
            now=now,
        )

        updated = self._corrections.get_by_id(correction.correction_id) or correction
        if status != CorrectionStatus.REJECTED:
            self.apply(updated, now=now)
        return updated

    def apply(self, correction: CorrectionRequest, *, now: datetime) -> None:
        """Write the proposed times onto the day record and recompute its metrics.

        Failures are logged; the decision itself has already been stored.
        """
        try:
            self._apply(correction, now=now)
        except Exception:
            logger.exception("applying correction %s failed", correction.correction_id)

    def _apply(self, correction: CorrectionRequest, *, now: datetime) -> None:
        record = self._attendance.upsert_for_user_and_date(
            org_id=correction.org_id,
            user_id=correction.user_id,
            work_date=correction.work_date,
        )

        if correction.kind == CorrectionKind.CLOCK:
            self._attendance.update_clock(
                attendance_id=record.attendance_id,
                clock_in=correction.proposed_clock_in or record.clock_in,
                clock_out=correction.proposed_clock_out or record.clock_out,
            )
        else:
            if not correction.proposed_break_start and not correction.proposed_break_end:
                return
            target = record.first_break(BreakType.EXTERNAL)
            if not target:
                self._attendance.create_break(
                    attendance_id=record.attendance_id,
                    kind=BreakType.EXTERNAL,
                    start=correction.proposed_break_start or start_of_day(record.work_date),
                    end=correction.proposed_break_end,
                )
            else:
                self._attendance.update_break(
                    break_id=target.break_id,
                    start=correction.proposed_break_start or target.start,
                    end=correction.proposed_break_end or target.end,
                )

        self._metrics.recompute(record.attendance_id, now=now)
        logger.info("applied correction %s to attendance %s", correction.correction_id, record.attendance_id)
