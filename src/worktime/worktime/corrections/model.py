from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import CorrectionKind, CorrectionStatus


@dataclass(frozen=True)
class CorrectionRequest:
    """An employee's request to fix recorded clock or break times of a day."""

    correction_id: int
    org_id: int
    user_id: int
    work_date: date
    kind: CorrectionKind
    status: CorrectionStatus
    created_at: datetime
    proposed_clock_in: Optional[datetime] = None
    proposed_clock_out: Optional[datetime] = None
    proposed_break_start: Optional[datetime] = None
    proposed_break_end: Optional[datetime] = None
    note: Optional[str] = None
    manager_id: Optional[int] = None
    admin_id: Optional[int] = None
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewCorrection:
    work_date: date
    kind: CorrectionKind
    proposed_clock_in: Optional[datetime] = None
    proposed_clock_out: Optional[datetime] = None
    proposed_break_start: Optional[datetime] = None
    proposed_break_end: Optional[datetime] = None
    note: Optional[str] = None

    def has_proposed_time(self) -> bool:
        if self.kind == CorrectionKind.CLOCK:
            return bool(self.proposed_clock_in or self.proposed_clock_out)
        return bool(self.proposed_break_start or self.proposed_break_end)
