from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CorrectionStatus
from .model import CorrectionRequest, NewCorrection


class CorrectionRepository(Protocol):
    def create(self, *, org_id: int, user_id: int, data: NewCorrection, created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, correction_id: int) -> Optional[CorrectionRequest]:
        raise NotImplementedError

    def list_for_user(self, *, org_id: int, user_id: int, limit: int = 100) -> Sequence[CorrectionRequest]:
        raise NotImplementedError

    def list_for_org(
        self,
        *,
        org_id: int,
        status: Optional[CorrectionStatus] = None,
        limit: int = 200,
    ) -> Sequence[CorrectionRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        correction_id: int,
        status: CorrectionStatus,
        decided_at: datetime,
        manager_id: Optional[int] = None,
        admin_id: Optional[int] = None,
    ) -> bool:
        raise NotImplementedError
