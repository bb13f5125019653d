from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AuditEntry:
    org_id: Optional[int]
    actor_id: Optional[int]
    action: str
    entity: str
    entity_id: Optional[int]
    created_at: datetime
    before: Optional[dict[str, Any]] = None
    after: Optional[dict[str, Any]] = None
