from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local
from .model import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    def __init__(self, entries: AuditRepository):
        self._entries = entries

    def log(
        self,
        *,
        action: str,
        entity: str,
        org_id: Optional[int] = None,
        actor_id: Optional[int] = None,
        entity_id: Optional[int] = None,
        before: Optional[dict[str, Any]] = None,
        after: Optional[dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Record an audit entry.

        Audit failures must not block the primary flow, so storage errors are
        logged and not re-raised.
        """
        entry = AuditEntry(
            org_id=org_id,
            actor_id=actor_id,
            action=action,
            entity=entity,
            entity_id=entity_id,
            created_at=now or now_local(),
            before=before or None,
            after=after or None,
        )
        try:
            self._entries.append(entry)
        except Exception:
            logger.exception("audit log failed for %s %s/%s", action, entity, entity_id)
