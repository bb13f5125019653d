from __future__ import annotations

from dataclasses import dataclass, field

from ..metrics.model import AttendancePolicy


@dataclass(frozen=True)
class Organization:
    org_id: int
    name: str
    policy: AttendancePolicy = field(default_factory=AttendancePolicy)
