from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a member of an organization.

    Plain data object, no storage access.
    """

    user_id: int
    org_id: int
    name: Optional[str]
    email: str
    role: Role = Role.EMPLOYEE

    @property
    def display_name(self) -> str:
        return self.name or self.email
