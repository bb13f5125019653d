from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        raise NotImplementedError
