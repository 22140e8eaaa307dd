from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import UserProfile


class ProfileRepository(Protocol):
    """Repository interface for user profiles.

    Note: services depend on this interface, not on a concrete store.
    """

    def get(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def save(self, profile: UserProfile) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[UserProfile]:
        raise NotImplementedError
