from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import UserProfile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class KVProfileRepository(ProfileRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def get(self, user_id: str) -> Optional[UserProfile]:
        data = self._kv.get(f"user:{user_id}")
        return UserProfile.from_dict(data) if data else None

    def save(self, profile: UserProfile) -> None:
        self._kv.set(f"user:{profile.id}", profile.to_dict())

    def list_all(self) -> Sequence[UserProfile]:
        profiles = []
        for data in self._kv.get_by_prefix("user:"):
            try:
                profiles.append(UserProfile.from_dict(data))
            except (KeyError, ValueError):
                logger.warning("Skipping malformed profile record %r", data.get("id"))
        return profiles
