from __future__ import annotations

from typing import Sequence

from ..storage.kv_store import KVStore
from .model import Feedback
from .repository import FeedbackRepository


class KVFeedbackRepository(FeedbackRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, feedback: Feedback) -> None:
        self._kv.set(feedback.id, feedback.to_dict())

    def list_all(self) -> Sequence[Feedback]:
        return [Feedback.from_dict(d) for d in self._kv.get_by_prefix("feedback:")]
