from __future__ import annotations

from typing import Sequence

from ..storage.kv_store import KVStore
from .model import MarkRecord
from .repository import MarksRepository


class KVMarksRepository(MarksRepository):
    """Records keyed ``marks:{studentId}:{subject}:{millis}``; ``id`` is the key."""

    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, record: MarkRecord) -> None:
        self._kv.set(record.id, record.to_dict())

    def list_for_student(self, student_id: str) -> Sequence[MarkRecord]:
        return [MarkRecord.from_dict(d) for d in self._kv.get_by_prefix(f"marks:{student_id}:")]
