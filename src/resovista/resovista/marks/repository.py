from __future__ import annotations

from typing import Protocol, Sequence

from .model import MarkRecord


class MarksRepository(Protocol):
    def save(self, record: MarkRecord) -> None:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[MarkRecord]:
        raise NotImplementedError
