from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def save(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def get(self, class_id: str, student_id: str, date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_class(self, class_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
