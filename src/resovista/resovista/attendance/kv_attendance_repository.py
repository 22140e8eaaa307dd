from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def attendance_key(class_id: str, student_id: str, date: str) -> str:
    return f"attendance:{class_id}:{student_id}:{date}"


class KVAttendanceRepository(AttendanceRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, record: AttendanceRecord) -> None:
        self._kv.set(attendance_key(record.class_id, record.student_id, record.date), record.to_dict())

    def get(self, class_id: str, student_id: str, date: str) -> Optional[AttendanceRecord]:
        data = self._kv.get(attendance_key(class_id, student_id, date))
        return AttendanceRecord.from_dict(data) if data else None

    def list_for_class(self, class_id: str) -> Sequence[AttendanceRecord]:
        return [AttendanceRecord.from_dict(d) for d in self._kv.get_by_prefix(f"attendance:{class_id}:")]

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [AttendanceRecord.from_dict(d) for d in self._kv.get_by_prefix("attendance:")]
