from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's status for one class on one date.

    Re-marking overwrites the record; no history is kept.
    """

    class_id: str
    student_id: str
    status: AttendanceStatus
    date: str
    marked_by: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "classId": self.class_id,
            "studentId": self.student_id,
            "status": self.status.value,
            "date": self.date,
            "markedBy": self.marked_by,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            class_id=str(data["classId"]),
            student_id=str(data["studentId"]),
            status=AttendanceStatus(data["status"]),
            date=str(data["date"]),
            marked_by=str(data.get("markedBy", "")),
            timestamp=str(data.get("timestamp", "")),
        )
