from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso
from ..common.permissions import ensure_role
from ..common.validators import require_enum, require_fields, require_iso_date, require_key_part
from ..core.enums import STAFF_ROLES, AttendanceStatus
from ..users.model import CurrentUser
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

CSV_FIELDS = ["date", "class_id", "student_id", "status", "marked_by", "timestamp"]


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, clock: Clock = now_utc):
        self._attendance = attendance
        self._clock = clock

    def mark(
        self,
        actor: CurrentUser,
        *,
        class_id: Any,
        student_id: Any,
        status: Any,
        date: Any,
    ) -> AttendanceRecord:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can mark attendance")
        require_fields(
            {"classId": class_id, "studentId": student_id, "status": status, "date": date},
            "classId", "studentId", "status", "date",
        )

        record = AttendanceRecord(
            class_id=require_key_part(class_id, "classId"),
            student_id=require_key_part(student_id, "studentId"),
            status=require_enum(status, AttendanceStatus, "status"),
            date=require_iso_date(date, "date"),
            marked_by=actor.id,
            timestamp=to_iso(self._clock()),
        )
        self._attendance.save(record)
        logger.info("Attendance %s for %s in %s on %s", record.status.value, record.student_id, record.class_id, record.date)
        return record

    def get(self, class_id: str, student_id: str, date: str) -> Optional[AttendanceRecord]:
        return self._attendance.get(class_id, student_id, date)

    def list_for_class(self, class_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_class(require_key_part(class_id, "classId"))

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self._attendance.list_all() if r.student_id == student_id]

    def export_rows(self, class_id: str) -> list[dict]:
        """Rows for the class attendance sheet, oldest date first."""
        records = sorted(self.list_for_class(class_id), key=lambda r: (r.date, r.student_id))
        return [
            {
                "date": r.date,
                "class_id": r.class_id,
                "student_id": r.student_id,
                "status": r.status.value,
                "marked_by": r.marked_by,
                "timestamp": r.timestamp,
            }
            for r in records
        ]
