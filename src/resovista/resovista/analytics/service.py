from __future__ import annotations

from dataclasses import dataclass

from ..attendance.service import AttendanceService
from ..certificates.service import CertificateService
from ..common.permissions import ensure_role
from ..common.validators import require_key_part
from ..core.enums import STAFF_ROLES, AttendanceStatus
from ..marks.service import MarksService
from ..users.model import CurrentUser


def _present_rate(records) -> float:
    if not records:
        return 0.0
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    return round(present / len(records) * 100, 2)


@dataclass(frozen=True)
class StudentAnalytics:
    total_marks: int
    average_score: float
    attendance_records: int
    attendance_percentage: float
    certificates_earned: int

    def to_dict(self) -> dict:
        return {
            "totalMarks": self.total_marks,
            "averageScore": self.average_score,
            "attendanceRecords": self.attendance_records,
            "attendancePercentage": self.attendance_percentage,
            "certificatesEarned": self.certificates_earned,
        }


@dataclass(frozen=True)
class ClassAnalytics:
    total_students: int
    total_classes: int
    average_attendance: float

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "totalClasses": self.total_classes,
            "averageAttendance": self.average_attendance,
        }


class AnalyticsService:
    """Read-only aggregates over marks, attendance and certificates."""

    def __init__(self, marks: MarksService, attendance: AttendanceService, certificates: CertificateService):
        self._marks = marks
        self._attendance = attendance
        self._certificates = certificates

    def for_student(self, student_id: str) -> StudentAnalytics:
        student_id = require_key_part(student_id, "studentId")
        marks = self._marks.list_for_student(student_id)
        attendance = self._attendance.list_for_student(student_id)
        certificates = self._certificates.list_for_student(student_id)

        average = round(sum(m.percentage for m in marks) / len(marks), 2) if marks else 0.0
        return StudentAnalytics(
            total_marks=len(marks),
            average_score=average,
            attendance_records=len(attendance),
            attendance_percentage=_present_rate(attendance),
            certificates_earned=len(certificates),
        )

    def for_class(self, actor: CurrentUser, class_id: str) -> ClassAnalytics:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can view class analytics")
        records = self._attendance.list_for_class(class_id)
        return ClassAnalytics(
            total_students=len({r.student_id for r in records}),
            total_classes=len({r.date for r in records}),
            average_attendance=_present_rate(records),
        )
