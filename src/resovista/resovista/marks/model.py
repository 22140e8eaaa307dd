from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class MarkRecord:
    id: str
    student_id: str
    subject: str
    marks: float
    max_marks: float
    exam_type: Optional[str]
    added_by: str
    date: str

    @property
    def percentage(self) -> float:
        return round(self.marks / self.max_marks * 100, 2) if self.max_marks else 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "subject": self.subject,
            "marks": self.marks,
            "maxMarks": self.max_marks,
            "examType": self.exam_type,
            "addedBy": self.added_by,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MarkRecord":
        return cls(
            id=str(data.get("id", "")),
            student_id=str(data["studentId"]),
            subject=str(data["subject"]),
            marks=float(data.get("marks") or 0),
            max_marks=float(data.get("maxMarks") or 0),
            exam_type=data.get("examType"),
            added_by=str(data.get("addedBy", "")),
            date=str(data.get("date", "")),
        )
