from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Certificate:
    """Lab completion certificate."""

    id: str
    student_id: str
    lab_name: str
    score: float
    completion_date: str
    issued_by: str
    issued_at: str
    certificate_number: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "labName": self.lab_name,
            "score": self.score,
            "completionDate": self.completion_date,
            "issuedBy": self.issued_by,
            "issuedAt": self.issued_at,
            "certificateNumber": self.certificate_number,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Certificate":
        return cls(
            id=str(data["id"]),
            student_id=str(data["studentId"]),
            lab_name=str(data.get("labName", "")),
            score=data.get("score") or 0,
            completion_date=str(data.get("completionDate", "")),
            issued_by=str(data.get("issuedBy", "")),
            issued_at=str(data.get("issuedAt", "")),
            certificate_number=str(data.get("certificateNumber", "")),
        )
