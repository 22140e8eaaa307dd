from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.permissions import ensure_role
from ..common.validators import require_fields, require_key_part, require_number
from ..core.constants import FAILING_GRADE, GRADE_THRESHOLDS
from ..core.enums import STAFF_ROLES
from ..core.exceptions import ValidationError
from ..users.model import CurrentUser
from .model import MarkRecord
from .repository import MarksRepository

logger = logging.getLogger(__name__)


def grade_for(percentage: float) -> str:
    for grade, minimum in GRADE_THRESHOLDS:
        if percentage >= minimum:
            return grade
    return FAILING_GRADE


@dataclass(frozen=True)
class MarksSummary:
    student_id: str
    results: list[dict]
    average_percentage: float
    distinctions: int
    by_subject: dict[str, float]

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "results": self.results,
            "averagePercentage": self.average_percentage,
            "distinctions": self.distinctions,
            "bySubject": self.by_subject,
        }


class MarksService:
    def __init__(self, marks: MarksRepository, *, clock: Clock = now_utc):
        self._marks = marks
        self._clock = clock

    def add(
        self,
        actor: CurrentUser,
        *,
        student_id: Any,
        subject: Any,
        marks: Any,
        max_marks: Any,
        exam_type: Optional[str] = None,
    ) -> MarkRecord:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can add marks")
        require_fields(
            {"studentId": student_id, "subject": subject, "marks": marks, "maxMarks": max_marks},
            "studentId", "subject", "marks", "maxMarks",
        )
        student_id = require_key_part(student_id, "studentId")
        subject = require_key_part(subject, "subject")
        obtained = require_number(marks, "marks")
        maximum = require_number(max_marks, "maxMarks")
        if maximum <= 0:
            raise ValidationError("maxMarks must be positive")
        if obtained < 0 or obtained > maximum:
            raise ValidationError("marks must be between 0 and maxMarks")

        now = self._clock()
        record = MarkRecord(
            id=f"marks:{student_id}:{subject}:{to_millis(now)}",
            student_id=student_id,
            subject=subject,
            marks=obtained,
            max_marks=maximum,
            exam_type=exam_type,
            added_by=actor.id,
            date=to_iso(now),
        )
        self._marks.save(record)
        logger.info("Marks added for %s in %s", student_id, subject)
        return record

    def list_for_student(self, student_id: str) -> Sequence[MarkRecord]:
        return self._marks.list_for_student(require_key_part(student_id, "studentId"))

    def summary(self, student_id: str) -> MarksSummary:
        records = self.list_for_student(student_id)

        results = []
        per_subject: dict[str, list[float]] = {}
        for r in records:
            pct = r.percentage
            results.append({**r.to_dict(), "percentage": pct, "grade": grade_for(pct)})
            per_subject.setdefault(r.subject, []).append(pct)

        percentages = [row["percentage"] for row in results]
        average = round(sum(percentages) / len(percentages), 2) if percentages else 0.0
        return MarksSummary(
            student_id=student_id,
            results=results,
            average_percentage=average,
            distinctions=sum(1 for p in percentages if p >= 90),
            by_subject={s: round(sum(v) / len(v), 2) for s, v in sorted(per_subject.items())},
        )
