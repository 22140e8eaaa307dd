from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import ProctorContext, ProctorStatus, SubmitReason

_EXAM_FIELDS = ("id", "title", "questions", "duration", "createdBy", "createdAt")
_ANSWER_KEY_FIELDS = frozenset({"correctAnswer"})


@dataclass(frozen=True)
class Exam:
    """Exam or quiz definition.

    ``questions`` are kept as the client sent them; a question is auto-graded
    when it carries a ``correctAnswer``. Other caller fields live in ``extra``.
    """

    id: str
    title: str
    questions: list
    created_by: str
    created_at: str
    duration: Optional[float] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(title=self.title, questions=list(self.questions))
        if self.duration is not None:
            data["duration"] = self.duration
        data.update(id=self.id, createdBy=self.created_by, createdAt=self.created_at)
        return data

    def to_public_dict(self) -> dict:
        """Exam as a student sees it, without the answer key."""
        data = self.to_dict()
        data["questions"] = [
            {k: v for k, v in q.items() if k not in _ANSWER_KEY_FIELDS} if isinstance(q, Mapping) else q
            for q in self.questions
        ]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Exam":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            questions=list(data.get("questions") or []),
            created_by=str(data.get("createdBy", "")),
            created_at=str(data.get("createdAt", "")),
            duration=data.get("duration"),
            extra={k: v for k, v in data.items() if k not in _EXAM_FIELDS},
        )


@dataclass(frozen=True)
class Submission:
    """One answer set per student per exam; a resubmission replaces it."""

    exam_id: str
    student_id: str
    answers: dict
    time_spent: float
    submitted_at: str
    score: float = 0
    max_score: float = 0
    percentage: Optional[float] = None
    auto_submitted: bool = False
    submit_reason: SubmitReason = SubmitReason.MANUAL

    def to_dict(self) -> dict:
        return {
            "examId": self.exam_id,
            "studentId": self.student_id,
            "answers": dict(self.answers),
            "timeSpent": self.time_spent,
            "submittedAt": self.submitted_at,
            "score": self.score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "autoSubmitted": self.auto_submitted,
            "submitReason": self.submit_reason.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Submission":
        return cls(
            exam_id=str(data["examId"]),
            student_id=str(data["studentId"]),
            answers=dict(data.get("answers") or {}),
            time_spent=data.get("timeSpent") or 0,
            submitted_at=str(data.get("submittedAt", "")),
            score=data.get("score") or 0,
            max_score=data.get("maxScore") or 0,
            percentage=data.get("percentage"),
            auto_submitted=bool(data.get("autoSubmitted", False)),
            submit_reason=SubmitReason(data.get("submitReason", SubmitReason.MANUAL.value)),
        )


@dataclass(frozen=True)
class ProctorSession:
    """Focus-loss counter for one student in one exam or live class."""

    session_id: str
    student_id: str
    context: ProctorContext
    tab_switches: int
    status: ProctorStatus
    started_at: str
    updated_at: str
    teacher_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "sessionId": self.session_id,
            "studentId": self.student_id,
            "context": self.context.value,
            "tabSwitches": self.tab_switches,
            "status": self.status.value,
            "startedAt": self.started_at,
            "updatedAt": self.updated_at,
        }
        if self.teacher_id:
            data["teacherId"] = self.teacher_id
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProctorSession":
        return cls(
            session_id=str(data["sessionId"]),
            student_id=str(data["studentId"]),
            context=ProctorContext(data.get("context", ProctorContext.EXAM.value)),
            tab_switches=int(data.get("tabSwitches", 0)),
            status=ProctorStatus(data.get("status", ProctorStatus.ACTIVE.value)),
            started_at=str(data.get("startedAt", "")),
            updated_at=str(data.get("updatedAt", "")),
            teacher_id=data.get("teacherId"),
        )
