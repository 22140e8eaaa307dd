from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import Exam, ProctorSession, Submission
from .repository import ExamRepository, ProctorRepository, SubmissionRepository


class KVExamRepository(ExamRepository):
    """Exams live under their own id, which already is the key (``exam:{millis}``)."""

    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, exam: Exam) -> None:
        self._kv.set(exam.id, exam.to_dict())

    def get(self, exam_id: str) -> Optional[Exam]:
        if not exam_id.startswith("exam:"):
            return None
        data = self._kv.get(exam_id)
        return Exam.from_dict(data) if data else None

    def list_all(self) -> Sequence[Exam]:
        return [Exam.from_dict(d) for d in self._kv.get_by_prefix("exam:")]


class KVSubmissionRepository(SubmissionRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, submission: Submission) -> None:
        self._kv.set(f"submission:{submission.exam_id}:{submission.student_id}", submission.to_dict())

    def get(self, exam_id: str, student_id: str) -> Optional[Submission]:
        data = self._kv.get(f"submission:{exam_id}:{student_id}")
        return Submission.from_dict(data) if data else None

    def list_for_exam(self, exam_id: str) -> Sequence[Submission]:
        return [Submission.from_dict(d) for d in self._kv.get_by_prefix(f"submission:{exam_id}:")]


class KVProctorRepository(ProctorRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, session: ProctorSession) -> None:
        self._kv.set(f"proctor:{session.session_id}:{session.student_id}", session.to_dict())

    def get(self, session_id: str, student_id: str) -> Optional[ProctorSession]:
        data = self._kv.get(f"proctor:{session_id}:{student_id}")
        return ProctorSession.from_dict(data) if data else None
