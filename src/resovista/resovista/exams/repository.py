from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Exam, ProctorSession, Submission


class ExamRepository(Protocol):
    def save(self, exam: Exam) -> None:
        raise NotImplementedError

    def get(self, exam_id: str) -> Optional[Exam]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Exam]:
        raise NotImplementedError


class SubmissionRepository(Protocol):
    def save(self, submission: Submission) -> None:
        raise NotImplementedError

    def get(self, exam_id: str, student_id: str) -> Optional[Submission]:
        raise NotImplementedError

    def list_for_exam(self, exam_id: str) -> Sequence[Submission]:
        raise NotImplementedError


class ProctorRepository(Protocol):
    def save(self, session: ProctorSession) -> None:
        raise NotImplementedError

    def get(self, session_id: str, student_id: str) -> Optional[ProctorSession]:
        raise NotImplementedError
