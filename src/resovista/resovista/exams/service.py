from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.permissions import ensure_role
from ..common.validators import require_fields, require_key_part, require_non_empty, require_number
from ..core.enums import (
    STAFF_ROLES,
    NotificationType,
    Priority,
    ProctorAction,
    ProctorContext,
    ProctorStatus,
    SubmitReason,
)
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import CurrentUser
from .model import Exam, ProctorSession, Submission
from .proctoring import ProctorDecision, TabSwitchMonitor
from .repository import ExamRepository, ProctorRepository, SubmissionRepository
from .scoring import normalize_answers, score_answers

logger = logging.getLogger(__name__)


class ExamService:
    """Use cases: create/list exams, submit answers, read results."""

    def __init__(self, exams: ExamRepository, submissions: SubmissionRepository, *, clock: Clock = now_utc):
        self._exams = exams
        self._submissions = submissions
        self._clock = clock

    def create(self, actor: CurrentUser, data: Mapping[str, Any]) -> Exam:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can create exams")
        if not isinstance(data, Mapping):
            raise ValidationError("Exam must be a JSON object")
        require_fields(data, "title", "questions", message="Title and questions are required")

        questions = data.get("questions")
        if not isinstance(questions, list) or not questions:
            raise ValidationError("questions must be a non-empty list")
        if not all(isinstance(q, Mapping) for q in questions):
            raise ValidationError("Each question must be an object")

        duration = data.get("duration")
        if duration is not None:
            duration = require_number(duration, "duration")
            if duration <= 0:
                raise ValidationError("duration must be positive")

        now = self._clock()
        exam = Exam(
            id=f"exam:{to_millis(now)}",
            title=require_non_empty(data.get("title"), "title"),
            questions=list(questions),
            created_by=actor.id,
            created_at=to_iso(now),
            duration=duration,
            extra={k: v for k, v in data.items() if k not in ("id", "title", "questions", "duration", "createdBy", "createdAt")},
        )
        self._exams.save(exam)
        logger.info("Exam %s created by %s with %d questions", exam.id, actor.id, len(exam.questions))
        return exam

    def list_exams(self) -> Sequence[Exam]:
        return self._exams.list_all()

    def get(self, exam_id: str) -> Exam:
        exam = self._exams.get(exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        return exam

    def submit(
        self,
        student: CurrentUser,
        exam_id: str,
        *,
        answers: Any,
        time_spent: Any = None,
        reason: SubmitReason = SubmitReason.MANUAL,
    ) -> Submission:
        exam = self.get(exam_id)

        spent = 0.0 if time_spent is None else require_number(time_spent, "timeSpent")
        if spent < 0:
            raise ValidationError("timeSpent must not be negative")

        normalized = normalize_answers(answers, exam.questions)
        result = score_answers(exam.questions, normalized)

        submission = Submission(
            exam_id=exam.id,
            student_id=student.id,
            answers=normalized,
            time_spent=spent,
            submitted_at=to_iso(self._clock()),
            score=result.score,
            max_score=result.max_score,
            percentage=result.percentage,
            auto_submitted=reason != SubmitReason.MANUAL,
            submit_reason=reason,
        )
        self._submissions.save(submission)
        logger.info("Submission for %s by %s (%s)", exam.id, student.id, reason.value)
        return submission

    def get_result(self, actor: CurrentUser, exam_id: str, student_id: str) -> Optional[Submission]:
        if not actor.is_staff and actor.id != student_id:
            raise AuthorizationError("Students can only view their own results")
        return self._submissions.get(exam_id, student_id)

    def submission_for(self, exam_id: str, student_id: str) -> Optional[Submission]:
        return self._submissions.get(exam_id, student_id)

    def list_submissions(self, actor: CurrentUser, exam_id: str) -> Sequence[Submission]:
        ensure_role(actor, STAFF_ROLES, "Only teachers or admins can view all submissions")
        return self._submissions.list_for_exam(self.get(exam_id).id)


@dataclass(frozen=True)
class ProctorOutcome:
    decision: ProctorDecision
    session: Optional[ProctorSession]
    submission: Optional[Submission] = None

    def to_dict(self) -> dict:
        data = self.decision.to_dict()
        data["session"] = self.session.to_dict() if self.session else None
        if self.submission:
            data["submission"] = self.submission.to_dict()
        return data


class ProctoringService:
    """Tab-switch heuristic for exams and live classes.

    Not a security control: it only reacts to what the client reports.
    """

    def __init__(
        self,
        sessions: ProctorRepository,
        exams: ExamService,
        *,
        notifications=None,
        clock: Clock = now_utc,
        limit: Optional[int] = None,
    ):
        self._sessions = sessions
        self._exams = exams
        self._notifications = notifications
        self._clock = clock
        self._limit = limit

    def _monitor(self, session: ProctorSession) -> TabSwitchMonitor:
        kwargs = {"count": session.tab_switches, "closed": session.status == ProctorStatus.AUTO_SUBMITTED}
        if self._limit is not None:
            kwargs["limit"] = self._limit
        return TabSwitchMonitor(session.context, **kwargs)

    def _submitted_since_start(self, session: ProctorSession) -> bool:
        submission = self._exams.submission_for(session.session_id, session.student_id)
        return submission is not None and submission.submitted_at >= session.started_at

    def _close(self, session: ProctorSession, status: ProctorStatus) -> ProctorSession:
        closed = ProctorSession(
            session_id=session.session_id,
            student_id=session.student_id,
            context=session.context,
            tab_switches=session.tab_switches,
            status=status,
            started_at=session.started_at,
            updated_at=to_iso(self._clock()),
        )
        self._sessions.save(closed)
        return closed

    def start_exam(self, student: CurrentUser, exam_id: str) -> ProctorSession:
        exam = self._exams.get(exam_id)
        now = to_iso(self._clock())
        session = ProctorSession(
            session_id=exam.id,
            student_id=student.id,
            context=ProctorContext.EXAM,
            tab_switches=0,
            status=ProctorStatus.ACTIVE,
            started_at=now,
            updated_at=now,
        )
        self._sessions.save(session)
        return session

    def report_exam_visibility(
        self,
        student: CurrentUser,
        exam_id: str,
        *,
        hidden: bool,
        answers: Any = None,
        time_spent: Any = None,
    ) -> ProctorOutcome:
        session = self._sessions.get(exam_id, student.id)
        if session and session.status == ProctorStatus.ACTIVE and self._submitted_since_start(session):
            session = self._close(session, ProctorStatus.SUBMITTED)
        if not session or session.status != ProctorStatus.ACTIVE or not hidden:
            count = session.tab_switches if session else 0
            return ProctorOutcome(ProctorDecision(ProctorAction.NONE, count, 0), session)

        monitor = self._monitor(session)
        decision = monitor.record_focus_loss()

        submission = None
        status = session.status
        if decision.action == ProctorAction.AUTO_SUBMIT:
            submission = self._exams.submit(
                student, exam_id, answers=answers, time_spent=time_spent, reason=SubmitReason.TAB_SWITCH_LIMIT
            )
            status = ProctorStatus.AUTO_SUBMITTED
            logger.warning("Auto-submitted %s for %s after %d tab switches", exam_id, student.id, decision.count)

        session = ProctorSession(
            session_id=session.session_id,
            student_id=session.student_id,
            context=session.context,
            tab_switches=monitor.count,
            status=status,
            started_at=session.started_at,
            updated_at=to_iso(self._clock()),
        )
        self._sessions.save(session)
        return ProctorOutcome(decision, session, submission)

    def report_live_class_visibility(
        self,
        student: CurrentUser,
        class_id: Any,
        *,
        hidden: bool,
        teacher_id: Optional[str] = None,
    ) -> ProctorOutcome:
        class_id = f"live:{require_key_part(class_id, 'classId')}"
        now = to_iso(self._clock())
        session = self._sessions.get(class_id, student.id) or ProctorSession(
            session_id=class_id,
            student_id=student.id,
            context=ProctorContext.LIVE_CLASS,
            tab_switches=0,
            status=ProctorStatus.ACTIVE,
            started_at=now,
            updated_at=now,
            teacher_id=teacher_id,
        )
        if not hidden:
            return ProctorOutcome(ProctorDecision(ProctorAction.NONE, session.tab_switches, 0), session)

        monitor = self._monitor(session)
        decision = monitor.record_focus_loss()
        first_limit = decision.action == ProctorAction.LIMIT_REACHED and session.status == ProctorStatus.ACTIVE

        session = ProctorSession(
            session_id=session.session_id,
            student_id=session.student_id,
            context=session.context,
            tab_switches=monitor.count,
            status=ProctorStatus.LIMIT_REACHED if decision.action == ProctorAction.LIMIT_REACHED else session.status,
            started_at=session.started_at,
            updated_at=now,
            teacher_id=teacher_id or session.teacher_id,
        )
        self._sessions.save(session)

        if first_limit and session.teacher_id and self._notifications is not None:
            self._notifications.notify(
                sender_id=student.id,
                recipient_id=session.teacher_id,
                title="Tab switch limit reached",
                message=f"{student.name or student.id} switched tabs {monitor.count} times during the live class",
                type=NotificationType.ALERT,
                priority=Priority.HIGH,
            )
        return ProctorOutcome(decision, session)
