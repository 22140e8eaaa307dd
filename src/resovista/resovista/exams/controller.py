from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..common.validators import require_bool
from ..container import Container
from ..core.enums import SubmitReason
from ..core.exceptions import ValidationError
from .model import Exam

# Reasons a client may claim; tab_switch_limit is only set by proctoring.
_CLIENT_REASONS = {None: SubmitReason.MANUAL, "manual": SubmitReason.MANUAL, "time_up": SubmitReason.TIME_UP}


def _exam_view(exam: Exam) -> dict:
    return exam.to_dict() if current_user().is_staff else exam.to_public_dict()


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/exams/create", methods=["POST"], endpoint="exams_create")
    @auth_required
    def create():
        exam = container.exam_service.create(current_user(), json_body())
        return ok(exam=exam.to_dict())

    @app.route(f"{prefix}/exams", methods=["GET"], endpoint="exams_list")
    @auth_required
    def list_exams():
        return ok(exams=[_exam_view(e) for e in container.exam_service.list_exams()])

    @app.route(f"{prefix}/exams/<exam_id>", methods=["GET"], endpoint="exams_get")
    @auth_required
    def get_exam(exam_id: str):
        return ok(exam=_exam_view(container.exam_service.get(exam_id)))

    @app.route(f"{prefix}/exams/<exam_id>/submit", methods=["POST"], endpoint="exams_submit")
    @auth_required
    def submit(exam_id: str):
        data = json_body()
        reason = data.get("reason")
        if not (reason is None or isinstance(reason, str)) or reason not in _CLIENT_REASONS:
            raise ValidationError("reason must be 'manual' or 'time_up'")

        submission = container.exam_service.submit(
            current_user(),
            exam_id,
            answers=data.get("answers"),
            time_spent=data.get("timeSpent"),
            reason=_CLIENT_REASONS[reason],
        )
        return ok(submission=submission.to_dict())

    @app.route(f"{prefix}/exams/<exam_id>/results/<student_id>", methods=["GET"], endpoint="exams_result")
    @auth_required
    def result(exam_id: str, student_id: str):
        submission = container.exam_service.get_result(current_user(), exam_id, student_id)
        return ok(submission=submission.to_dict() if submission else None)

    @app.route(f"{prefix}/exams/<exam_id>/submissions", methods=["GET"], endpoint="exams_submissions")
    @auth_required
    def submissions(exam_id: str):
        items = container.exam_service.list_submissions(current_user(), exam_id)
        return ok(submissions=[s.to_dict() for s in items])

    @app.route(f"{prefix}/exams/<exam_id>/start", methods=["POST"], endpoint="exams_start")
    @auth_required
    def start(exam_id: str):
        session = container.proctoring_service.start_exam(current_user(), exam_id)
        exam = container.exam_service.get(exam_id)
        return ok(session=session.to_dict(), duration=exam.duration)

    @app.route(f"{prefix}/exams/<exam_id>/proctor/visibility", methods=["POST"], endpoint="exams_visibility")
    @auth_required
    def exam_visibility(exam_id: str):
        data = json_body()
        outcome = container.proctoring_service.report_exam_visibility(
            current_user(),
            exam_id,
            hidden=require_bool(data.get("hidden", True), "hidden"),
            answers=data.get("answers"),
            time_spent=data.get("timeSpent"),
        )
        return ok(**outcome.to_dict())

    @app.route(f"{prefix}/live-classes/<class_id>/proctor/visibility", methods=["POST"], endpoint="live_class_visibility")
    @auth_required
    def live_class_visibility(class_id: str):
        data = json_body()
        outcome = container.proctoring_service.report_live_class_visibility(
            current_user(),
            class_id,
            hidden=require_bool(data.get("hidden", True), "hidden"),
            teacher_id=data.get("teacherId"),
        )
        return ok(**outcome.to_dict())
