from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/marks/add", methods=["POST"], endpoint="marks_add")
    @auth_required
    def add():
        data = json_body()
        record = container.marks_service.add(
            current_user(),
            student_id=data.get("studentId"),
            subject=data.get("subject"),
            marks=data.get("marks"),
            max_marks=data.get("maxMarks"),
            exam_type=data.get("examType"),
        )
        return ok(record=record.to_dict())

    @app.route(f"{prefix}/marks/<student_id>", methods=["GET"], endpoint="marks_list")
    @auth_required
    def list_for_student(student_id: str):
        return ok(marks=[r.to_dict() for r in container.marks_service.list_for_student(student_id)])

    @app.route(f"{prefix}/marks/<student_id>/summary", methods=["GET"], endpoint="marks_summary")
    @auth_required
    def summary(student_id: str):
        return ok(summary=container.marks_service.summary(student_id).to_dict())
