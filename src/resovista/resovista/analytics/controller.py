from __future__ import annotations

from flask import Flask

from ..common.http import current_user, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/analytics/student/<student_id>", methods=["GET"], endpoint="analytics_student")
    @auth_required
    def student(student_id: str):
        return ok(analytics=container.analytics_service.for_student(student_id).to_dict())

    @app.route(f"{prefix}/analytics/class/<class_id>", methods=["GET"], endpoint="analytics_class")
    @auth_required
    def class_analytics(class_id: str):
        return ok(analytics=container.analytics_service.for_class(current_user(), class_id).to_dict())
