from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/feedback/submit", methods=["POST"], endpoint="feedback_submit")
    @auth_required
    def submit():
        return ok(feedback=container.feedback_service.submit(current_user(), json_body()).to_dict())

    @app.route(f"{prefix}/feedback", methods=["GET"], endpoint="feedback_list")
    @auth_required
    def list_feedback():
        return ok(feedback=[f.to_dict() for f in container.feedback_service.list_all(current_user())])
