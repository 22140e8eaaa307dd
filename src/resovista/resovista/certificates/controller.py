from __future__ import annotations

import io

from flask import Flask, send_file

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/certificates/issue", methods=["POST"], endpoint="certificates_issue")
    @auth_required
    def issue():
        data = json_body()
        certificate = container.certificate_service.issue(
            current_user(),
            student_id=data.get("studentId"),
            lab_name=data.get("labName"),
            score=data.get("score"),
            completion_date=data.get("completionDate"),
        )
        return ok(certificate=certificate.to_dict())

    @app.route(f"{prefix}/certificates/verify/<certificate_number>", methods=["GET"], endpoint="certificates_verify")
    def verify(certificate_number: str):
        certificate = container.certificate_service.verify(certificate_number)
        return ok(valid=True, certificate=certificate.to_dict())

    @app.route(f"{prefix}/certificates/<certificate_id>/qr", methods=["GET"], endpoint="certificates_qr")
    @auth_required
    def qr(certificate_id: str):
        png = container.certificate_service.qr_png(certificate_id)
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route(f"{prefix}/certificates/<student_id>", methods=["GET"], endpoint="certificates_list")
    @auth_required
    def list_for_student(student_id: str):
        certificates = container.certificate_service.list_for_student(student_id)
        return ok(certificates=[c.to_dict() for c in certificates])
