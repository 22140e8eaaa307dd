from __future__ import annotations

import csv
import io

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container
from .service import CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    def _write_csv(rows: list[dict], *, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route(f"{prefix}/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @auth_required
    def mark():
        data = json_body()
        record = container.attendance_service.mark(
            current_user(),
            class_id=data.get("classId"),
            student_id=data.get("studentId"),
            status=data.get("status"),
            date=data.get("date"),
        )
        return ok(record=record.to_dict())

    @app.route(f"{prefix}/attendance/<class_id>", methods=["GET"], endpoint="attendance_list")
    @auth_required
    def list_for_class(class_id: str):
        records = container.attendance_service.list_for_class(class_id)
        return ok(records=[r.to_dict() for r in records])

    @app.route(f"{prefix}/attendance/<class_id>/export", methods=["GET"], endpoint="attendance_export")
    @auth_required
    def export(class_id: str):
        rows = container.attendance_service.export_rows(class_id)
        return _write_csv(rows, filename=f"attendance_{class_id}.csv")
