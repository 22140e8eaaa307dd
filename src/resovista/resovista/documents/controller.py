from __future__ import annotations

from flask import Flask, request, send_file

from ..common.http import current_user, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/documents/upload", methods=["POST"], endpoint="documents_upload")
    @auth_required
    def upload():
        file = request.files.get("file")
        document = container.document_service.upload(
            current_user(),
            file_name=file.filename if file else None,
            data=file.read() if file else None,
            content_type=file.mimetype if file else None,
            title=request.form.get("title"),
            description=request.form.get("description"),
            category=request.form.get("category"),
        )
        return ok(document=document.to_dict())

    @app.route(f"{prefix}/documents", methods=["GET"], endpoint="documents_list")
    @auth_required
    def list_documents():
        return ok(documents=[d.to_dict() for d in container.document_service.list_for(current_user())])

    @app.route(f"{prefix}/documents/download/<token>", methods=["GET"], endpoint="documents_download")
    def download(token: str):
        path = container.document_service.resolve_download(token)
        # Stored names carry a "{millis}-" prefix.
        download_name = path.name.split("-", 1)[-1]
        return send_file(path, as_attachment=True, download_name=download_name)

    @app.route(f"{prefix}/documents/<document_id>", methods=["DELETE"], endpoint="documents_delete")
    @auth_required
    def delete(document_id: str):
        container.document_service.delete(current_user(), document_id)
        return ok()
