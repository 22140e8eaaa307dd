from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .certificates.controller import register as register_certificates
from .chat.controller import register as register_chat
from .common.http import register_error_handlers, register_request_logging
from .container import Container, build_container, build_kv_store
from .core.constants import (
    DEFAULT_API_PREFIX,
    DEFAULT_BUCKET_NAME,
    DEFAULT_TOKEN_MAX_AGE,
    MAX_UPLOAD_BYTES,
    SERVICE_NAME,
    SIGNED_URL_TTL,
)
from .database.bootstrap import apply_schema, list_tables
from .documents.controller import register as register_documents
from .exams.controller import register as register_exams
from .feedback.controller import register as register_feedback
from .marks.controller import register as register_marks
from .notifications.controller import register as register_notifications
from .storage.blob_storage import LocalBlobStorage
from .todos.controller import register as register_todos
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    prefix = "/" + str(getattr(settings, "API_PREFIX", DEFAULT_API_PREFIX)).strip("/")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["API_PREFIX"] = prefix
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))

    CORS(
        app,
        resources={f"{prefix}/*": {"origins": getattr(settings, "CORS_ORIGINS", "*")}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        expose_headers=["Content-Length"],
        max_age=600,
    )
    register_error_handlers(app)
    register_request_logging(app)

    if container is None:
        container = _container_from_settings(settings, settings_module, prefix)

    if container.blobs.ensure_bucket():
        logger.info("Documents bucket created")

    register_users(app, container)
    register_attendance(app, container)
    register_exams(app, container)
    register_marks(app, container)
    register_todos(app, container)
    register_notifications(app, container)
    register_feedback(app, container)
    register_certificates(app, container)
    register_chat(app, container)
    register_documents(app, container)
    register_analytics(app, container)

    @app.route(f"{prefix}/health", methods=["GET"], endpoint="health")
    def health():
        return {"status": "ok", "service": SERVICE_NAME}

    app.extensions["resovista"] = container
    return app


def _container_from_settings(settings, settings_module: str, prefix: str) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory"))
    db_config = getattr(settings, "DB_CONFIG", {})
    secret_key = getattr(settings, "SECRET_KEY")

    # Never log the password.
    logger.info(
        "settings=%s storage=%s db=%s@%s:%s/%s",
        settings_module,
        backend,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if backend.lower() == "mysql" and getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    blobs = LocalBlobStorage(
        getattr(settings, "BLOB_DIR", "storage"),
        bucket=getattr(settings, "BUCKET_NAME", DEFAULT_BUCKET_NAME),
        secret_key=secret_key,
        url_base=f"{prefix}/documents/download",
    )
    return build_container(
        kv=build_kv_store(backend=backend, db_config=db_config),
        blobs=blobs,
        secret_key=secret_key,
        token_max_age=int(getattr(settings, "TOKEN_MAX_AGE", DEFAULT_TOKEN_MAX_AGE)),
        signed_url_ttl=int(getattr(settings, "SIGNED_URL_TTL", SIGNED_URL_TTL)),
    )


def run() -> None:
    app = create_app()
    app.run(host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
