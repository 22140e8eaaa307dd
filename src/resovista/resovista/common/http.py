from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ValidationError

if TYPE_CHECKING:
    from ..container import Container
    from ..users.model import CurrentUser

logger = logging.getLogger(__name__)


def ok(**payload: Any):
    return jsonify({"success": True, **payload})


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def json_body() -> dict:
    """Request body as a JSON object; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_user() -> "CurrentUser":
    return g.current_user


def make_auth_required(container: "Container"):
    def auth_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = container.auth_service.authenticate(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return auth_required


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)


def register_request_logging(app: Flask) -> None:
    access_log = logging.getLogger("resovista.access")

    @app.after_request
    def log_request(response):
        access_log.info("%s %s %s", request.method, request.path, response.status_code)
        return response
