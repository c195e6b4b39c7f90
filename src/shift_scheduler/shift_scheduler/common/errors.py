from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation_error": 400,
    "authentication_failed": 401,
    "permission_denied": 403,
    "not_found": 404,
    "conflict": 409,
    "invariant_violation": 500,
}


def error_response(*, status_code: int, code: str, message: str):
    payload = {"success": False, "error": {"code": code, "message": message}}
    return jsonify(payload), status_code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status_code = STATUS_BY_KIND.get(exc.kind, 400)
        if status_code >= 500:
            logger.error("request failed", extra={"kind": exc.kind, "path": request.path, "method": request.method})
        else:
            logger.warning("request refused", extra={"kind": exc.kind, "path": request.path, "method": request.method})
        return error_response(status_code=status_code, code=exc.kind, message=exc.message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        code = (exc.name or "http_error").lower().replace(" ", "_")
        return error_response(status_code=exc.code or 500, code=code, message=exc.description or "Request failed")

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("unhandled_error", extra={"path": request.path, "method": request.method})
        return error_response(status_code=500, code="server_error", message="Server error")
