from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

AUTH_PREFIX = "/api/auth"
SALARY_PREFIX = "/api/salaries"

# Most specific class first; first isinstance match wins
STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    # Login role mismatch is reported like a credential failure
    (AuthorizationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InternalError, 500),
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def status_for(error: DomainError) -> int:
    for cls, status in STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 500


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def get_json_body() -> dict[str, Any]:
    """Buffered request body parsed as a JSON object."""

    body = request.get_json(silent=True, force=True)
    if body is None and not request.get_data():
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON body")
    return body


def register_http_handlers(app: Flask) -> None:
    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return app.response_class(status=200)
        return None

    @app.after_request
    def _cors(response):
        for key, value in CORS_HEADERS.items():
            response.headers[key] = value
        return response

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e)
        else:
            logger.debug("%s %s -> %s %s", request.method, request.path, status, e)
        return json_error(str(e), status)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        # Unmatched method/path under a known API prefix gets a JSON 404
        if e.code in (404, 405):
            if request.path.startswith(AUTH_PREFIX):
                return json_error("Auth route not found", 404)
            if request.path.startswith(SALARY_PREFIX):
                return json_error("Route not found", 404)
        return e

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(e) if app.config.get("DEBUG") else "Internal server error"
        return json_error(message, 500)
