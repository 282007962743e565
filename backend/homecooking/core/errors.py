"""Centralized JSON (RFC 7807) error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from homecooking.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        410: "gone",
        413: "payload_too_large",
        415: "unsupported_media_type",
        422: "unprocessable_entity",
        429: "too_many_requests",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Problem+JSON dictionary.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _problem_response(problem: dict[str, Any]) -> Response:
    """Return a Flask response with ``application/problem+json`` media type."""
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, typically snake_case. Defaults to
        ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload included in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        """Serialize error metadata into an RFC 7807 problem."""
        return _as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


# Domain conveniences
class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees RFC 7807 responses for all handled errors.
    - Service-layer errors are translated by ``BaseService.translate_exceptions``.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """
    from homecooking.services._shared.base import BaseService
    from homecooking.services._shared.errors import ServiceError

    def _log(status: int, label: str, code: str, message: str, request_id: Any) -> None:
        level = log.error if status >= 500 else log.warning
        level(
            "%s: code=%s status=%s msg=%s request_id=%s",
            label,
            code,
            status,
            message,
            request_id,
        )

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        problem = err.to_problem()
        _log(err.status_code, "APIError", err.code, err.message, problem.get("request_id"))
        return _problem_response(problem), err.status_code

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return handle_api_error(BaseService.translate_exceptions(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        problem = _as_problem(status=status, code=error_code, message=message)
        _log(status, "HTTPException", error_code, message, problem.get("request_id"))
        response = _problem_response(problem)
        # Keep rate-limit headers such as Retry-After
        for header, value in err.get_headers():
            if header.lower() != "content-type":
                response.headers[header] = value
        return response, status

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        problem = _as_problem(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        log.warning("ValidationError: request_id=%s", problem.get("request_id"))
        return _problem_response(problem), HTTPStatus.UNPROCESSABLE_ENTITY

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        problem = _as_problem(
            status=HTTPStatus.CONFLICT,
            code="conflict",
            message="Resource conflict",
        )
        log.error("IntegrityError: request_id=%s", problem.get("request_id"), exc_info=True)
        return _problem_response(problem), HTTPStatus.CONFLICT

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        problem = _as_problem(
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            code="service_unavailable",
            message="Service temporarily unavailable",
        )
        log.error("OperationalError: request_id=%s", problem.get("request_id"), exc_info=True)
        return _problem_response(problem), HTTPStatus.SERVICE_UNAVAILABLE

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        problem = _as_problem(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
            message="Unexpected error",
        )
        log.error("Unhandled exception: request_id=%s", problem.get("request_id"), exc_info=True)
        return _problem_response(problem), HTTPStatus.INTERNAL_SERVER_ERROR
