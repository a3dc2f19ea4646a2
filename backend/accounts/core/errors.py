"""
RFC 7807 problem responses for the registration API.

Every failure leaving the HTTP layer is rendered as
``application/problem+json`` with a stable ``code`` and the request
correlation id. Domain errors reach this module already translated to
:class:`APIError` by ``BaseService.translate_exceptions``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from accounts.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Fallback codes for werkzeug HTTP errors raised outside the service layer
STATUS_CODES: dict[int, str] = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.UNPROCESSABLE_ENTITY: "unprocessable_entity",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


def problem(
    status: int,
    code: str,
    detail: str,
    *,
    details: dict[str, Any] | None = None,
) -> Response:
    """
    Build a problem+json response.

    :param status: HTTP status code.
    :param code: Stable machine-readable error code.
    :param detail: Client-safe human-readable explanation.
    :param details: Optional structured context (e.g. per-field errors).
    :returns: Response carrying the problem document and ``status``.
    :rtype: flask.Response
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": detail,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    response = jsonify(body)
    response.mimetype = PROBLEM_MIMETYPE
    response.status_code = status
    return response


class APIError(Exception):
    """
    Error that the API renders as a problem response.

    Parameters
    ----------
    message : str
        Client-safe description, used as the problem ``detail``.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Stable machine-readable identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Structured context copied to the problem ``details`` member.
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

    def to_response(self) -> Response:
        return problem(self.status_code, self.code, self.message, details=self.details or None)


class Conflict(APIError):
    """409 for a username or email that already belongs to someone."""

    def __init__(self, message: str = "Conflict", *, code: str = "conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code=code)


class UnprocessableEntity(APIError):
    """422 carrying per-field validation messages under ``details.errors``."""

    def __init__(
        self,
        message: str,
        errors: dict[str, Any],
        *,
        code: str = "validation_error",
    ) -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            code=code,
            details={"errors": errors},
        )
        self.errors = errors


# --------------------------------------------------------------------------- #
# Handlers
# --------------------------------------------------------------------------- #


def handle_api_error(err: APIError) -> Response:
    level = log.error if err.status_code >= 500 else log.warning
    level("api_error status=%s detail=%s", err.status_code, err.message, extra={"code": err.code})
    return err.to_response()


def handle_http_exception(err: HTTPException) -> Response:
    status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
    code = STATUS_CODES.get(status, "error")
    if status == HTTPStatus.NOT_FOUND and has_request_context():
        detail = f"Route '{request.path}' not found"
    else:
        detail = (err.description or code.replace("_", " ").capitalize()).strip()
    level = log.error if status >= 500 else log.warning
    level("http_error status=%s detail=%s", status, detail, extra={"code": code})
    return problem(status, code, detail)


def handle_integrity_error(err: IntegrityError) -> Response:
    # A constraint no adapter translated; never echo the raw database message
    log.error("integrity_error", exc_info=err)
    return problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict")


def handle_operational_error(err: OperationalError) -> Response:
    log.error("database_unavailable", exc_info=err)
    return problem(
        HTTPStatus.SERVICE_UNAVAILABLE,
        "service_unavailable",
        "Service temporarily unavailable",
    )


def handle_unexpected_error(err: Exception) -> Response:
    # Collaborator failures (hashing, storage, token signing) end here
    log.error("unhandled_error", exc_info=err)
    return problem(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error")


def init_app(app: Flask) -> None:
    """
    Register the problem+json handlers on ``app``.

    More specific exception types are listed first; Flask picks the closest
    match in the exception's MRO regardless of order.
    """
    app.register_error_handler(APIError, handle_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(IntegrityError, handle_integrity_error)
    app.register_error_handler(OperationalError, handle_operational_error)
    app.register_error_handler(Exception, handle_unexpected_error)


__all__ = [
    "APIError",
    "Conflict",
    "UnprocessableEntity",
    "init_app",
    "problem",
]
