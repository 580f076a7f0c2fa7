"""Centralized JSON error handling producing the ``{success, message, payload}`` envelope."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from gallery_admin.core.constants import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER, Messages
from gallery_admin.core.logger import ensure_request_id
from gallery_admin.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    SessionUserNotFoundError,
    TokenError,
    TokenExpiredError,
    TokenMissingError,
    TokenRevokedError,
)

log = logging.getLogger(__name__)

# Most specific classes first; lookup walks the MRO of the raised error.
SERVICE_ERROR_STATUS: dict[type[ServiceError], HTTPStatus] = {
    TokenMissingError: HTTPStatus.UNAUTHORIZED,
    TokenExpiredError: HTTPStatus.UNAUTHORIZED,
    InvalidTokenError: HTTPStatus.UNAUTHORIZED,
    TokenRevokedError: HTTPStatus.FORBIDDEN,
    InvalidRefreshTokenError: HTTPStatus.FORBIDDEN,
    SessionUserNotFoundError: HTTPStatus.NOT_FOUND,
    TokenError: HTTPStatus.UNAUTHORIZED,
    AuthenticationError: HTTPStatus.UNAUTHORIZED,
    AuthorizationError: HTTPStatus.FORBIDDEN,
    NotFoundError: HTTPStatus.NOT_FOUND,
    ConflictError: HTTPStatus.CONFLICT,
    BadRequestError: HTTPStatus.BAD_REQUEST,
    ServiceError: HTTPStatus.BAD_REQUEST,
}


def status_for(exc: ServiceError) -> HTTPStatus:
    """Return the HTTP status registered for ``exc`` or its nearest ancestor."""
    for klass in type(exc).__mro__:
        status = SERVICE_ERROR_STATUS.get(klass)  # type: ignore[arg-type]
        if status is not None:
            return status
    return HTTPStatus.BAD_REQUEST


def envelope(success: bool, message: str, payload: Any = None) -> dict[str, Any]:
    """Build the response body shared by every endpoint."""
    return {"success": success, "message": message, "payload": payload}


def _error_response(status: int, message: str, payload: Any = None) -> tuple[Response, int]:
    return jsonify(envelope(False, message, payload)), int(status)


def clear_token_headers(response: Response) -> Response:
    """Remove both token headers so the client drops its stored pair."""
    response.headers.pop(ACCESS_TOKEN_HEADER, None)
    response.headers.pop(REFRESH_TOKEN_HEADER, None)
    return response


class APIError(Exception):
    """
    Represent an error raised directly by the HTTP layer.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    payload : Any, optional
        Optional structured data placed in the envelope ``payload``.
    """

    def __init__(self, message: str, status_code: int = 400, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.payload = payload


class BadRequest(APIError):
    """400 for malformed input detected in a view."""

    def __init__(self, message: str = Messages.BAD_REQUEST) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST)


class Unauthorized(APIError):
    """401 when no authenticated user is available."""

    def __init__(self, message: str = Messages.UNAUTH) -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = Messages.ADMIN_REQUIRED) -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every failure is rendered with the standard envelope and ``success: false``.
    - Session protocol failures strip the token headers.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status = status_for(err)
        log.warning(
            "ServiceError: kind=%s status=%s msg=%s request_id=%s",
            type(err).__name__,
            int(status),
            err.message,
            ensure_request_id(),
        )
        response, code = _error_response(status, err.message)
        if isinstance(err, TokenError):
            clear_token_headers(response)
        return response, code

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: status=%s msg=%s request_id=%s",
            err.status_code,
            err.message,
            ensure_request_id(),
        )
        return _error_response(err.status_code, err.message, err.payload)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = HTTPStatus(status).phrase
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        # Avoid leaking tracebacks for expected HTTP errors (no exc_info)
        level(
            "HTTPException: status=%s detail=%s request_id=%s",
            status,
            message,
            ensure_request_id(),
        )
        return _error_response(status, message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        log.warning("ValidationError: request_id=%s", ensure_request_id())
        return _error_response(
            HTTPStatus.BAD_REQUEST, Messages.VALIDATION_FAILED, {"errors": err.messages}
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(HTTPStatus.CONFLICT, Messages.RESOURCE_CONFLICT)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(HTTPStatus.SERVICE_UNAVAILABLE, Messages.SERVICE_UNAVAILABLE)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, Messages.INTERNAL_SERVER_ERROR)
