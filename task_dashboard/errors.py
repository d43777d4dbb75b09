"""
Error taxonomy and Flask error handlers.

Services raise subclasses of :class:`ApiError`; the handlers registered by
:func:`register_error_handlers` turn them, Werkzeug HTTP errors and any
unexpected exception into the JSON envelope.

    ValidationError  422  malformed or missing input, with field messages
    Conflict         409  duplicate unique key
    Unauthenticated  401  missing/invalid/expired token or bad credentials
    NotFound         404  missing or not-owned resource
    InternalError    500  anything else
"""

from __future__ import annotations

import logging

from flask import Flask, Response, current_app, request
from werkzeug.exceptions import HTTPException

from . import db
from .responses import error_response

logger = logging.getLogger(__name__)

REDACTED_INTERNAL_MESSAGE = "An internal server error occurred."


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status and message."""

    status_code = 500
    default_message = REDACTED_INTERNAL_MESSAGE

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 422
    default_message = "Validation failed."


class Conflict(ApiError):
    status_code = 409
    default_message = "Resource already exists."


class Unauthenticated(ApiError):
    """
    Authentication failure.

    ``reason`` identifies which check failed (``"no_header"``,
    ``"token_invalid"``, ``"token_expired"``, ``"subject_gone"`` or
    ``"bad_credentials"``) without widening what the client sees.
    """

    status_code = 401
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None, reason: str = "bad_credentials") -> None:
        super().__init__(message)
        self.reason = reason


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found."


class InternalError(ApiError):
    status_code = 500


def register_error_handlers(app: Flask) -> None:
    """Attach JSON-envelope handlers for all error types to *app*."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        if error.status_code >= 500:
            logger.error("API error on %s %s: %s", request.method, request.path, error.message)
        return error_response(error.message, error.status_code, error.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
        status_code = error.code or 500
        if status_code == 404:
            message = f"Route {request.method} {request.path} not found."
        else:
            message = error.description or error.name
        return error_response(message, status_code)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> tuple[Response, int]:
        # Leave the scoped session usable for the next request.
        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if current_app.config.get("EXPOSE_ERROR_DETAILS"):
            message = str(error) or REDACTED_INTERNAL_MESSAGE
        else:
            message = REDACTED_INTERNAL_MESSAGE
        return error_response(message, 500)
