"""Helpers that wrap every API payload in the standard JSON envelope."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def success_response(
    data: Any = None, message: str | None = None, status_code: int = 200
) -> tuple[Response, int]:
    """
    Build a ``{"success": true, ...}`` response.

    ``data`` and ``message`` are only included when provided so that, for
    example, a delete confirmation carries just a message.
    """
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return jsonify(body), status_code


def error_response(
    message: str, status_code: int, errors: list[str] | None = None
) -> tuple[Response, int]:
    """Build a ``{"success": false, "message": ...}`` response."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status_code
