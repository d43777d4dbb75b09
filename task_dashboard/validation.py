"""
Input validation for auth and task payloads.

Each validator checks every field, collects all problems, and raises one
:class:`~task_dashboard.errors.ValidationError` listing them.  On success
it returns cleaned values (trimmed strings, parsed dates) so handlers never
touch the raw body again.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from .entities import TaskPriority, TaskStatus
from .errors import ValidationError

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_TITLE_LENGTH = 500
MIN_PASSWORD_LENGTH = 8

VALID_STATUSES = [s.value for s in TaskStatus]
VALID_PRIORITIES = [p.value for p in TaskPriority]

# Keys a client may send when creating or updating a task.  Anything else
# (id, userId, createdAt, ...) is ignored.
TASK_FIELDS = ("title", "description", "status", "priority", "dueDate")

_UNSET = object()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def require_json_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(errors=["Request body must be a JSON object."])
    return data


def _is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    return len(candidate) <= MAX_EMAIL_LENGTH and bool(EMAIL_REGEX.match(candidate))


def validate_registration(data: Any) -> tuple[str, str, str]:
    """
    Validate a registration body.

    Returns:
        ``(email, password, name)`` with the email normalised and the name
        trimmed.  The password is returned untouched.
    """
    data = require_json_object(data)
    errors: list[str] = []

    email = data.get("email")
    if not _is_valid_email(email):
        errors.append("A valid email address is required.")

    password = data.get("password")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Full name is required.")
    elif len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(f"Name must be {MAX_NAME_LENGTH} characters or less.")

    if errors:
        raise ValidationError(errors=errors)
    return normalize_email(email), password, name.strip()


def validate_login(data: Any) -> tuple[str, str]:
    """Validate a login body and return ``(normalised_email, password)``."""
    data = require_json_object(data)
    errors: list[str] = []

    email = data.get("email")
    if not _is_valid_email(email):
        errors.append("A valid email address is required.")

    password = data.get("password")
    if not isinstance(password, str) or not password:
        errors.append("Password is required.")

    if errors:
        raise ValidationError(errors=errors)
    return normalize_email(email), password


def parse_due_date(value: str) -> date:
    """
    Parse an ISO-8601 date or datetime string to a calendar date.

    Datetime strings with an offset are converted to server-local time
    before the date is taken; naive datetimes keep their date as written.

    Raises:
        ValueError: If *value* is not ISO-8601.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
        return parsed.date()


def validate_task_payload(data: Any, *, partial: bool, today: date) -> dict[str, Any]:
    """
    Validate a task create (``partial=False``) or update (``partial=True``) body.

    Args:
        data: The decoded JSON body.
        partial: When ``True`` only keys present in *data* are checked and
            returned; ``title`` is not required.
        today: The current calendar day; due dates before it are rejected.

    Returns:
        A dict with snake_case keys (``title``, ``description``, ``status``,
        ``priority``, ``due_date``) holding cleaned values.  In partial mode
        only supplied keys appear, and ``due_date`` may be ``None`` to mean
        "clear it".
    """
    data = require_json_object(data)
    errors: list[str] = []
    cleaned: dict[str, Any] = {}

    title = data.get("title", _UNSET)
    if title is _UNSET and partial:
        pass
    elif not isinstance(title, str) or not title.strip():
        errors.append("Title cannot be empty." if partial else "Task title is required.")
    elif len(title.strip()) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be {MAX_TITLE_LENGTH} characters or less.")
    else:
        cleaned["title"] = title.strip()

    if "description" in data:
        description = data["description"]
        if description is None:
            cleaned["description"] = ""
        elif isinstance(description, str):
            cleaned["description"] = description.strip()
        else:
            errors.append("Description must be a string.")

    if "status" in data:
        if data["status"] not in VALID_STATUSES:
            errors.append("Status must be todo, in-progress, or done.")
        else:
            cleaned["status"] = data["status"]

    if "priority" in data:
        if data["priority"] not in VALID_PRIORITIES:
            errors.append("Priority must be low, medium, or high.")
        else:
            cleaned["priority"] = data["priority"]

    if "dueDate" in data:
        raw_due = data["dueDate"]
        if raw_due is None:
            cleaned["due_date"] = None
        else:
            try:
                if not isinstance(raw_due, str):
                    raise ValueError(raw_due)
                due_date = parse_due_date(raw_due.strip())
            except ValueError:
                errors.append("Due date must be a valid ISO 8601 date.")
            else:
                if due_date < today:
                    errors.append("Due date cannot be in the past.")
                else:
                    cleaned["due_date"] = due_date

    if errors:
        raise ValidationError(errors=errors)
    return cleaned
