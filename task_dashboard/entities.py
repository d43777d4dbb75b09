"""
Domain entities for the Task Dashboard.

Plain dataclasses describing users, tasks and authenticated identities.
These are the canonical shapes used by services and serialised to JSON;
the SQLAlchemy records in :mod:`task_dashboard.models` are a storage detail
mapped to and from these classes at the repository edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """
    Lifecycle status of a task.

    Inherits from ``str`` so members compare equal to the raw strings that
    arrive in request bodies and sit in the database column.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Importance level of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def to_utc_iso(value: datetime | None) -> str | None:
    """
    Serialise a datetime to an ISO-8601 UTC string.

    Naive values are assumed to already be UTC (SQLite drops tzinfo on the
    way back out); aware values are converted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


@dataclass
class User:
    """
    A registered account.

    ``password_hash`` is carried for credential checks only and is never
    part of :meth:`to_dict`.
    """

    id: str
    email: str
    name: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return the public projection of the user (no password hash)."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "createdAt": to_utc_iso(self.created_at),
        }


@dataclass
class Task:
    """A to-do item owned by exactly one user."""

    id: str
    user_id: str
    title: str
    description: str = ""
    status: str = TaskStatus.TODO.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
            "userId": self.user_id,
        }


@dataclass(frozen=True)
class Identity:
    """Verified identity of the caller, produced by the authorization gate."""

    subject_id: str
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""

    token: str
    user: User

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "user": self.user.to_dict()}
