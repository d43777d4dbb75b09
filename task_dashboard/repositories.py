"""
Persistence interfaces and implementations.

Services depend only on the abstract :class:`UserRepository` and
:class:`TaskRepository`.  Two implementations are provided:

* ``SqlAlchemy*Repository`` -- backed by the Flask-SQLAlchemy session.
* ``InMemory*Repository`` -- plain dictionaries, for demos and unit tests.

Conversion between ORM records and domain entities is done by the pure
``*_from_record`` / ``apply_*_to_record`` functions below so the rest of
the code only ever sees :mod:`task_dashboard.entities`.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import scoped_session

from .entities import Task, User
from .models import TaskRecord, UserRecord

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when an insert violates the unique email constraint."""


def _ensure_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# =====================================================================
# Record <-> entity mapping
# =====================================================================


def user_from_record(record: UserRecord) -> User:
    return User(
        id=record.id,
        email=record.email,
        name=record.name,
        password_hash=record.password_hash,
        created_at=_ensure_utc(record.created_at),
    )


def task_from_record(record: TaskRecord) -> Task:
    return Task(
        id=record.id,
        user_id=record.user_id,
        title=record.title,
        description=record.description or "",
        status=record.status,
        priority=record.priority,
        due_date=record.due_date,
        created_at=_ensure_utc(record.created_at),
        updated_at=_ensure_utc(record.updated_at),
    )


def apply_task_to_record(task: Task, record: TaskRecord) -> TaskRecord:
    """Copy every mutable task field onto *record* and return it."""
    record.id = task.id
    record.user_id = task.user_id
    record.title = task.title
    record.description = task.description
    record.status = task.status
    record.priority = task.priority
    record.due_date = task.due_date
    record.created_at = task.created_at
    record.updated_at = task.updated_at
    return record


# =====================================================================
# Interfaces
# =====================================================================


class UserRepository(ABC):
    """Lookup and insertion of user accounts."""

    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup of a normalised email address."""

    @abstractmethod
    def insert(self, user: User) -> None:
        """
        Persist a new user.

        Raises:
            DuplicateEmailError: If another user already holds the email.
        """


class TaskRepository(ABC):
    """Point operations on tasks."""

    @abstractmethod
    def find_by_id(self, task_id: str) -> Task | None: ...

    @abstractmethod
    def find_by_owner(self, user_id: str) -> list[Task]: ...

    @abstractmethod
    def save(self, task: Task) -> None:
        """Insert *task* or overwrite the stored task with the same id."""

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a task; return ``False`` if nothing was deleted."""


# =====================================================================
# SQLAlchemy implementations
# =====================================================================


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def find_by_id(self, user_id: str) -> User | None:
        record = self._session.get(UserRecord, user_id)
        return user_from_record(record) if record else None

    def find_by_email(self, email: str) -> User | None:
        record = self._session.scalar(
            select(UserRecord).where(func.lower(UserRecord.email) == email.lower())
        )
        return user_from_record(record) if record else None

    def insert(self, user: User) -> None:
        record = UserRecord(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._session.add(record)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateEmailError(user.email) from exc


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def find_by_id(self, task_id: str) -> Task | None:
        record = self._session.get(TaskRecord, task_id)
        return task_from_record(record) if record else None

    def find_by_owner(self, user_id: str) -> list[Task]:
        records = self._session.scalars(
            select(TaskRecord).where(TaskRecord.user_id == user_id)
        ).all()
        return [task_from_record(record) for record in records]

    def save(self, task: Task) -> None:
        record = self._session.get(TaskRecord, task.id)
        if record is None:
            record = TaskRecord()
            self._session.add(record)
        apply_task_to_record(task, record)
        self._session.commit()

    def delete(self, task_id: str) -> bool:
        record = self._session.get(TaskRecord, task_id)
        if record is None:
            return False
        self._session.delete(record)
        self._session.commit()
        return True


# =====================================================================
# In-memory implementations
# =====================================================================


class InMemoryUserRepository(UserRepository):
    """
    Users kept in a dict; contents are lost when the process exits.

    A lock guards every access so the repository can be shared by the
    threads of a WSGI server.  The duplicate-email check and the store
    happen under one acquisition, giving the same uniqueness guarantee as
    the SQL unique index.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def _find_by_email_locked(self, email: str) -> User | None:
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    def find_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
        return replace(user) if user else None

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            user = self._find_by_email_locked(email)
        return replace(user) if user else None

    def insert(self, user: User) -> None:
        with self._lock:
            if self._find_by_email_locked(user.email) is not None:
                raise DuplicateEmailError(user.email)
            self._users[user.id] = replace(user)

    def remove(self, user_id: str, tasks: InMemoryTaskRepository | None = None) -> None:
        """Drop a user and, when given, cascade to their tasks."""
        with self._lock:
            self._users.pop(user_id, None)
        if tasks is not None:
            tasks.delete_owned_by(user_id)


class InMemoryTaskRepository(TaskRepository):
    """Tasks kept in an insertion-ordered dict, guarded by a lock."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def find_by_id(self, task_id: str) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
        # Hand out copies so callers cannot mutate stored state in place.
        return replace(task) if task else None

    def find_by_owner(self, user_id: str) -> list[Task]:
        with self._lock:
            stored = list(self._tasks.values())
        return [replace(task) for task in stored if task.user_id == user_id]

    def save(self, task: Task) -> None:
        with self._lock:
            self._tasks[task.id] = replace(task)

    def delete(self, task_id: str) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def delete_owned_by(self, user_id: str) -> int:
        with self._lock:
            doomed = [task_id for task_id, task in self._tasks.items() if task.user_id == user_id]
            for task_id in doomed:
                del self._tasks[task_id]
        logger.info("Removed %d tasks owned by user_id=%s", len(doomed), user_id)
        return len(doomed)
