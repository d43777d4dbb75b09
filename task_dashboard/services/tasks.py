"""
Task command handlers.

:class:`TaskService` implements list/get/create/update/delete for the
authenticated caller.  Every operation addressed by a task id goes through
:meth:`TaskService._owned_task`, which reports a task owned by someone else
exactly like a missing one, so ids of other users' tasks cannot be probed.

Request bodies are validated before any lookup happens.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from ..entities import Identity, Task, TaskPriority, TaskStatus
from ..errors import NotFound
from ..repositories import TaskRepository
from ..validation import validate_task_payload

logger = logging.getLogger(__name__)

TASK_NOT_FOUND_MESSAGE = "Task not found."

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _matches_search(task: Task, query: str) -> bool:
    return query in task.title.lower() or query in task.description.lower()


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        clock: Callable[[], datetime] = _utcnow,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._tasks = tasks
        self._clock = clock
        # Server-local calendar day used for due-date checks
        self._today = today

    def _owned_task(self, identity: Identity, task_id: str) -> Task:
        task = self._tasks.find_by_id(task_id)
        if task is None or task.user_id != identity.subject_id:
            raise NotFound(TASK_NOT_FOUND_MESSAGE)
        return task

    def list_tasks(
        self,
        identity: Identity,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """
        Return the caller's tasks, newest first.

        ``status`` and ``priority`` are equality filters; ``search`` is a
        case-insensitive substring match on title or description.  All
        given filters must match.  Empty strings are treated as absent.
        """
        tasks = self._tasks.find_by_owner(identity.subject_id)
        if status:
            tasks = [task for task in tasks if task.status == status]
        if priority:
            tasks = [task for task in tasks if task.priority == priority]
        if search:
            query = search.lower()
            tasks = [task for task in tasks if _matches_search(task, query)]
        # sorted() is stable, so equal timestamps keep repository order.
        return sorted(tasks, key=lambda task: task.created_at or _OLDEST, reverse=True)

    def get_task(self, identity: Identity, task_id: str) -> Task:
        return self._owned_task(identity, task_id)

    def create_task(self, identity: Identity, body: Any) -> Task:
        """
        Validate *body* and store a new task owned by the caller.

        Raises:
            ValidationError: If the body breaks any field rule.
        """
        fields = validate_task_payload(body, partial=False, today=self._today())
        now = self._clock()
        task = Task(
            id=str(uuid.uuid4()),
            user_id=identity.subject_id,
            title=fields["title"],
            description=fields.get("description", ""),
            status=fields.get("status", TaskStatus.TODO.value),
            priority=fields.get("priority", TaskPriority.MEDIUM.value),
            due_date=fields.get("due_date"),
            created_at=now,
            updated_at=now,
        )
        self._tasks.save(task)
        logger.info("Created task_id=%s for user_id=%s", task.id, identity.subject_id)
        return task

    def update_task(self, identity: Identity, task_id: str, body: Any) -> Task:
        """
        Merge the fields present in *body* into an owned task.

        Absent keys keep their stored values; ``dueDate: null`` clears the
        due date.  ``id``, ``userId`` and ``createdAt`` cannot be changed.

        Raises:
            ValidationError: If a supplied field breaks its rule.
            NotFound: If the task is missing or owned by someone else.
        """
        fields = validate_task_payload(body, partial=True, today=self._today())
        task = self._owned_task(identity, task_id)
        updated = replace(task, **fields, updated_at=self._clock())
        self._tasks.save(updated)
        logger.info("Updated task_id=%s fields=%s", task_id, sorted(fields))
        return updated

    def delete_task(self, identity: Identity, task_id: str) -> bool:
        task = self._owned_task(identity, task_id)
        if not self._tasks.delete(task.id):
            # Removed by a concurrent request between lookup and delete.
            raise NotFound(TASK_NOT_FOUND_MESSAGE)
        logger.info("Deleted task_id=%s", task_id)
        return True
