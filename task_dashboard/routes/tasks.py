"""
Task API endpoints.

Every route is protected by ``require_auth`` and scoped to the caller.

Endpoints:
    GET          /api/tasks        - List tasks (filters: status, priority, search)
    POST         /api/tasks        - Create a task
    GET          /api/tasks/<id>   - Retrieve one task
    PATCH, PUT   /api/tasks/<id>   - Partially update a task
    DELETE       /api/tasks/<id>   - Delete a task

A task that belongs to another user answers 404, the same as a task that
does not exist.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, request

from ..auth import require_auth
from ..entities import Identity
from ..responses import success_response
from ..services import get_services

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("task_api", __name__)


@tasks_bp.route("", methods=["GET"])
@require_auth
def list_tasks(identity: Identity) -> tuple[Response, int]:
    logger.info("GET /api/tasks - Fetching tasks for user_id=%s", identity.subject_id)
    tasks = get_services().tasks.list_tasks(
        identity,
        status=request.args.get("status"),
        priority=request.args.get("priority"),
        search=request.args.get("search"),
    )
    return success_response([task.to_dict() for task in tasks])


@tasks_bp.route("", methods=["POST"])
@require_auth
def create_task(identity: Identity) -> tuple[Response, int]:
    """
    Create a task for the caller.

    Expects a JSON body with at least ``title``; ``description``,
    ``status``, ``priority`` and ``dueDate`` are optional.
    """
    task = get_services().tasks.create_task(identity, request.get_json(silent=True))
    return success_response(task.to_dict(), "Task created successfully.", 201)


@tasks_bp.route("/<task_id>", methods=["GET"])
@require_auth
def get_task(identity: Identity, task_id: str) -> tuple[Response, int]:
    task = get_services().tasks.get_task(identity, task_id)
    return success_response(task.to_dict())


@tasks_bp.route("/<task_id>", methods=["PATCH", "PUT"])
@require_auth
def update_task(identity: Identity, task_id: str) -> tuple[Response, int]:
    """
    Update only the fields present in the JSON body.

    ``dueDate: null`` clears the due date; omitting it leaves it as is.
    """
    task = get_services().tasks.update_task(identity, task_id, request.get_json(silent=True))
    return success_response(task.to_dict(), "Task updated successfully.")


@tasks_bp.route("/<task_id>", methods=["DELETE"])
@require_auth
def delete_task(identity: Identity, task_id: str) -> tuple[Response, int]:
    get_services().tasks.delete_task(identity, task_id)
    return success_response(message="Task deleted successfully.")
