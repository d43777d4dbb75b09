"""
Route protection for the task API.

``require_auth`` runs the authorization gate on the incoming request and
hands the verified :class:`~task_dashboard.entities.Identity` to the view
as its first positional argument.  Rejections propagate as
:class:`~task_dashboard.errors.Unauthenticated` and are rendered by the
app-wide error handler.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import Response, request

from .services import get_services


def require_auth(view_func: Callable[..., tuple[Response, int] | Response]):
    """
    Decorator that enforces Bearer-token authentication on API endpoints.

    Example:
        @tasks_bp.route("", methods=["GET"])
        @require_auth
        def list_tasks(identity):
            ...
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        identity = get_services().gate.authenticate(request.headers.get("Authorization"))
        return view_func(identity, *args, **kwargs)

    return wrapper
