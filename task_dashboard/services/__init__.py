"""
Service layer wiring.

:func:`init_services` builds one :class:`Services` container per Flask app
from its configuration and stores it in ``app.extensions``; route handlers
fetch it with :func:`get_services`.  Nothing here holds request state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from flask import Flask, current_app

from .. import db
from ..passwords import PasswordHasher
from ..repositories import (
    InMemoryTaskRepository,
    InMemoryUserRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyUserRepository,
    TaskRepository,
    UserRepository,
)
from ..tokens import TokenService
from .auth import AuthService
from .gate import AuthorizationGate
from .tasks import TaskService

logger = logging.getLogger(__name__)

EXTENSION_KEY = "task_dashboard"


@dataclass
class Services:
    users: UserRepository
    tasks_repository: TaskRepository
    hasher: PasswordHasher
    tokens: TokenService
    auth: AuthService
    gate: AuthorizationGate
    tasks: TaskService


def build_services(config: dict, users: UserRepository, tasks: TaskRepository) -> Services:
    """Assemble the services around the given repositories using *config* settings."""
    hasher = PasswordHasher(method=config["PASSWORD_HASH_METHOD"])
    tokens = TokenService(
        secret=config["JWT_SECRET_KEY"],
        expiry=timedelta(hours=int(config["JWT_EXPIRY_HOURS"])),
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
        leeway_seconds=int(config.get("JWT_CLOCK_SKEW_SECONDS", 0)),
    )
    return Services(
        users=users,
        tasks_repository=tasks,
        hasher=hasher,
        tokens=tokens,
        auth=AuthService(users, hasher, tokens),
        gate=AuthorizationGate(tokens, users),
        tasks=TaskService(tasks),
    )


def init_services(app: Flask) -> Services:
    """
    Build the repositories selected by ``STORAGE_BACKEND`` and attach the
    service container to *app*.

    Raises:
        ValueError: For an unknown storage backend name.
    """
    backend = app.config.get("STORAGE_BACKEND", "sqlalchemy")
    if backend == "sqlalchemy":
        users: UserRepository = SqlAlchemyUserRepository(db.session)
        tasks: TaskRepository = SqlAlchemyTaskRepository(db.session)
    elif backend == "memory":
        users = InMemoryUserRepository()
        tasks = InMemoryTaskRepository()
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")

    services = build_services(app.config, users, tasks)
    app.extensions[EXTENSION_KEY] = services
    logger.info("Service layer initialised with %s storage", backend)
    return services


def get_services() -> Services:
    """Return the service container of the current app."""
    return current_app.extensions[EXTENSION_KEY]
