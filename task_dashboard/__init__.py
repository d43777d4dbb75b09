"""
Task Dashboard application factory.

Provides the ``create_app`` factory used to build the Flask application
that serves the authentication and task-management API.  The factory
pattern lets tests, the WSGI entry point and the CLI each build an app
with their own configuration.

The service registers three blueprints:
  * **health_bp** -- liveness probe at ``/health``.
  * **auth_bp** -- registration, login and profile under ``/api/auth``.
  * **tasks_bp** -- task CRUD under ``/api/tasks``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import DEV_JWT_SECRET, ProductionConfig, get_config

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path in ("", ":memory:"):
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Task Dashboard application.

    Loads configuration, initialises SQLAlchemy, builds the service layer
    (repositories, hasher, token service, gate, task handlers), registers
    blueprints and error handlers, and creates the database tables.

    Args:
        config_name: Configuration environment name (``"development"``,
            ``"testing"``, ``"production"``).  When ``None`` the value is
            read from ``FLASK_ENV``, defaulting to ``"development"``.

    Returns:
        A fully configured Flask application.

    Raises:
        RuntimeError: If a production app is created with the built-in
            development JWT secret.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    if issubclass(config_class, ProductionConfig) and app.config["JWT_SECRET_KEY"] == DEV_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")

    logger.info("Creating task dashboard app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    db.init_app(app)

    # Imported here so that models and services can reference ``db`` from this package.
    from . import models  # noqa: F401
    from .errors import register_error_handlers
    from .routes.auth import auth_bp
    from .routes.health import health_bp
    from .routes.tasks import tasks_bp
    from .services import init_services

    init_services(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")
    register_error_handlers(app)

    with app.app_context():
        db.create_all()
        logger.info("Task dashboard database tables created")

    return app
