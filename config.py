"""
Configuration for the Task Dashboard API.

Provides environment-aware configuration classes: a shared ``Config`` base
class holds defaults, and environment-specific subclasses
(``DevelopmentConfig``, ``TestingConfig``, ``ProductionConfig``) override
only what differs.  The ``get_config`` factory resolves the correct class
at runtime from ``FLASK_ENV`` or an explicit argument.

Every value can be overridden through an environment variable so the same
code base serves any deployment.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

DEV_JWT_SECRET = "task-dashboard-dev-jwt-secret-change-in-production"


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag such as ``1``/``true``/``yes`` from the environment."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Base configuration shared by all environments.

    Attributes:
        SECRET_KEY: Flask signing key.
        SQLALCHEMY_DATABASE_URI: Database connection string (default: local
            SQLite file under ``instance/``).
        JWT_SECRET_KEY: Process-wide HMAC secret used to sign access tokens.
        JWT_ALGORITHM: Signing algorithm; only this one is accepted on
            verification.
        JWT_EXPIRY_HOURS: Lifetime of a newly issued token.
        JWT_CLOCK_SKEW_SECONDS: Tolerance applied to the ``exp`` check.
        PASSWORD_HASH_METHOD: Werkzeug hashing method string (sets the
            algorithm and work factor).
        EXPOSE_ERROR_DETAILS: Return raw exception text in 500 responses.
        STORAGE_BACKEND: ``"sqlalchemy"`` or ``"memory"``.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "task-dashboard-dev-secret-change-in-production"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'task_dashboard.db'}",
    )

    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET_KEY", DEV_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    # Seven days, matching the default lifetime of issued access tokens
    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "168"))
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "0"))

    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")

    EXPOSE_ERROR_DETAILS: bool = False
    STORAGE_BACKEND: str = os.environ.get("STORAGE_BACKEND", "sqlalchemy")


class DevelopmentConfig(Config):
    """Local development: debug mode and unredacted 500 messages."""

    DEBUG: bool = True
    TESTING: bool = False
    EXPOSE_ERROR_DETAILS: bool = _env_bool("EXPOSE_ERROR_DETAILS", True)


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    Uses an in-memory SQLite database so runs never touch development data,
    a fixed signing secret, and a cheap hash method so registration-heavy
    tests stay fast.
    """

    DEBUG: bool = False
    TESTING: bool = True
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY: str = os.environ.get(
        "TEST_JWT_SECRET_KEY", "test-jwt-secret-key-for-local-tests-123456"
    )
    JWT_EXPIRY_HOURS: int = int(os.environ.get("TEST_JWT_EXPIRY_HOURS", "1"))
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"
    STORAGE_BACKEND: str = "sqlalchemy"


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    All secrets must be supplied through environment variables; the
    application factory refuses to start with the development JWT secret.
    """

    DEBUG: bool = False
    TESTING: bool = False
    EXPOSE_ERROR_DETAILS: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or ``"production"``.
            When ``None``, the ``FLASK_ENV`` environment variable is
            consulted, falling back to ``"development"``.

    Returns:
        The configuration class (not an instance).  Unrecognised names
        resolve to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
