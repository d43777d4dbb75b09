"""
Shared pytest fixtures for the Task Dashboard test suite.

Provides the Flask application, test client, per-test database lifecycle,
and factories for users and tasks.  Unit tests that run against in-memory
repositories have their own fixtures in ``tests/unit/conftest.py``.

Key SDET Concepts Demonstrated:
- Session-scoped app, function-scoped client and database
- Factory fixtures (user_factory, task_factory) with automatic teardown
- Registering real users through the API to obtain real tokens
"""

from __future__ import annotations

import itertools
import os
import uuid
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"

from task_dashboard import create_app, db
from task_dashboard.models import TaskRecord, UserRecord
from task_dashboard.services import get_services
from tests.helpers import DEFAULT_PASSWORD, auth_headers

fake = Faker()
_email_counter = itertools.count(1)


@pytest.fixture(scope="session")
def app():
    """Create the application once for the whole session with the testing config."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test function.

    Creates all tables before the test and drops them afterwards so no
    rows leak between tests.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def services(app, db_session):
    """The service container attached to the test app."""
    return get_services()


@pytest.fixture
def unique_email() -> Callable[[], str]:
    """Return a callable producing a fresh, never-before-used email address."""

    def _next() -> str:
        return f"user{next(_email_counter)}_{fake.user_name()}@example.com"

    return _next


@pytest.fixture
def register_user(client, db_session, unique_email) -> Callable[..., dict[str, Any]]:
    """
    Factory that registers a user through the API.

    Returns a dict with ``token``, ``user`` (the public projection),
    ``headers`` (ready-to-use auth headers) and ``password``.
    """

    def _register(
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        name: str | None = None,
    ) -> dict[str, Any]:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email or unique_email(),
                "password": password,
                "name": name or fake.name(),
            },
        )
        assert response.status_code == 201, response.get_json()
        data = response.get_json()["data"]
        return {
            "token": data["token"],
            "user": data["user"],
            "headers": auth_headers(data["token"]),
            "password": password,
        }

    return _register


@pytest.fixture
def user_factory(db_session, services, unique_email) -> Callable[..., UserRecord]:
    """Insert a user row directly, bypassing the API."""

    def _create_user(
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        name: str | None = None,
    ) -> UserRecord:
        record = UserRecord(
            id=str(uuid.uuid4()),
            email=(email or unique_email()).strip().lower(),
            name=name or fake.name(),
            password_hash=services.hasher.hash(password),
            created_at=datetime.now(timezone.utc),
        )
        db_session.session.add(record)
        db_session.session.commit()
        return record

    return _create_user


@pytest.fixture
def task_factory(db_session) -> Callable[..., TaskRecord]:
    """
    Insert a task row directly with full control over timestamps.

    ``created_at`` defaults to now; pass explicit values to test ordering.
    """

    def _create_task(
        *,
        user_id: str,
        title: str | None = None,
        description: str | None = None,
        status: str = "todo",
        priority: str = "medium",
        due_date: date | None = None,
        created_at: datetime | None = None,
    ) -> TaskRecord:
        created = created_at or datetime.now(timezone.utc)
        record = TaskRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title or fake.sentence(nb_words=4),
            description=description if description is not None else fake.paragraph(),
            status=status,
            priority=priority,
            due_date=due_date,
            created_at=created,
            updated_at=created,
        )
        db_session.session.add(record)
        db_session.session.commit()
        return record

    return _create_task


@pytest.fixture
def tomorrow() -> date:
    return date.today() + timedelta(days=1)


@pytest.fixture
def yesterday() -> date:
    return date.today() - timedelta(days=1)
