"""
Fixtures for service-level unit tests.

Builds the auth and task services around in-memory repositories and a
controllable clock, so these tests need neither Flask nor a database.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from task_dashboard.entities import Identity
from task_dashboard.passwords import PasswordHasher
from task_dashboard.repositories import InMemoryTaskRepository, InMemoryUserRepository
from task_dashboard.services.auth import AuthService
from task_dashboard.services.gate import AuthorizationGate
from task_dashboard.services.tasks import TaskService
from task_dashboard.tokens import TokenService
from tests.helpers import TEST_JWT_SECRET, FakeClock

TODAY = date(2026, 3, 15)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def hasher() -> PasswordHasher:
    # Cheap work factor keeps the suite fast; the behaviour is the same.
    return PasswordHasher(method="pbkdf2:sha256:1000")


@pytest.fixture
def token_service(clock) -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET, expiry=timedelta(hours=1), clock=clock)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def auth_service(user_repo, hasher, token_service, clock) -> AuthService:
    return AuthService(user_repo, hasher, token_service, clock=clock.now)


@pytest.fixture
def gate(token_service, user_repo) -> AuthorizationGate:
    return AuthorizationGate(token_service, user_repo)


@pytest.fixture
def task_service(task_repo, clock) -> TaskService:
    return TaskService(task_repo, clock=clock.now, today=lambda: TODAY)


@pytest.fixture
def alice(auth_service) -> Identity:
    result = auth_service.register("alice@x.com", "password123", "Alice")
    return Identity(subject_id=result.user.id, email=result.user.email)


@pytest.fixture
def bob(auth_service) -> Identity:
    result = auth_service.register("bob@x.com", "password456", "Bob")
    return Identity(subject_id=result.user.id, email=result.user.email)
