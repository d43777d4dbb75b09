"""Test helper functions shared across the unit and integration suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TEST_JWT_SECRET = "test-jwt-secret-key-for-local-tests-123456"
DEFAULT_PASSWORD = "password123"


class FakeClock:
    """
    Controllable clock for time-sensitive tests.

    Callable as an epoch-seconds clock (``clock()``) and exposes
    :meth:`now` for a matching UTC datetime.
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.current = float(start)

    def __call__(self) -> float:
        return self.current

    def now(self) -> datetime:
        return datetime.fromtimestamp(self.current, tz=timezone.utc)

    def advance(self, seconds: float) -> None:
        self.current += seconds


def create_test_token(
    subject_id: str,
    email: str = "test_user@example.com",
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
    algorithm: str = "HS256",
    **extra_claims: Any,
) -> str:
    """Mint a token outside the token service, for negative-path tests."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload: dict[str, Any] = {
        "sub": subject_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
    }
    payload.update(extra_claims)
    return jwt.encode(payload, secret, algorithm=algorithm)


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
