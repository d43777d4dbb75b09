"""
Registration, login and profile lookup.

:class:`AuthService` orchestrates the user repository, the password hasher
and the token service.  Inputs are expected to be validated already (see
:mod:`task_dashboard.validation`); emails are normalised again here so the
service is safe to call directly.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from ..entities import AuthResult, User
from ..errors import Conflict, NotFound, Unauthenticated
from ..passwords import PasswordHasher
from ..repositories import DuplicateEmailError, UserRepository
from ..tokens import TokenService
from ..validation import normalize_email

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "An account with this email already exists."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._clock = clock

    def register(self, email: str, password: str, name: str) -> AuthResult:
        """
        Create an account and issue its first token.

        Raises:
            Conflict: If an account with the same normalised email exists,
                whether caught by the lookup or by the storage constraint.
        """
        email = normalize_email(email)
        if self._users.find_by_email(email) is not None:
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE)

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name.strip(),
            password_hash=self._hasher.hash(password),
            created_at=self._clock(),
        )
        try:
            self._users.insert(user)
        except DuplicateEmailError as exc:
            # Lost the race against a concurrent registration.
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE) from exc

        logger.info("Registered user_id=%s", user.id)
        return AuthResult(token=self._tokens.issue(user.id, user.email), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Check credentials and issue a token.

        Unknown email and wrong password fail identically, and both paths
        run one password verification.

        Raises:
            Unauthenticated: On any credential mismatch.
        """
        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            self._hasher.verify_dummy(password)
            logger.warning("Failed login attempt")
            raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE, reason="bad_credentials")

        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt for user_id=%s", user.id)
            raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE, reason="bad_credentials")

        logger.info("User logged in user_id=%s", user.id)
        return AuthResult(token=self._tokens.issue(user.id, user.email), user=user)

    def get_profile(self, subject_id: str) -> User:
        user = self._users.find_by_id(subject_id)
        if user is None:
            raise NotFound("User not found.")
        return user
