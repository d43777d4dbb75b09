"""
JWT access tokens.

Issues and verifies the HS256-signed bearer tokens handed out at login and
registration.  Tokens carry four claims:

    - ``sub``   -- the user id (UUID string).
    - ``email`` -- the normalised email at issue time.
    - ``iat``   -- issued-at, UTC epoch seconds.
    - ``exp``   -- expiry, UTC epoch seconds.  A token is expired from the
      moment ``now >= exp`` (plus any configured leeway).

Verification failures are split into :class:`ExpiredTokenError` and
:class:`InvalidTokenError` so callers can give different messages.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import jwt

REQUIRED_TOKEN_CLAIMS = ["sub", "email", "iat", "exp"]


class TokenError(Exception):
    """Base class for token verification failures."""


class ExpiredTokenError(TokenError):
    """The token is well-formed and correctly signed but past its expiry."""


class InvalidTokenError(TokenError):
    """The token is malformed, tampered with, or missing required claims."""


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    email: str
    issued_at: int
    expires_at: int


class TokenService:
    """
    Stateless issuer/verifier for access tokens.

    Args:
        secret: Process-wide HMAC signing key.
        expiry: Lifetime of newly issued tokens.
        algorithm: The only algorithm accepted on verification.
        leeway_seconds: Grace period applied to the expiry check.
        clock: Returns the current time as epoch seconds; injectable so
            expiry boundaries can be tested exactly.
    """

    def __init__(
        self,
        secret: str,
        expiry: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
        leeway_seconds: int = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._expiry = expiry
        self._algorithm = algorithm
        self._leeway = leeway_seconds
        self._clock = clock

    def issue(self, subject_id: str, email: str) -> str:
        """
        Create a signed token for the given identity.

        Raises:
            ValueError: If *subject_id* or *email* is blank.
        """
        if not isinstance(subject_id, str) or not subject_id.strip():
            raise ValueError("subject_id must be a non-empty string")
        if not isinstance(email, str) or not email.strip():
            raise ValueError("email must be a non-empty string")

        now = int(self._clock())
        payload: dict[str, Any] = {
            "sub": subject_id,
            "email": email,
            "iat": now,
            "exp": now + int(self._expiry.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature, claims and expiry of *token*.

        Raises:
            InvalidTokenError: Bad format, signature, algorithm or claims.
            ExpiredTokenError: Signature is valid but the token has expired.
        """
        try:
            # Time-based checks are done below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_TOKEN_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        subject_id = payload.get("sub")
        email = payload.get("email")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")

        if not isinstance(subject_id, str) or not subject_id.strip():
            raise InvalidTokenError("Invalid sub claim")
        if not isinstance(email, str) or not email.strip():
            raise InvalidTokenError("Invalid email claim")
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise InvalidTokenError("Invalid timestamp claims")

        if self._clock() >= expires_at + self._leeway:
            raise ExpiredTokenError("Token has expired")

        return TokenClaims(
            subject_id=subject_id,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )
