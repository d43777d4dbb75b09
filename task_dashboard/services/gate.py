"""
Authorization gate for protected operations.

Turns a raw ``Authorization`` header into a verified :class:`Identity` or
rejects the request.  The checks run in a fixed order and the first failure
ends the request:

    1. header missing or not ``Bearer <token>``   -> "No token provided"
    2. bad signature / format                      -> "Invalid token"
    3. expired                                     -> "Token expired"
    4. subject no longer exists                    -> "User account no longer exists"
"""

from __future__ import annotations

import logging

from ..entities import Identity
from ..errors import Unauthenticated
from ..repositories import UserRepository
from ..tokens import ExpiredTokenError, InvalidTokenError, TokenService

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "No token provided"
INVALID_TOKEN_MESSAGE = "Invalid token"
EXPIRED_TOKEN_MESSAGE = "Token expired"
SUBJECT_GONE_MESSAGE = "User account no longer exists"


def extract_bearer_token(authorization_header: str | None) -> str | None:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    The header must be exactly the scheme ``Bearer``, one space, and a
    non-empty token; anything else yields ``None``.
    """
    if not authorization_header:
        return None
    parts = authorization_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


class AuthorizationGate:
    def __init__(self, tokens: TokenService, users: UserRepository) -> None:
        self._tokens = tokens
        self._users = users

    def authenticate(self, authorization_header: str | None) -> Identity:
        """
        Verify the caller and return their identity.

        Raises:
            Unauthenticated: With ``reason`` set to ``"no_header"``,
                ``"token_invalid"``, ``"token_expired"`` or
                ``"subject_gone"``.
        """
        token = extract_bearer_token(authorization_header)
        if token is None:
            raise Unauthenticated(NO_TOKEN_MESSAGE, reason="no_header")

        try:
            claims = self._tokens.verify(token)
        except ExpiredTokenError:
            logger.warning("Rejected expired token")
            raise Unauthenticated(EXPIRED_TOKEN_MESSAGE, reason="token_expired") from None
        except InvalidTokenError as exc:
            logger.warning("Rejected invalid token: %s", exc)
            raise Unauthenticated(INVALID_TOKEN_MESSAGE, reason="token_invalid") from None

        if self._users.find_by_id(claims.subject_id) is None:
            logger.warning("Rejected token for missing user_id=%s", claims.subject_id)
            raise Unauthenticated(SUBJECT_GONE_MESSAGE, reason="subject_gone")

        return Identity(subject_id=claims.subject_id, email=claims.email)
