"""
Credential hashing.

Thin wrapper around Werkzeug's salted password hashing.  The method string
(for example ``"scrypt"`` or ``"pbkdf2:sha256:600000"``) selects both the
algorithm and its work factor, so the cost can be tuned per environment
without code changes.
"""

from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Hash and verify plaintext passwords.

    Every call to :meth:`hash` draws a fresh random salt, so hashing the
    same password twice gives different strings that both verify.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self.method = method
        self.salt_length = salt_length
        # Hashed once here; verify_dummy only verifies.
        self._dummy_hash = self.hash("dummy-password-for-timing")

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Check *plaintext* against a stored hash.

        Returns ``False`` on mismatch and also when the stored value is not
        a hash Werkzeug understands; it never raises for either case.
        """
        try:
            return check_password_hash(hashed, plaintext)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    def verify_dummy(self, plaintext: str) -> bool:
        """
        Spend the same effort as :meth:`verify` without a real account.

        Used on the unknown-email login path so its latency matches a
        wrong-password attempt.  Always returns ``False``.
        """
        self.verify(plaintext, self._dummy_hash)
        return False
