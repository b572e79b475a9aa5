"""
Password Hasher - bcrypt credential verification

Module: security.password_hasher
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Salted bcrypt hashing with configurable cost
  - Password verification

SECURITY NOTES:
- Cost factor defaults to 10 (bcrypt default)
- Comparison is done by bcrypt.checkpw (constant time)
- Empty and over-long passwords are rejected by the caller
"""

import logging

import bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS, MAX_PASSWORD_BYTES
from ..core.errors import InternalError


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt"""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        """
        Initialize password hasher

        Args:
            rounds: bcrypt cost factor (4-31)
        """
        self.logger = logging.getLogger("security.password_hasher")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plaintext password

        Returns:
            bcrypt hash (bytes decoded to string)

        Raises:
            InternalError: If bcrypt fails
        """
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(password.encode(), salt)
        except ValueError as e:
            self.logger.error(f"Password hashing failed: {e}")
            raise InternalError("Could not hash password") from e
        return hashed.decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify password against hash

        Args:
            password: Plaintext password
            password_hash: Stored bcrypt hash

        Returns:
            True if password matches, False otherwise

        Raises:
            InternalError: If the stored hash is malformed
        """
        encoded = password.encode()
        if len(encoded) > MAX_PASSWORD_BYTES:
            # Never accepted at registration, so it cannot match
            return False

        try:
            return bcrypt.checkpw(encoded, password_hash.encode())
        except ValueError as e:
            self.logger.error(f"Stored password hash is malformed: {e}")
            raise InternalError("Malformed password hash") from e
