"""
Server configuration

Module: core.config
Date: 2026-10-12
Version: 0.1.1

CHANGELOG:
[2026-10-19 v0.1.1] JWT_SECRET is mandatory
  - No built-in fallback secret, from_env raises when it is missing or short

[2026-10-12 v0.1.0] Initial implementation
  - ServerConfig dataclass
  - Environment variable loading (CHIRPY_*, JWT_SECRET)
"""

import os
from dataclasses import dataclass

from .constants import (
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_DB_PATH,
    DEFAULT_FILE_ROOT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    MIN_JWT_SECRET_LENGTH,
)


@dataclass
class ServerConfig:
    """Chirpy server configuration"""
    jwt_secret: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db_path: str = DEFAULT_DB_PATH
    file_root: str = DEFAULT_FILE_ROOT
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    debug: bool = False

    @classmethod
    def from_env(cls, debug: bool = False) -> "ServerConfig":
        """
        Build configuration from environment variables

        Args:
            debug: Start from an empty database (removes the existing file)

        Returns:
            ServerConfig instance

        Raises:
            ValueError: If JWT_SECRET is missing or shorter than 32
                characters, or a numeric variable cannot be parsed
        """
        jwt_secret = os.getenv("JWT_SECRET", "")
        if not jwt_secret:
            raise ValueError("JWT_SECRET environment variable is not set")
        if len(jwt_secret) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters"
            )

        return cls(
            jwt_secret=jwt_secret,
            host=os.getenv("CHIRPY_HOST", DEFAULT_HOST),
            port=int(os.getenv("CHIRPY_PORT", str(DEFAULT_PORT))),
            db_path=os.getenv("CHIRPY_DB_PATH", DEFAULT_DB_PATH),
            file_root=os.getenv("CHIRPY_FILE_ROOT", DEFAULT_FILE_ROOT),
            bcrypt_rounds=int(
                os.getenv("CHIRPY_BCRYPT_ROUNDS", str(DEFAULT_BCRYPT_ROUNDS))
            ),
            debug=debug,
        )
