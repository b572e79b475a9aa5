"""
Chirpy - small social-post service

A JSON-file backed API for short posts ("chirps") with user accounts,
bcrypt password authentication and JWT access/refresh tokens.

CHANGELOG:
[2026-10-12 v0.1.0] Initial release
  - File-backed dataset with atomic writes and read/write locking
  - Chirp and user repositories
  - bcrypt credentials, HS256 access/refresh tokens, revocation
  - aiohttp HTTP API

ARCHITECTURE:
- Layer 1 : Transport (aiohttp HTTP API)
- Layer 2 : Service (ChirpyService orchestrator)
- Layer 3 : Security (PasswordHasher, JWTHandler)
- Layer 4 : Persistence (DatasetStore, repositories, RevocationStore)
"""

__version__ = "0.1.0"

from .core.chirpy_service import ChirpyService, LoginResult
from .core.config import ServerConfig

__all__ = [
    "ChirpyService",
    "LoginResult",
    "ServerConfig",
]
