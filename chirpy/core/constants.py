"""
Constants for Chirpy

Module: core.constants
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial constants definition
  - Server configuration defaults
  - Chirp body policy (length limit, deny list)
  - Token issuers and lifetimes
  - HTTP route paths and CORS headers

SECURITY NOTES:
- bcrypt cost matches the library default (10)
- JWT secret must be 32+ characters
- Access tokens are short-lived (1 hour), refresh tokens 60 days
"""

from typing import Final, FrozenSet

# ============================================================================
# Server Configuration
# ============================================================================

SERVER_NAME: Final[str] = "Chirpy"
SERVER_VERSION: Final[str] = "0.1.0"

DEFAULT_HOST: Final[str] = "localhost"
DEFAULT_PORT: Final[int] = 8080
DEFAULT_DB_PATH: Final[str] = "./chirpy_database.json"
DEFAULT_FILE_ROOT: Final[str] = "."

MIN_JWT_SECRET_LENGTH: Final[int] = 32

# ============================================================================
# Chirp Body Policy
# ============================================================================

MAX_CHIRP_LENGTH: Final[int] = 140
CHIRP_MASK: Final[str] = "****"
BANNED_WORDS: Final[FrozenSet[str]] = frozenset({
    "kerfuffle",
    "sharbert",
    "fornax",
})

# ============================================================================
# Credentials
# ============================================================================

DEFAULT_BCRYPT_ROUNDS: Final[int] = 10

# bcrypt only consumes the first 72 bytes of a password
MAX_PASSWORD_BYTES: Final[int] = 72

# ============================================================================
# Tokens
# ============================================================================

JWT_ALGORITHM: Final[str] = "HS256"

ISSUER_ACCESS: Final[str] = "access"
ISSUER_REFRESH: Final[str] = "refresh"

ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = 60
REFRESH_TOKEN_EXPIRE_DAYS: Final[int] = 60

BEARER_PREFIX: Final[str] = "Bearer "

# ============================================================================
# HTTP
# ============================================================================

API_PREFIX: Final[str] = "/api"
ADMIN_PREFIX: Final[str] = "/admin"
APP_PREFIX: Final[str] = "/app"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}
