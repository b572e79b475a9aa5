"""
Security module - credentials and tokens

Provides:
- PasswordHasher: bcrypt password hashing
- JWTHandler: HS256 access/refresh tokens (PyJWT)
"""

from .password_hasher import PasswordHasher
from .jwt_handler import JWTHandler, TokenClaims

__all__ = [
    "PasswordHasher",
    "JWTHandler",
    "TokenClaims",
]
