"""
Core module - configuration, errors and the service orchestrator
"""

from .config import ServerConfig
from .errors import (
    ChirpyError,
    ValidationError,
    NotFound,
    Conflict,
    Unauthorized,
    InvalidToken,
    Revoked,
    StoreIOError,
    InternalError,
)

__all__ = [
    "ServerConfig",
    "ChirpyError",
    "ValidationError",
    "NotFound",
    "Conflict",
    "Unauthorized",
    "InvalidToken",
    "Revoked",
    "StoreIOError",
    "InternalError",
]
