"""
Persistence module - JSON-based data storage

Provides:
- DatasetStore: JSON file database (atomic writes, read/write lock)
- ChirpRepository / UserRepository: entity access on top of the store
- RevocationStore: in-memory revoked token registry
"""

from .json_store import DatasetStore
from .models import Chirp, User, Dataset
from .chirp_repository import ChirpRepository, clean_chirp_body
from .user_repository import UserRepository
from .token_store import RevocationStore

__all__ = [
    "DatasetStore",
    "Chirp",
    "User",
    "Dataset",
    "ChirpRepository",
    "clean_chirp_body",
    "UserRepository",
    "RevocationStore",
]
