"""
Stored records - Chirp, User and the Dataset root

Module: persistence.models
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Chirp and User records
  - Dataset root with JSON conversion

The on-disk layout is::

    {
      "chirps": {"1": {"id": 1, "body": "..."}},
      "users":  {"1": {"id": 1, "email": "...", "hashed_password": "..."}}
    }

JSON object keys are always strings, so ids are converted back to int when
loading.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Chirp:
    """A short post, immutable once created"""
    id: int
    body: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {"id": self.id, "body": self.body}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chirp":
        """Create from dictionary (from JSON)"""
        return cls(id=int(data["id"]), body=data["body"])


@dataclass(frozen=True)
class User:
    """A registered account"""
    id: int
    email: str
    hashed_password: str = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "id": self.id,
            "email": self.email,
            "hashed_password": self.hashed_password,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Fields safe to return to API clients (no password hash)"""
        return {"id": self.id, "email": self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create from dictionary (from JSON)"""
        return cls(
            id=int(data["id"]),
            email=data["email"],
            hashed_password=data["hashed_password"],
        )


@dataclass
class Dataset:
    """In-memory root of all durable state"""
    chirps: Dict[int, Chirp] = field(default_factory=dict)
    users: Dict[int, User] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "chirps": {str(k): v.to_dict() for k, v in self.chirps.items()},
            "users": {str(k): v.to_dict() for k, v in self.users.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        """
        Create from dictionary (from JSON)

        Missing collections load as empty.
        """
        chirps = data.get("chirps") or {}
        users = data.get("users") or {}
        return cls(
            chirps={int(k): Chirp.from_dict(v) for k, v in chirps.items()},
            users={int(k): User.from_dict(v) for k, v in users.items()},
        )
