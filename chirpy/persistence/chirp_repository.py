"""
Chirp Repository - creation and lookup of chirps

Module: persistence.chirp_repository
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Body policy (140 character limit, profanity mask)
  - Sequential id assignment
  - Ordered listing
"""

import logging
from typing import List

from ..core.constants import BANNED_WORDS, CHIRP_MASK, MAX_CHIRP_LENGTH
from ..core.errors import NotFound, ValidationError
from .json_store import DatasetStore
from .models import Chirp


def clean_chirp_body(body: str) -> str:
    """
    Apply the chirp body policy

    The body is split on single spaces and every word matching the deny
    list (case-insensitive) is replaced by a mask. Consecutive spaces are
    collapsed by the split/join.

    Args:
        body: Raw chirp body

    Returns:
        Cleaned body

    Raises:
        ValidationError: If the body is longer than 140 characters
    """
    if len(body) > MAX_CHIRP_LENGTH:
        raise ValidationError("Chirp is too long")

    words = [
        CHIRP_MASK if word.lower() in BANNED_WORDS else word
        for word in body.split(" ")
        if word
    ]
    return " ".join(words)


class ChirpRepository:
    """Chirp CRUD against the shared dataset"""

    def __init__(self, store: DatasetStore):
        self.logger = logging.getLogger("persistence.chirp_repository")
        self.store = store

    def create(self, body: str) -> Chirp:
        """
        Clean, store and persist a new chirp

        Args:
            body: Raw chirp body

        Returns:
            The stored Chirp

        Raises:
            ValidationError: If the body is too long (nothing is stored)
            StoreIOError: If the dataset cannot be written
        """
        cleaned = clean_chirp_body(body)

        with self.store.writing() as data:
            chirp = Chirp(id=len(data.chirps) + 1, body=cleaned)
            data.chirps[chirp.id] = chirp

        self.logger.info(f"Chirp created: {chirp.id}")
        return chirp

    def list(self) -> List[Chirp]:
        """All chirps, ascending by id"""
        with self.store.reading() as data:
            chirps = list(data.chirps.values())
        return sorted(chirps, key=lambda c: c.id)

    def get(self, chirp_id: int) -> Chirp:
        """
        Get a chirp by id

        Raises:
            NotFound: If no chirp has this id
        """
        with self.store.reading() as data:
            chirp = data.chirps.get(chirp_id)
        if chirp is None:
            raise NotFound(f"Chirp {chirp_id} does not exist")
        return chirp
