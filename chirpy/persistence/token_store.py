"""
Revocation Store - revoked token registry

Module: persistence.token_store
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Revocation keyed by the raw token string
  - Revocation timestamp per token
  - Process-lifetime only (cleared on restart)

ARCHITECTURE:
RevocationStore is deliberately not backed by the dataset file: it lives
in process memory, behind its own lock, independent of the dataset lock.
Keying by the raw token lets one user hold several refresh tokens (one per
device) that are revoked independently.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional


class RevocationStore:
    """In-memory blacklist of revoked tokens"""

    def __init__(self):
        self.logger = logging.getLogger("persistence.token_store")
        self._lock = threading.Lock()
        self._revoked: Dict[str, datetime] = {}

    def revoke(self, token: str) -> datetime:
        """
        Record a token as revoked (idempotent)

        Revoking an already revoked token keeps the first timestamp.

        Args:
            token: Raw token string

        Returns:
            Revocation timestamp (UTC)
        """
        with self._lock:
            revoked_at = self._revoked.get(token)
            if revoked_at is None:
                revoked_at = datetime.now(timezone.utc)
                self._revoked[token] = revoked_at
                self.logger.info("Token revoked")
        return revoked_at

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    def revoked_at(self, token: str) -> Optional[datetime]:
        """Revocation timestamp, None if the token was never revoked"""
        with self._lock:
            return self._revoked.get(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)
