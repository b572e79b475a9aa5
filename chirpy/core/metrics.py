"""
Hit counter for the static file server

Module: core.metrics
Date: 2026-10-12
Version: 0.1.0
"""

import threading


class HitCounter:
    """Thread-safe request counter"""

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0
