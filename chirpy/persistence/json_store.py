"""
Dataset Store - JSON file backed database

Module: persistence.json_store
Date: 2026-10-12
Version: 0.1.1

CHANGELOG:
[2026-10-19 v0.1.1] Missing database file is created under the exclusive lock

[2026-10-12 v0.1.0] Initial implementation
  - Single JSON file holding every chirp and user
  - Atomic writes (temp file + fsync + rename)
  - Multi-reader / single-writer locking
  - Reset to an empty dataset

ARCHITECTURE:
DatasetStore owns the only in-memory Dataset and is the only component
that touches the disk. Repositories never hold a reference to the dataset
outside of a ``reading()`` / ``writing()`` block:

  - reading(): shared lock, yields the dataset, nothing is written
  - writing(): exclusive lock, yields the dataset, the whole dataset is
    persisted when the block exits normally

A failed write inside ``writing()`` raises StoreIOError but leaves the
in-memory mutation in place: memory and disk diverge until the next
successful write.
"""

import json
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..core.errors import StoreIOError
from .models import Dataset
from .rwlock import ReadWriteLock


class DatasetStore:
    """
    JSON file persistence for the Chirpy dataset.

    Handles:
    - File creation with 0600 permissions
    - Atomic writes (temp file + rename)
    - Thread-safe read/write access
    - Automatic directory creation
    """

    def __init__(self, file_path: str):
        """
        Initialize the store and load the dataset into memory

        Args:
            file_path: Path to the JSON database file

        Raises:
            StoreIOError: If the file cannot be created or read
        """
        self.logger = logging.getLogger("persistence.json_store")
        self.file_path = Path(file_path)
        self._lock = ReadWriteLock()

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"Failed to create {self.file_path.parent}: {e}") from e

        self._data = self.load()
        self.logger.info(
            f"Store loaded: {self.file_path} "
            f"({len(self._data.chirps)} chirps, {len(self._data.users)} users)"
        )

    def load(self) -> Dataset:
        """
        Read the dataset from disk

        Creates the file with an empty dataset if it does not exist. The
        in-memory snapshot is left untouched.

        Returns:
            Dataset parsed from the file

        Raises:
            StoreIOError: If the file cannot be read or parsed
        """
        if not self.file_path.exists():
            with self._lock.write_locked():
                # Another thread may have created it while we waited
                if not self.file_path.exists():
                    self.logger.info(f"Database does not exist, creating: {self.file_path}")
                    empty = Dataset()
                    self._write_atomic(empty)
                    return empty

        with self._lock.read_locked():
            try:
                with open(self.file_path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
                return Dataset.from_dict(raw)
            except json.JSONDecodeError as e:
                raise StoreIOError(f"Invalid JSON in {self.file_path}: {e}") from e
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise StoreIOError(f"Malformed dataset in {self.file_path}: {e}") from e
            except OSError as e:
                raise StoreIOError(f"Failed to read {self.file_path}: {e}") from e

    def save(self, dataset: Dataset) -> None:
        """
        Durably write a dataset and adopt it as the in-memory snapshot

        Args:
            dataset: Dataset to persist

        Raises:
            StoreIOError: If the write fails
        """
        with self._lock.write_locked():
            self._data = dataset
            self._write_atomic(dataset)

    def reset(self) -> None:
        """
        Replace the dataset with an empty one and persist it

        Raises:
            StoreIOError: If the write fails
        """
        with self._lock.write_locked():
            self._data = Dataset()
            self._write_atomic(self._data)
        self.logger.info("Database has been reset")

    @contextmanager
    def reading(self) -> Iterator[Dataset]:
        """Shared access to the in-memory dataset (must not be mutated)"""
        with self._lock.read_locked():
            yield self._data

    @contextmanager
    def writing(self) -> Iterator[Dataset]:
        """
        Exclusive access to the in-memory dataset

        The dataset is written to disk when the block exits without an
        exception; the lock is held until the write completes.

        Raises:
            StoreIOError: If the write fails
        """
        with self._lock.write_locked():
            yield self._data
            self._write_atomic(self._data)

    def _write_atomic(self, dataset: Dataset) -> None:
        """
        Atomic write: write to temp file, fsync, then rename

        Caller must hold the write lock.

        Raises:
            StoreIOError: If serialization or the write fails
        """
        temp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        try:
            payload = json.dumps(dataset.to_dict(), indent=2)

            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_path, 0o600)

            temp_path.replace(self.file_path)

        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to write database: {e}")
            raise StoreIOError(f"Failed to write {self.file_path}: {e}") from e
