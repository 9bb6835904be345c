"""Snapshot JSON documents on disk, with per-key locking around read-modify-write."""

from __future__ import annotations

import os
import tempfile
import threading
from contextlib import contextmanager
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from appreviews.domain.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

DOCUMENT_MODE = 0o644


class KeyedLock:
    """Hand out one re-entrant lock per key, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self.lock_for(key):
            yield


class SnapshotDocument[TRecord]:
    """A pretty-printed JSON array stored as one complete snapshot.

    ``load`` treats a missing file as empty and raises ``PersistenceError`` for
    unreadable or unparsable content. ``save`` writes to a temporary file in the
    same directory and renames it over the target, so readers never observe a
    partially written document.
    """

    def __init__(self, path: Path, adapter: TypeAdapter[list[TRecord]]) -> None:
        self.path = path
        self._adapter = adapter

    def load(self) -> list[TRecord]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise PersistenceError(
                f"Failed to read {self.path}: {exc}", path=str(self.path)
            ) from exc

        try:
            return self._adapter.validate_json(raw)
        except ValidationError as exc:
            log.error("Corrupt document %s: %s", self.path, exc.errors(include_url=False)[:3])
            raise PersistenceError(
                f"Failed to parse {self.path}; refusing to overwrite it", path=str(self.path)
            ) from exc

    def save(self, records: list[TRecord]) -> None:
        payload = self._adapter.dump_json(records, indent=2, by_alias=True)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as exc:
            raise PersistenceError(
                f"Failed to prepare write of {self.path}: {exc}", path=str(self.path)
            ) from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                os.fchmod(handle.fileno(), DOCUMENT_MODE)
                handle.write(payload)
                handle.write(b"\n")
                handle.flush()
                os.fsync(handle.fileno())
            tmp_path.replace(self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(
                f"Failed to write {self.path}: {exc}", path=str(self.path)
            ) from exc


__all__ = ["KeyedLock", "SnapshotDocument"]
