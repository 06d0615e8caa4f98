from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Dict, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """
    A backend could not read or write a slot (I/O failure, quota exceeded, ...).
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message


@runtime_checkable
class BlobStorage(Protocol):
    """
    Minimal key-value port for the persisted collection.

    - One slot per key; a slot holds one opaque text blob.
    - read returns None when the slot was never written.
    - Both operations raise StorageError on backend failure.
    """

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, blob: str) -> None:
        ...


class InMemoryBlobStorage:
    """
    Dict-backed slots, used by tests and throwaway sessions.

    max_bytes caps the total UTF-8 size of all slots, like a browser storage
    quota; a write that would exceed it raises StorageError and leaves the
    previous blob in place.
    """

    def __init__(self, max_bytes: Optional[int] = None) -> None:
        self._lock = RLock()
        self._slots: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._slots.get(key)

    def write(self, key: str, blob: str) -> None:
        with self._lock:
            if self.max_bytes is not None:
                others = sum(len(v.encode("utf-8")) for k, v in self._slots.items() if k != key)
                if others + len(blob.encode("utf-8")) > self.max_bytes:
                    raise StorageError(key, f"quota exceeded ({self.max_bytes} bytes)")
            self._slots[key] = blob

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._slots.keys())


class JsonFileBlobStorage:
    """
    One <key>.json file per slot inside `directory`.

    Writes go to a temp file in the same directory and are swapped in with
    os.replace, so a failed write never truncates the existing slot.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(key, f"read failed: {e}") from e

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(key, f"write failed: {e}") from e
        logger.debug(f"Wrote {len(blob)} chars to {path}")


# ── SQLite ────────────────────────────────────────────────────────────────────

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class SqliteBlobStorage:
    """
    Slots as rows of a single kv table. Every write is atomic.
    """

    def __init__(self, db_path: str = "contribcast.db") -> None:
        self.db_path = db_path
        try:
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            with self._transaction() as cur:
                cur.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise StorageError("*", f"cannot open {db_path}: {e}") from e

    @contextmanager
    def _transaction(self):
        """All writes commit together or roll back entirely."""
        cur = self._conn.cursor()
        try:
            yield cur
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def read(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(key, f"read failed: {e}") from e
        return row[0] if row else None

    def write(self, key: str, blob: str) -> None:
        try:
            with self._transaction() as cur:
                cur.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?,?)", (key, blob))
        except sqlite3.Error as e:
            raise StorageError(key, f"write failed: {e}") from e

    def close(self) -> None:
        self._conn.close()
