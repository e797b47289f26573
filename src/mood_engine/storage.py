"""
Storage backends for the mood history record.

A backend holds named string records. Each write replaces the whole record
in one step: readers either see the previous value or the new one, never a
partial write.
"""

import logging
import os
import sqlite3
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The backend could not complete a read or write."""


class StorageQuotaExceeded(StorageError):
    """The backend refused a write because it would exceed its quota."""


class StorageBackend(Protocol):
    """Minimal key/value interface the Entry Store needs."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryBackend:
    """In-process backend, optionally with a byte quota to mimic browser storage limits."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._records: Dict[str, str] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._records.get(key)

    def write(self, key: str, value: str) -> None:
        with self._lock:
            if self.quota_bytes is not None:
                others = sum(len(v.encode("utf-8")) for k, v in self._records.items() if k != key)
                needed = others + len(value.encode("utf-8"))
                if needed > self.quota_bytes:
                    raise StorageQuotaExceeded(
                        f"Writing {key!r} needs {needed} bytes, quota is {self.quota_bytes}"
                    )
            self._records[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)


class JsonFileBackend:
    """
    One JSON file per record inside a data directory.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash mid-write leaves the old file intact.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.directory / f"{safe}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key!r}: {e}") from e


class SqliteBackend:
    """
    Records stored as rows of a single key/value table.

    Each operation opens its own connection so the backend can be shared
    across threads; every write commits in one transaction.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        with self._connect() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS records (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageError(f"SQLite error on {self.db_path}: {e}") from e
        finally:
            conn.close()

    def read(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM records WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO records (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM records WHERE key = ?", (key,))
