"""
SQLite-backed store handle.

A Database owns a single connection shared by readers and the writer. All
access goes through read() or write(), which serialize on a per-handle lock.
write() runs a transaction that commits on success and rolls back on any
exception; nested write() calls become savepoints of the outer transaction.

SQLite errors are translated at this boundary: a UNIQUE violation becomes
DuplicateError and any other sqlite3.Error becomes StorageError.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from sfcatalog.errors import DuplicateError, StorageError
from sfcatalog.logger import get_logger

logger = get_logger(__name__)

MEMORY = ":memory:"


def translate_sqlite_error(exc: sqlite3.Error) -> Exception:
    """Map a sqlite3 exception onto the catalog's error types."""
    if isinstance(exc, sqlite3.IntegrityError) and "UNIQUE" in str(exc).upper():
        return DuplicateError(str(exc))
    return StorageError(str(exc))


class Database:
    """
    Transactional store handle.

    Args:
        path: Database file, or ":memory:" for a private in-memory store.
            Parent directories are created as needed.

    Raises:
        StorageError: if the database cannot be opened
    """

    def __init__(self, path: Union[str, Path] = MEMORY):
        self._path = str(path)
        self._lock = threading.RLock()
        self._depth = 0
        try:
            if self._path != MEMORY:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: transactions are managed explicitly below
            self._conn = sqlite3.connect(
                self._path, isolation_level=None, check_same_thread=False
            )
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            if self._path != MEMORY:
                self._conn.execute("PRAGMA journal_mode = WAL")
                self._conn.execute("PRAGMA synchronous = NORMAL")
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"cannot open database {self._path!r}: {exc}") from exc
        logger.debug("Opened database %s", self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def write(self) -> Iterator[sqlite3.Connection]:
        """
        Run the body in a write transaction.

        Example:
            with db.write() as conn:
                conn.execute("UPDATE tags SET name = ? WHERE id = ?", (name, tag_id))
        """
        with self._lock:
            self._depth += 1
            savepoint = f"sp_{self._depth}"
            outermost = self._depth == 1
            try:
                if outermost:
                    self._conn.execute("BEGIN IMMEDIATE")
                else:
                    self._conn.execute(f"SAVEPOINT {savepoint}")
            except sqlite3.Error as exc:
                self._depth -= 1
                raise translate_sqlite_error(exc) from exc

            try:
                yield self._conn
            except BaseException as exc:
                self._rollback(outermost, savepoint)
                self._depth -= 1
                if isinstance(exc, sqlite3.Error):
                    raise translate_sqlite_error(exc) from exc
                raise

            try:
                if outermost:
                    self._conn.execute("COMMIT")
                else:
                    self._conn.execute(f"RELEASE SAVEPOINT {savepoint}")
            except sqlite3.Error as exc:
                self._rollback(outermost, savepoint)
                raise translate_sqlite_error(exc) from exc
            finally:
                self._depth -= 1

    def _rollback(self, outermost: bool, savepoint: str) -> None:
        try:
            if outermost:
                self._conn.execute("ROLLBACK")
            else:
                self._conn.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
                self._conn.execute(f"RELEASE SAVEPOINT {savepoint}")
        except sqlite3.Error as exc:
            # the original failure is more useful than the rollback's
            logger.error("Rollback failed: %s", exc)

    @contextmanager
    def read(self) -> Iterator[sqlite3.Connection]:
        """Yield the connection for queries, translating SQLite errors."""
        with self._lock:
            try:
                yield self._conn
            except sqlite3.Error as exc:
                raise translate_sqlite_error(exc) from exc

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.debug("Closed database %s", self._path)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Database({self._path!r})"
