"""SQLite implementation of DatabaseService."""

import logging
import sqlite3
import time
from contextlib import contextmanager
from typing import Iterator

from cotacao.database.service import DatabaseService
from cotacao.database.types import Params, Row
from cotacao.errors import StorageError, StorageUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BUSY_TIMEOUT_MS = 5000
PROGRESS_INTERVAL = 100  # SQLite VM instructions between deadline checks


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3.

    Holds a single connection. Deadlines are enforced with the busy timeout
    (time spent waiting on another writer's lock) and a progress handler
    (time spent executing).
    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._in_transaction = False

    def connect(self) -> None:
        try:
            conn = sqlite3.connect(self._db_path)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error as e:
            raise StorageUnavailable(f"cannot open database {self._db_path!r}: {e}") from e
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._conn

    def _get_conn(self) -> sqlite3.Connection:
        """Get the connection for the current transaction."""
        conn = self._require_conn()
        if not self._in_transaction:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )
        return conn

    @contextmanager
    def transaction(self, deadline: float | None = None) -> Iterator[None]:
        conn = self._require_conn()
        expires_at = None
        armed = False
        self._in_transaction = True
        try:
            if deadline is not None:
                expires_at = time.monotonic() + deadline
                conn.execute(f"PRAGMA busy_timeout = {max(1, int(deadline * 1000))}")
                armed = True
                conn.set_progress_handler(
                    lambda: int(time.monotonic() > expires_at), PROGRESS_INTERVAL
                )
            yield
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            if expires_at is not None and time.monotonic() > expires_at:
                raise StorageError(
                    f"deadline of {deadline * 1000:.0f} ms exceeded: {e}"
                ) from e
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False
            if armed:
                self._disarm_deadline(conn)

    def _disarm_deadline(self, conn: sqlite3.Connection) -> None:
        conn.set_progress_handler(None, 0)
        try:
            conn.execute(f"PRAGMA busy_timeout = {DEFAULT_BUSY_TIMEOUT_MS}")
        except sqlite3.Error as e:
            raise StorageError(f"cannot reset busy timeout: {e}") from e

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        conn = self._get_conn()
        cursor = conn.execute(sql, params or ())
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def execute_ddl(self, sql: str) -> None:
        conn = self._require_conn()
        try:
            conn.executescript(sql)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        logger.debug("Executed DDL on %s", self._db_path)
