"""
SQLite storage backend.

Stores validated access log entries in a local SQLite database. The
``logs`` table mirrors the columns of ValidatedEntry; enumerated columns
are enforced with CHECK constraints.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from ..config.constants import DEVICE_TYPES, LOG_COLUMNS, TABLE_LOGS, VALID_HTTP_METHODS
from .base import QueryError, SchemaError, StorageBackend, StorageConnectionError

logger = logging.getLogger(__name__)


def _sql_enum(values) -> str:
    return ", ".join(f"'{value}'" for value in sorted(values))


# =============================================================================
# Schema
# =============================================================================

LOGS_TABLE_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE_LOGS} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    host TEXT NOT NULL,
    user TEXT,
    time TEXT NOT NULL,
    method TEXT CHECK (method IN ({_sql_enum(VALID_HTTP_METHODS)})),
    path TEXT,
    query TEXT,
    status INTEGER NOT NULL,
    response_size REAL NOT NULL,
    process_time REAL NOT NULL,
    referer TEXT,
    user_agent TEXT,
    is_bot INTEGER NOT NULL,
    browser TEXT,
    device_type TEXT NOT NULL CHECK (device_type IN ({_sql_enum(DEVICE_TYPES)})),
    os TEXT,
    country TEXT
)
"""

INDEX_DEFINITIONS = [
    f"CREATE INDEX IF NOT EXISTS idx_logs_time ON {TABLE_LOGS}(time)",
    f"CREATE INDEX IF NOT EXISTS idx_logs_host ON {TABLE_LOGS}(host)",
]

INSERT_LOGS_SQL = (
    f"INSERT INTO {TABLE_LOGS} ({', '.join(LOG_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in LOG_COLUMNS)})"
)

_TIME_INDEX = LOG_COLUMNS.index("time")
_IS_BOT_INDEX = LOG_COLUMNS.index("is_bot")


def _to_sqlite_row(row: Sequence[Any]) -> tuple:
    """Store times as ISO-8601 text and the bot flag as 0/1."""
    converted = list(row)
    time = converted[_TIME_INDEX]
    if isinstance(time, datetime):
        converted[_TIME_INDEX] = time.isoformat()
    converted[_IS_BOT_INDEX] = int(bool(converted[_IS_BOT_INDEX]))
    return tuple(converted)


# =============================================================================
# Backend
# =============================================================================


class SQLiteBackend(StorageBackend):
    """
    SQLite storage backend.

    Holds a single connection, opened on first use and released by close().
    """

    def __init__(
        self,
        db_path: Path | str = "data/access-logs.db",
        *,
        timeout: float = 30.0,
    ):
        """
        Args:
            db_path: Path to the database file; parent directories are created
            timeout: Seconds to wait for a locked database
        """
        self.db_path = Path(db_path)
        self._timeout = timeout
        self._connection: Optional[sqlite3.Connection] = None

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            try:
                # Inserts run on worker threads, one at a time
                self._connection = sqlite3.connect(
                    str(self.db_path),
                    check_same_thread=False,
                    timeout=self._timeout,
                )
            except sqlite3.Error as e:
                raise StorageConnectionError(
                    f"Failed to connect to SQLite database: {e}"
                ) from e
            self._connection.row_factory = sqlite3.Row
            logger.debug(f"Connected to SQLite database: {self.db_path}")
        return self._connection

    @contextmanager
    def _cursor(self):
        """Cursor committing on success and rolling back on error."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise QueryError(f"SQLite query failed: {e}") from e
        finally:
            cursor.close()

    def initialize(self) -> None:
        with self._cursor() as cursor:
            cursor.execute(LOGS_TABLE_SCHEMA)
            for index_sql in INDEX_DEFINITIONS:
                cursor.execute(index_sql)
        logger.debug(f"Initialized SQLite database: {self.db_path}")

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("SQLite connection closed")

    def insert_log_entries(self, rows: Sequence[tuple]) -> int:
        if not rows:
            return 0

        converted = [_to_sqlite_row(row) for row in rows]
        with self._cursor() as cursor:
            cursor.executemany(INSERT_LOGS_SQL, converted)
        # rowcount is unreliable after executemany
        return len(converted)

    def query(self, sql: str, params: Optional[dict] = None) -> list[dict]:
        with self._cursor() as cursor:
            cursor.execute(sql, params or {})
            return [dict(row) for row in cursor.fetchall()]

    def table_exists(self, table_name: str) -> bool:
        result = self.query(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = :name",
            {"name": table_name},
        )
        return bool(result)

    def count_rows(self, table_name: str) -> int:
        if not self.table_exists(table_name):
            raise SchemaError(f"Table '{table_name}' does not exist")

        # table_name is known to exist at this point
        result = self.query(f"SELECT COUNT(*) AS count FROM {table_name}")
        return result[0]["count"]
