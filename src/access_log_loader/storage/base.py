"""
Store interface for validated access log entries.

A backend owns one connection to the relational store holding the
``logs`` table. Backends are short-lived: the batch loader creates one
per load and closes it when the load ends.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class StorageBackend(ABC):
    """Relational store receiving rows of the ``logs`` table."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Identifier the backend is registered under (e.g. 'sqlite')."""
        pass

    @abstractmethod
    def initialize(self) -> None:
        """Create the ``logs`` table and its indexes if missing."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Calling it twice is harmless."""
        pass

    @abstractmethod
    def insert_log_entries(self, rows: Sequence[tuple]) -> int:
        """
        Insert rows into the logs table in a single transaction.

        Args:
            rows: Row tuples in LOG_COLUMNS order
                  (see ValidatedEntry.to_row()).

        Returns:
            Number of rows inserted.

        Raises:
            StorageError: If insertion fails. No row of the batch is kept.
        """
        pass

    @abstractmethod
    def query(self, sql: str, params: Optional[dict] = None) -> list[dict]:
        """
        Run a read query, returning one dictionary per row.

        Raises:
            QueryError: If the query fails.
        """
        pass

    @abstractmethod
    def count_rows(self, table_name: str) -> int:
        """
        Count the rows of a table.

        Raises:
            SchemaError: If the table doesn't exist.
        """
        pass

    def __enter__(self) -> "StorageBackend":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class StorageError(Exception):
    """Base exception for storage backend errors."""

    pass


class StorageConnectionError(StorageError):
    """Raised when the store cannot be reached."""

    pass


class QueryError(StorageError):
    """Raised when a statement is rejected by the store."""

    pass


class SchemaError(StorageError):
    """Raised when an expected table is missing."""

    pass
