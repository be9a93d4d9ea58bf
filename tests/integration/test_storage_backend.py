"""
Integration tests for the SQLite storage backend.

Tests the logs table schema, bulk inserts and transaction handling
against a real database file.
"""

import pytest

from access_log_loader.config import Settings
from access_log_loader.ingestion import validate_line
from access_log_loader.storage import (
    QueryError,
    SchemaError,
    StorageError,
    backend_from_settings,
    get_backend,
    list_available_backends,
)
from access_log_loader.storage.sqlite_backend import SQLiteBackend


class TestBackendFactory:
    """Tests for the backend factory."""

    def test_sqlite_backend(self, temp_db_path):
        backend = get_backend("sqlite", db_path=temp_db_path)

        assert isinstance(backend, SQLiteBackend)
        assert backend.backend_type == "sqlite"
        assert temp_db_path.parent.exists()

    def test_case_insensitive_name(self, temp_db_path):
        assert isinstance(get_backend("SQLite", db_path=temp_db_path), SQLiteBackend)

    def test_unknown_backend(self):
        with pytest.raises(StorageError, match="Unknown storage backend"):
            get_backend("mysql")

    def test_available_backends(self):
        assert "sqlite" in list_available_backends()

    def test_from_settings(self, temp_db_path):
        settings = Settings(sqlite_db_path=str(temp_db_path))

        backend = backend_from_settings(settings)

        assert isinstance(backend, SQLiteBackend)
        assert backend.db_path == temp_db_path


class TestSchema:
    """Tests for the logs table."""

    def test_initialize_creates_table(self, sqlite_backend):
        assert sqlite_backend.table_exists("logs")
        assert sqlite_backend.count_rows("logs") == 0

    def test_initialize_is_idempotent(self, sqlite_backend):
        sqlite_backend.initialize()
        assert sqlite_backend.table_exists("logs")

    def test_missing_table(self, sqlite_backend):
        with pytest.raises(SchemaError):
            sqlite_backend.count_rows("sessions")


class TestInsertLogEntries:
    """Tests for insert_log_entries."""

    def test_insert_and_read_back(self, sqlite_backend, build_line):
        entry = validate_line(build_line(user="alice", userAgent="curl/8.4.0"))

        inserted = sqlite_backend.insert_log_entries([entry.to_row()])
        rows = sqlite_backend.query("SELECT * FROM logs")

        assert inserted == 1
        assert len(rows) == 1
        row = rows[0]
        assert row["host"] == "203.0.113.7"
        assert row["user"] == "alice"
        assert row["time"] == "2024-01-15T10:30:00+00:00"
        assert row["method"] == "GET"
        assert row["status"] == 200
        assert row["response_size"] == 5120
        assert row["is_bot"] == 1
        assert row["device_type"] == "unknown"
        assert row["country"] == "US"

    def test_null_sentinels(self, sqlite_backend, build_line):
        entry = validate_line(build_line(method="-", path="-", query="", country="-"))

        sqlite_backend.insert_log_entries([entry.to_row()])
        row = sqlite_backend.query("SELECT * FROM logs")[0]

        assert row["method"] is None
        assert row["path"] is None
        assert row["query"] is None
        assert row["country"] is None
        assert row["user"] is None

    def test_empty_insert(self, sqlite_backend):
        assert sqlite_backend.insert_log_entries([]) == 0

    def test_check_violation_rolls_back(self, sqlite_backend, valid_line):
        """A failing batch leaves no rows behind."""
        good = validate_line(valid_line).to_row()
        bad = list(good)
        bad[3] = "FETCH"

        with pytest.raises(QueryError):
            sqlite_backend.insert_log_entries([good, tuple(bad)])

        assert sqlite_backend.count_rows("logs") == 0

    def test_context_manager_closes(self, temp_db_path):
        with get_backend("sqlite", db_path=temp_db_path) as backend:
            backend.initialize()
            assert backend.is_connected

        assert not backend.is_connected
