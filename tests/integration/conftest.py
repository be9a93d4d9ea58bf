"""
Shared fixtures for integration tests.

Provides:
- Temporary SQLite database for isolated testing
- Settings pointing at a temporary access log
"""

from pathlib import Path

import pytest

from access_log_loader.config import Settings
from access_log_loader.storage import get_backend

# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Path to a SQLite database inside the test's temp directory."""
    return tmp_path / "data" / "access-logs.db"


@pytest.fixture
def sqlite_backend(temp_db_path: Path):
    """Initialized SQLite backend, closed after the test."""
    backend = get_backend("sqlite", db_path=temp_db_path)
    backend.initialize()
    yield backend
    backend.close()


@pytest.fixture
def stored_rows(temp_db_path: Path):
    """Callable returning the stored log rows, in insertion order."""

    def _rows() -> list[dict]:
        with get_backend("sqlite", db_path=temp_db_path) as backend:
            backend.initialize()
            return backend.query("SELECT * FROM logs ORDER BY id")

    return _rows


# =============================================================================
# TRANSFER FIXTURES
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path, temp_db_path: Path) -> Settings:
    """Settings for a transfer of ``access.log`` in the temp directory."""
    return Settings(
        source_path=str(tmp_path / "access.log"),
        backup_path=str(tmp_path / "access.log.bak"),
        sqlite_db_path=str(temp_db_path),
    )
