"""
Unit tests for the access log backup and truncation helpers.

Tests cover:
- Byte-for-byte backups, replacing previous ones
- In-place truncation keeping the file
- FileNotFoundError handling
"""

import asyncio
import os
from pathlib import Path

import pytest

from access_log_loader.ingestion.file_utils import backup_file, truncate_file


class TestBackupFile:
    """Tests for backup_file function."""

    def test_copies_bytes(self, tmp_path: Path) -> None:
        source = tmp_path / "access.log"
        source.write_bytes(b'{"host": "203.0.113.7"}\r\n\xff\xfe\n')
        destination = tmp_path / "access.log.bak"

        result = asyncio.run(backup_file(source, destination))

        assert result == destination
        assert destination.read_bytes() == source.read_bytes()

    def test_replaces_previous_backup(self, tmp_path: Path) -> None:
        source = tmp_path / "access.log"
        source.write_text("new\n")
        destination = tmp_path / "access.log.bak"
        destination.write_text("old content that is longer\n")

        asyncio.run(backup_file(source, destination))

        assert destination.read_text() == "new\n"

    def test_source_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            asyncio.run(backup_file(tmp_path / "missing.log", tmp_path / "backup.log"))


class TestTruncateFile:
    """Tests for truncate_file function."""

    def test_empties_file(self, tmp_path: Path) -> None:
        path = tmp_path / "access.log"
        path.write_text("line 1\nline 2\n")

        asyncio.run(truncate_file(path))

        assert path.exists()
        assert path.read_bytes() == b""

    def test_keeps_inode(self, tmp_path: Path) -> None:
        """Writers holding the file open keep writing to the same file."""
        path = tmp_path / "access.log"
        path.write_text("line 1\n")
        inode = os.stat(path).st_ino

        asyncio.run(truncate_file(path))

        assert os.stat(path).st_ino == inode

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            asyncio.run(truncate_file(tmp_path / "missing.log"))
