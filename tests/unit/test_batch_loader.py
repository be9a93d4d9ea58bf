"""
Unit tests for chunked bulk loading.

Tests cover:
- Chunk boundaries
- Ordered, sequential inserts
- Abort on the first failing chunk
- Backend lifecycle (initialized once, always closed)
"""

import asyncio

import pytest

from access_log_loader.ingestion import validate_line
from access_log_loader.pipeline import chunked, insert_entries
from access_log_loader.storage import QueryError


class FakeBackend:
    """Records calls instead of touching a database."""

    def __init__(self, fail_on_chunk=None):
        self.fail_on_chunk = fail_on_chunk
        self.chunks = []
        self.initialized = False
        self.closed = False

    def initialize(self):
        self.initialized = True

    def insert_log_entries(self, rows):
        if len(self.chunks) + 1 == self.fail_on_chunk:
            raise QueryError("insert failed")
        self.chunks.append(list(rows))
        return len(rows)

    def close(self):
        self.closed = True


@pytest.fixture
def entry(valid_line):
    return validate_line(valid_line)


class TestChunked:
    """Tests for chunked helper."""

    def test_exact_multiple(self):
        assert list(chunked([1, 2, 3, 4], 2)) == [[1, 2], [3, 4]]

    def test_remainder(self):
        assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_empty(self):
        assert list(chunked([], 3)) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            list(chunked([1], 0))


class TestInsertEntries:
    """Tests for insert_entries function."""

    def test_chunk_sizes(self, entry):
        """45,000 entries go in as 20,000 + 20,000 + 5,000."""
        backend = FakeBackend()

        inserted = asyncio.run(insert_entries(lambda: backend, [entry] * 45000))

        assert inserted == 45000
        assert [len(chunk) for chunk in backend.chunks] == [20000, 20000, 5000]
        assert backend.initialized
        assert backend.closed

    def test_custom_chunk_size(self, entry):
        backend = FakeBackend()

        asyncio.run(insert_entries(lambda: backend, [entry] * 5, chunk_size=2))

        assert [len(chunk) for chunk in backend.chunks] == [2, 2, 1]

    def test_rows_in_input_order(self, build_line):
        entries = [validate_line(build_line(path=f"/page/{i}")) for i in range(5)]
        backend = FakeBackend()

        asyncio.run(insert_entries(lambda: backend, entries, chunk_size=2))

        paths = [row[4] for chunk in backend.chunks for row in chunk]
        assert paths == [f"/page/{i}" for i in range(5)]

    def test_failing_chunk_stops_load(self, entry):
        """Chunks after the failing one are never attempted."""
        backend = FakeBackend(fail_on_chunk=2)

        with pytest.raises(QueryError):
            asyncio.run(insert_entries(lambda: backend, [entry] * 45000))

        assert [len(chunk) for chunk in backend.chunks] == [20000]
        assert backend.closed

    def test_no_entries(self):
        backend = FakeBackend()

        inserted = asyncio.run(insert_entries(lambda: backend, []))

        assert inserted == 0
        assert backend.chunks == []
        assert backend.closed

    def test_fresh_backend_per_load(self, entry):
        backends = []

        def factory():
            backends.append(FakeBackend())
            return backends[-1]

        asyncio.run(insert_entries(factory, [entry]))
        asyncio.run(insert_entries(factory, [entry]))

        assert len(backends) == 2
        assert all(b.closed for b in backends)
