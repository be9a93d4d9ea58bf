"""
Chunked bulk loading of validated entries into the store.
"""

import asyncio
import logging
from typing import Callable, Iterator, Sequence, TypeVar

from ..config.constants import CHUNK_SIZE
from ..ingestion.base import ValidatedEntry
from ..storage import StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

BackendFactory = Callable[[], StorageBackend]


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` elements."""
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def insert_entries(
    backend_factory: BackendFactory,
    entries: Sequence[ValidatedEntry],
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """
    Insert entries into the logs table, one bulk insert per chunk.

    Chunks are written in order, one at a time. The first failing chunk
    aborts the load; chunks inserted before it stay committed. The backend
    is created for this load only and closed whatever the outcome.

    Args:
        backend_factory: Callable returning a fresh StorageBackend
        entries: Validated entries in insertion order
        chunk_size: Maximum rows per insert

    Returns:
        Number of rows inserted

    Raises:
        StorageError: If the schema setup or any chunk insert fails
    """
    backend = backend_factory()
    inserted = 0
    try:
        await asyncio.to_thread(backend.initialize)
        for number, chunk in enumerate(chunked(entries, chunk_size), start=1):
            rows = [entry.to_row() for entry in chunk]
            inserted += await asyncio.to_thread(backend.insert_log_entries, rows)
            logger.debug(f"Inserted chunk {number} ({len(rows):,} rows)")
    finally:
        await asyncio.to_thread(backend.close)

    logger.info(f"Inserted {inserted:,} entries")
    return inserted
