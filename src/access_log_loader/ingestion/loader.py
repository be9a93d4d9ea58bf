"""
Streaming entry loader.

Reads an access log line by line and splits it into accepted
(validated) and rejected (failed) entries, preserving input order.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, Union

import aiofiles

from .base import FailedEntry, LoadedEntries
from .validators import validate_line

logger = logging.getLogger(__name__)


async def read_lines(path: Union[str, Path], encoding: str = "utf-8") -> AsyncIterator[str]:
    """
    Yield the lines of a text file without their line terminators.

    Undecodable bytes are replaced rather than aborting the read, so that a
    single corrupt line ends up as a rejected entry instead of a failed run.
    """
    async with aiofiles.open(path, "r", encoding=encoding, errors="replace", newline="") as f:
        async for line in f:
            yield line.rstrip("\r\n")


async def load_entries(path: Union[str, Path]) -> LoadedEntries:
    """
    Validate every non-blank line of an access log.

    Per-line failures are collected, never raised. I/O errors while
    opening or reading the file propagate to the caller.

    Args:
        path: Path to the newline-delimited JSON access log

    Returns:
        LoadedEntries with accepted and rejected entries in file order
    """
    entries = LoadedEntries(accepted=[], rejected=[])
    line_number = 0

    async for line in read_lines(path):
        line_number += 1
        if not line.strip():
            continue

        try:
            entries.accepted.append(validate_line(line))
        except Exception as e:
            error = str(e) or "Unknown error."
            logger.debug(f"Rejected line {line_number}: {error}")
            entries.rejected.append(FailedEntry(line=line, error=error))

    logger.info(
        f"Loaded {path}: {len(entries.accepted):,} accepted, "
        f"{len(entries.rejected):,} rejected"
    )
    return entries
