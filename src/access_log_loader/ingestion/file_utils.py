"""
Shared file utilities for the access log lifecycle.

Backup and truncation of the source log around a transfer run.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

# shutil.copyfile run on aiofiles' executor
_copyfile = aiofiles.os.wrap(shutil.copyfile)


async def backup_file(source: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Copy a file byte for byte, replacing any previous backup.

    Args:
        source: File to back up
        destination: Backup location

    Returns:
        Path of the backup

    Raises:
        FileNotFoundError: If the source doesn't exist
        OSError: If the copy fails
    """
    destination = Path(destination)
    await _copyfile(str(source), str(destination))
    logger.info(f"Backed up {source} to {destination}")
    return destination


async def truncate_file(path: Union[str, Path]) -> None:
    """
    Empty a file in place, keeping its inode so log writers can continue.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file cannot be truncated
    """
    async with aiofiles.open(path, "r+b") as f:
        await f.truncate(0)
    logger.info(f"Truncated {path}")
