"""
Ingestion layer for newline-delimited JSON access logs.

Turns untrusted log lines into validated entries ready for storage,
or into failed entries carrying the reason they were rejected.

Usage:
    from access_log_loader.ingestion import load_entries

    accepted, rejected = await load_entries("/var/log/nginx/access.json")
    for failed in rejected:
        print(failed.error, failed.line)
"""

from .base import FailedEntry, LoadedEntries, ValidatedEntry
from .exceptions import IngestionError, ParseError, ValidationError
from .file_utils import backup_file, truncate_file
from .loader import load_entries, read_lines
from .validators import VALIDATOR_CHAIN, run_chain, validate_line

__all__ = [
    # Data models
    "ValidatedEntry",
    "FailedEntry",
    "LoadedEntries",
    # Exceptions
    "IngestionError",
    "ValidationError",
    "ParseError",
    # Validation
    "VALIDATOR_CHAIN",
    "run_chain",
    "validate_line",
    # Loading
    "load_entries",
    "read_lines",
    # File utilities
    "backup_file",
    "truncate_file",
]
