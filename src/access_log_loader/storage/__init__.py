"""
Storage layer for validated access log entries.

Usage:
    from access_log_loader.storage import get_backend

    with get_backend("sqlite", db_path="data/access-logs.db") as backend:
        backend.initialize()
        backend.insert_log_entries([entry.to_row() for entry in entries])
"""

from .base import (
    QueryError,
    SchemaError,
    StorageBackend,
    StorageConnectionError,
    StorageError,
)
from .factory import (
    backend_from_settings,
    get_backend,
    list_available_backends,
    register_backend,
)

__all__ = [
    # Base classes and exceptions
    "StorageBackend",
    "StorageError",
    "StorageConnectionError",
    "QueryError",
    "SchemaError",
    # Factory functions
    "get_backend",
    "backend_from_settings",
    "register_backend",
    "list_available_backends",
]
