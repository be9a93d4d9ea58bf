"""
Storage backend lookup by name.

Backends register under a short name; the built-in SQLite backend is
imported on first use.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .base import StorageBackend, StorageError

if TYPE_CHECKING:
    from ..config.settings import Settings

logger = logging.getLogger(__name__)

_BACKEND_REGISTRY: dict[str, type[StorageBackend]] = {}


def register_backend(backend_type: str, backend_class: type[StorageBackend]) -> None:
    """Make a backend class available under ``backend_type``."""
    _BACKEND_REGISTRY[backend_type.lower()] = backend_class
    logger.debug(f"Registered storage backend: {backend_type}")


def _load_builtin(backend_type: str) -> None:
    if backend_type == "sqlite":
        from .sqlite_backend import SQLiteBackend

        register_backend("sqlite", SQLiteBackend)


def get_backend(backend_type: str = "sqlite", **kwargs) -> StorageBackend:
    """
    Create an unconnected backend instance.

    Args:
        backend_type: Registered backend name
        **kwargs: Passed to the backend constructor (SQLite: ``db_path``)

    Raises:
        StorageError: If the backend is unknown or cannot be constructed

    Examples:
        backend = get_backend("sqlite", db_path="data/access-logs.db")
    """
    backend_type = backend_type.lower()
    if backend_type not in _BACKEND_REGISTRY:
        _load_builtin(backend_type)

    backend_class = _BACKEND_REGISTRY.get(backend_type)
    if backend_class is None:
        raise StorageError(
            f"Unknown storage backend: '{backend_type}'. "
            f"Available backends: {', '.join(list_available_backends())}"
        )

    try:
        return backend_class(**kwargs)
    except Exception as e:
        raise StorageError(f"Failed to create {backend_type} backend: {e}") from e


def backend_from_settings(settings: "Settings") -> StorageBackend:
    """Create the backend configured in ``settings``."""
    return get_backend(settings.storage_backend, db_path=Path(settings.sqlite_db_path))


def list_available_backends() -> list[str]:
    """Names of all backends that can be created."""
    _load_builtin("sqlite")
    return sorted(_BACKEND_REGISTRY)
