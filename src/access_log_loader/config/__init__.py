"""Configuration module."""

from .constants import (
    CHUNK_SIZE,
    DEVICE_TYPES,
    FAILED_ENTRIES_DISPLAYED,
    LOG_COLUMNS,
    MAX_COUNTRY_LENGTH,
    MAX_FIELD_LENGTH,
    MAX_MESSAGE_LENGTH,
    REQUIRED_FIELDS,
    TABLE_LOGS,
    VALID_HTTP_METHODS,
    VALID_HTTP_STATUSES,
)
from .loader import ConfigError, decrypt_sops_file, load_config
from .settings import Settings, clear_settings_cache, get_settings

__all__ = [
    # Validation
    "VALID_HTTP_METHODS",
    "VALID_HTTP_STATUSES",
    "MAX_FIELD_LENGTH",
    "MAX_COUNTRY_LENGTH",
    "REQUIRED_FIELDS",
    "DEVICE_TYPES",
    # Storage
    "TABLE_LOGS",
    "LOG_COLUMNS",
    "CHUNK_SIZE",
    # Notifications
    "MAX_MESSAGE_LENGTH",
    "FAILED_ENTRIES_DISPLAYED",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "ConfigError",
    "load_config",
    "decrypt_sops_file",
]
