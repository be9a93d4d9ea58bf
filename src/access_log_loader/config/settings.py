"""
Application settings and configuration management.

Supports loading from:
1. YAML or JSON config files (config.yaml, config.json)
2. SOPS-encrypted YAML files (config.enc.yaml)
3. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DISCORD_WEBHOOK_BASE = "https://discord.com/api/webhooks"


def _discord_webhook_url(discord: Any) -> str:
    """Build a webhook URL from a URL string or an ``id``/``token`` pair."""
    if isinstance(discord, str):
        return discord
    if not isinstance(discord, dict):
        return ""
    if discord.get("webhook_url") or discord.get("url"):
        return discord.get("webhook_url") or discord.get("url")
    if discord.get("id") and discord.get("token"):
        return f"{DISCORD_WEBHOOK_BASE}/{discord['id']}/{discord['token']}"
    return ""


@dataclass
class Settings:
    """Settings for a single log transfer run."""

    # Access log locations
    source_path: str = ""
    backup_path: str = ""

    # Storage Backend Settings
    storage_backend: str = "sqlite"
    sqlite_db_path: str = "data/access-logs.db"

    # Notification Settings
    discord_webhook_url: str = ""

    def validate(self, truncate: bool = True) -> list[str]:
        """
        Validate required settings are present. Returns list of errors.

        The backup path is only required when the source log is truncated,
        since no backup is taken otherwise.
        """
        errors = []

        if not self.source_path:
            errors.append("source.path is required")

        if truncate:
            if not self.backup_path:
                errors.append("source.backup is required")
            elif self.source_path and Path(self.backup_path) == Path(self.source_path):
                errors.append("source.backup must differ from source.path")

        if self.storage_backend != "sqlite":
            errors.append("Only SQLite backend is supported in this version")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for logging. Credentials are masked."""
        return {
            "source_path": self.source_path,
            "backup_path": self.backup_path,
            "storage_backend": self.storage_backend,
            "sqlite_db_path": self.sqlite_db_path,
            "discord_webhook_url": "***" if self.discord_webhook_url else "",
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """
        Create Settings from a configuration dictionary.

        Accepts both the nested layout::

            source: {path: ..., backup: ...}
            storage: {backend: sqlite, sqlite_db_path: ...}
            discord: {webhook_url: ...}

        and the flat layout of the legacy ``config.json``
        (``path``, ``backup``, ``discord``). The legacy ``db`` section holds
        MySQL connection parameters and is ignored.
        """
        source = config.get("source") or {}
        storage = config.get("storage") or {}

        return cls(
            source_path=source.get("path", config.get("path", "")),
            backup_path=source.get("backup", config.get("backup", "")),
            storage_backend=storage.get("backend", "sqlite"),
            sqlite_db_path=storage.get("sqlite_db_path", "data/access-logs.db"),
            discord_webhook_url=_discord_webhook_url(config.get("discord")),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            source_path=os.environ.get("ACCESS_LOG_PATH", ""),
            backup_path=os.environ.get("ACCESS_LOG_BACKUP_PATH", ""),
            storage_backend="sqlite",
            sqlite_db_path=os.environ.get("SQLITE_DB_PATH", "data/access-logs.db"),
            discord_webhook_url=os.environ.get("DISCORD_WEBHOOK_URL", ""),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("config.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from the config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML, JSON or SOPS-encrypted config file

    Returns:
        Settings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        from .loader import load_config

        return Settings.from_dict(load_config(path))

    logger.info(f"Config file {path} not found, using environment variables")
    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
