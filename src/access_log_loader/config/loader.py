"""
Configuration file loader.

Supports plain YAML, JSON and SOPS-encrypted YAML files.
"""

import json
import subprocess
from pathlib import Path
from typing import Any

import yaml


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""

    pass


def is_sops_file(file_path: Path) -> bool:
    """Check if a file follows the ``*.enc.yaml`` naming convention."""
    return file_path.name.endswith((".enc.yaml", ".enc.yml", ".enc.json"))


def decrypt_sops_file(file_path: Path) -> dict[str, Any]:
    """
    Decrypt a SOPS-encrypted file and return parsed YAML.

    Args:
        file_path: Path to the encrypted file

    Returns:
        Decrypted configuration as dictionary

    Raises:
        ConfigError: If the file is missing or SOPS decryption fails
    """
    if not file_path.exists():
        raise ConfigError(f"Encrypted config file not found: {file_path}")

    try:
        result = subprocess.run(
            ["sops", "-d", str(file_path)],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise ConfigError(f"SOPS decryption failed: {e.stderr}") from e
    except FileNotFoundError as e:
        raise ConfigError(
            "SOPS not installed. Install with: brew install sops (macOS) "
            "or download from https://github.com/getsops/sops/releases"
        ) from e

    return yaml.safe_load(result.stdout) or {}


def load_config(file_path: Path) -> dict[str, Any]:
    """
    Load a configuration file.

    The format is picked from the file name: ``*.enc.yaml`` goes through SOPS,
    ``*.json`` through the json module and anything else is read as YAML.

    Raises:
        ConfigError: If the file cannot be read or does not hold a mapping
    """
    file_path = Path(file_path)

    if is_sops_file(file_path):
        config = decrypt_sops_file(file_path)
    else:
        try:
            text = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {file_path}: {e}") from e

        try:
            if file_path.suffix.lower() == ".json":
                config = json.loads(text)
            else:
                config = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid config file {file_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping")
    return config

