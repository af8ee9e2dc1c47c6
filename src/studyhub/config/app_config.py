"""Application configuration loader.

Loads configuration from data/config/studyhub_v1.yaml, falling back to
built-in defaults. STUDYHUB_DB_PATH overrides the database location.

Usage:
    from studyhub.config.app_config import load_app_config

    config = load_app_config()
    db_path = config.storage.db_path
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/studyhub_v1.yaml")
DB_PATH_ENV = "STUDYHUB_DB_PATH"


@dataclass
class StorageConfig:
    """Configuration for the durable tables."""

    db_path: Path = Path("db/studyhub.db")
    max_key_size: int = 44
    max_value_size: int = 1024


@dataclass
class AppConfig:
    """Application-wide configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "storage": {
            "db_path": "db/studyhub.db",
            "max_key_size": 44,
            "max_value_size": 1024,
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()["storage"]
    storage_data = data.get("storage") or {}

    storage = StorageConfig(
        db_path=Path(storage_data.get("db_path", defaults["db_path"])),
        max_key_size=int(storage_data.get("max_key_size", defaults["max_key_size"])),
        max_value_size=int(
            storage_data.get("max_value_size", defaults["max_value_size"])
        ),
    )

    env_path = os.environ.get(DB_PATH_ENV)
    if env_path:
        storage.db_path = Path(env_path)

    return AppConfig(storage=storage)


def load_app_config(
    force_reload: bool = False, config_file: Path | None = None
) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.
        config_file: Alternative YAML file. Defaults to CONFIG_FILE.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload and config_file is None:
        return _cached_config

    source = config_file or CONFIG_FILE
    data: dict[str, Any]

    if source.exists():
        logger.debug("loading_app_config", source=str(source))
        data = yaml.safe_load(source.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    config = _parse_config(data)

    # An explicit file is a one-off read; only the default file is cached
    if config_file is None:
        _cached_config = config
    return config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
