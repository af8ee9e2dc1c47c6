"""Configuration package for studyhub."""

from studyhub.config.app_config import (
    AppConfig,
    StorageConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "StorageConfig",
    "clear_config_cache",
    "load_app_config",
]
