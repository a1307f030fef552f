"""Application configuration helpers."""

from __future__ import annotations

from .engine import get_engine_settings
from .env import optional_env_float
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_engine_settings",
    "get_storage_config",
    "optional_env_float",
]
