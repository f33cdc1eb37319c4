"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import LoggingConfig, configure_logging, get_logging_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)
from .sync import ReconciliationConfig, get_reconciliation_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "LoggingConfig",
    "ReconciliationConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_database_uri",
    "get_logging_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env_var",
]
