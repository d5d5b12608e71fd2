"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import (
    NotificationConfig,
    ReconcileConfig,
    get_notification_config,
    get_reconcile_config,
    parse_compare_fields,
)
from .sheets import SheetsConfig, get_sheets_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "NotificationConfig",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SheetsConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_notification_config",
    "get_reconcile_config",
    "get_sheets_config",
    "get_storage_config",
    "parse_compare_fields",
    "require_env_var",
    "require_env_vars",
]
