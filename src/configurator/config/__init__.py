"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import AUDIT_LOGGER_NAME, configure_logging
from .management import ManagementConfig, get_management_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "AUDIT_LOGGER_NAME",
    "ConfigurationError",
    "DatabaseConfig",
    "ManagementConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_management_config",
    "get_storage_config",
    "optional_env_var",
    "optional_float_env_var",
    "require_env_vars",
]
