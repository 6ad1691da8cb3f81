"""SQLAlchemy adapter package for the configuration store."""

from __future__ import annotations

from .config_admin import (
    ConfigurationStoreError,
    SqlAlchemyConfigurationAdmin,
    StartupError,
    configured_engine,
    shutdown,
    startup,
)
from .mappings import (
    StoredConfiguration,
    configuration_table,
    create_all_tables,
    mapper_registry,
    start_mappers,
)

__all__ = [
    "ConfigurationStoreError",
    "SqlAlchemyConfigurationAdmin",
    "StartupError",
    "StoredConfiguration",
    "configuration_table",
    "configured_engine",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
