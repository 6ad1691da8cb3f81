"""Domain port definitions for adapters."""

from __future__ import annotations

from .audit import AuditLogger
from .errors import BackendError
from .runtime import ComponentRuntime, FeatureService
from .storage import ConfigurationAdmin, PropertyStore

__all__ = [
    "AuditLogger",
    "BackendError",
    "ComponentRuntime",
    "ConfigurationAdmin",
    "FeatureService",
    "PropertyStore",
]
