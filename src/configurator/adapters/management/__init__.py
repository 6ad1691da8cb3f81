"""Adapter for the remote management interface."""

from __future__ import annotations

from .client import ManagementAPIError, ManagementClient
from .schema import ComponentState, ComponentStatus, FeatureStatus

__all__ = [
    "ComponentState",
    "ComponentStatus",
    "FeatureStatus",
    "ManagementAPIError",
    "ManagementClient",
]
