"""Reversible actions that can be registered with a transaction."""

from __future__ import annotations

from .base import Action, backend_errors, frozen_mapping
from .components import ComponentStateAction
from .configurations import ConfigurationUpdateAction
from .features import FeatureStateAction
from .managed_services import ManagedServiceCreateAction, ManagedServiceDeleteAction
from .properties import PropertyFileAction, PropertyFileMode

__all__ = [
    "Action",
    "ComponentStateAction",
    "ConfigurationUpdateAction",
    "FeatureStateAction",
    "ManagedServiceCreateAction",
    "ManagedServiceDeleteAction",
    "PropertyFileAction",
    "PropertyFileMode",
    "backend_errors",
    "frozen_mapping",
]
