"""Ports for persisted configuration: property files and the configuration store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


@runtime_checkable
class PropertyStore(Protocol):
    """Reads and writes flat key-value property files."""

    def exists(self, path: Path) -> bool: ...

    def read(self, path: Path) -> dict[str, str]:
        """Return the file's properties, or an empty mapping if it does not exist."""
        ...

    def write(self, path: Path, properties: Mapping[str, str]) -> None:
        """Replace the file's entire contents with ``properties``."""
        ...

    def delete(self, path: Path) -> None: ...


@runtime_checkable
class ConfigurationAdmin(Protocol):
    """Stores service configurations keyed by persistent id (pid).

    Singleton configurations are addressed by a fixed pid. Factory configurations
    are instances created on demand under a factory pid; each gets a generated pid.
    """

    def get_properties(self, pid: str) -> dict[str, Any] | None: ...

    def get_factory_pid(self, pid: str) -> str | None: ...

    def list_factory_configurations(self, factory_pid: str) -> dict[str, dict[str, Any]]: ...

    def create_factory_configuration(
        self, factory_pid: str, properties: Mapping[str, Any]
    ) -> str: ...

    def update(
        self,
        pid: str,
        properties: Mapping[str, Any],
        *,
        factory_pid: str | None = None,
    ) -> None:
        """Create or replace the configuration stored under ``pid``."""
        ...

    def delete(self, pid: str) -> None: ...
