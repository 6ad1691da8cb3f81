"""Ports for runtime lifecycle services: components and features."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ComponentRuntime(Protocol):
    """Starts and stops named components of the managed system.

    Unknown components raise ``BackendError`` from every method.
    """

    def is_active(self, name: str) -> bool: ...

    def start(self, name: str) -> None: ...

    def stop(self, name: str) -> None: ...


@runtime_checkable
class FeatureService(Protocol):
    """Installs and uninstalls named features of the managed system."""

    def is_installed(self, name: str) -> bool: ...

    def install(self, name: str) -> None: ...

    def uninstall(self, name: str) -> None: ...
