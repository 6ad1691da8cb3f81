"""Transactional install/uninstall of features."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import backend_errors

if TYPE_CHECKING:
    from configurator.domain.ports import FeatureService


class FeatureStateAction:
    """Installs (starts) or uninstalls (stops) a named feature."""

    def __init__(self, name: str, *, install: bool, service: FeatureService) -> None:
        self.name = name
        self.install = install
        self._service = service
        self.initial_state = self.read_state()

    @classmethod
    def for_start(cls, name: str, service: FeatureService) -> FeatureStateAction:
        return cls(name, install=True, service=service)

    @classmethod
    def for_stop(cls, name: str, service: FeatureService) -> FeatureStateAction:
        return cls(name, install=False, service=service)

    def commit(self) -> None:
        if self.initial_state != self.install:
            self._apply(self.install)

    def rollback(self) -> None:
        if self.read_state() != self.initial_state:
            self._apply(self.initial_state)

    def read_state(self) -> bool:
        with backend_errors(f"Unable to read state of feature {self.name}"):
            return self._service.is_installed(self.name)

    def _apply(self, installed: bool) -> None:
        if installed:
            with backend_errors(f"Error installing feature {self.name}"):
                self._service.install(self.name)
        else:
            with backend_errors(f"Error uninstalling feature {self.name}"):
                self._service.uninstall(self.name)
