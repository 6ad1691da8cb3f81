"""Transactional start/stop of runtime components."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .base import backend_errors

if TYPE_CHECKING:
    from configurator.domain.ports import ComponentRuntime

log = getLogger(__name__)


class ComponentStateAction:
    """Moves a component into the started or stopped state."""

    def __init__(self, name: str, *, activate: bool, runtime: ComponentRuntime) -> None:
        self.name = name
        self.activate = activate
        self._runtime = runtime
        with backend_errors(f"No component found with name {name}"):
            self.initial_state = runtime.is_active(name)

    @classmethod
    def for_start(cls, name: str, runtime: ComponentRuntime) -> ComponentStateAction:
        return cls(name, activate=True, runtime=runtime)

    @classmethod
    def for_stop(cls, name: str, runtime: ComponentRuntime) -> ComponentStateAction:
        return cls(name, activate=False, runtime=runtime)

    def commit(self) -> None:
        if self.initial_state == self.activate:
            return
        self._apply(self.activate)

    def rollback(self) -> None:
        if self.read_state() == self.initial_state:
            return
        self._apply(self.initial_state)

    def read_state(self) -> bool:
        with backend_errors(f"Unable to read state of component {self.name}"):
            return self._runtime.is_active(self.name)

    def _apply(self, active: bool) -> None:
        verb = "start" if active else "stop"
        log.debug("Requesting %s of component %s", verb, self.name)
        with backend_errors(f"Error trying to {verb} component {self.name}"):
            if active:
                self._runtime.start(self.name)
            else:
                self._runtime.stop(self.name)
