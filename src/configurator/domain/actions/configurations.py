"""Transactional updates of singleton service configurations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import backend_errors, frozen_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

    from configurator.domain.ports import ConfigurationAdmin


class ConfigurationUpdateAction:
    """Writes new properties for the configuration stored under ``pid``.

    With ``keep_ignored`` the existing keys missing from ``configs`` keep their
    values; otherwise ``configs`` replaces the stored properties wholesale.
    """

    def __init__(
        self,
        pid: str,
        configs: Mapping[str, Any],
        admin: ConfigurationAdmin,
        *,
        keep_ignored: bool = True,
    ) -> None:
        self.pid = pid
        self._admin = admin
        initial = self.read_state()
        self.initially_existed = initial is not None
        self.initial_properties = frozen_mapping(initial)

        requested = frozen_mapping(configs)
        if keep_ignored:
            self.properties = frozen_mapping({**self.initial_properties, **requested})
        else:
            self.properties = requested

    def commit(self) -> None:
        if self.initially_existed and self.properties == self.initial_properties:
            return
        with backend_errors(f"Error updating configuration {self.pid}"):
            self._admin.update(self.pid, self.properties)

    def rollback(self) -> None:
        current = self.read_state()
        if not self.initially_existed:
            if current is not None:
                with backend_errors(f"Error removing configuration {self.pid}"):
                    self._admin.delete(self.pid)
            return
        if current == self.initial_properties:
            return
        with backend_errors(f"Error restoring configuration {self.pid}"):
            self._admin.update(self.pid, self.initial_properties)

    def read_state(self) -> dict[str, Any] | None:
        with backend_errors(f"Unable to read configuration {self.pid}"):
            return self._admin.get_properties(self.pid)
