"""Transactional creation and deletion of factory (managed service) configurations."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from .base import backend_errors, frozen_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

    from configurator.domain.ports import ConfigurationAdmin

log = getLogger(__name__)


class ManagedServiceCreateAction:
    """Creates a new instance of a managed service factory.

    The instance pid is only known once the commit has run; it is returned from
    ``commit`` so it can be reported if a later rollback leaves it orphaned. Rollback
    never removes an instance that already existed when the action was built.
    """

    def __init__(
        self, factory_pid: str, configs: Mapping[str, Any], admin: ConfigurationAdmin
    ) -> None:
        self.factory_pid = factory_pid
        self.properties = frozen_mapping(configs)
        self._admin = admin
        self.created_pid: str | None = None
        self.initial_instances = self.read_state()

    def commit(self) -> str:
        with backend_errors(f"Error creating managed service for {self.factory_pid}"):
            self.created_pid = self._admin.create_factory_configuration(
                self.factory_pid, self.properties
            )
        log.debug("Created managed service %s", self.created_pid)
        return self.created_pid

    def rollback(self) -> None:
        pid = self.created_pid
        if pid is None or pid in self.initial_instances:
            return
        message = f"Error removing managed service {pid}"
        with backend_errors(message, resource_id=pid):
            if self._admin.get_properties(pid) is None:
                return
            self._admin.delete(pid)

    def read_state(self) -> dict[str, dict[str, Any]]:
        with backend_errors(f"Unable to list managed services for {self.factory_pid}"):
            return self._admin.list_factory_configurations(self.factory_pid)


class ManagedServiceDeleteAction:
    """Deletes a managed service instance; rollback recreates it under the same pid."""

    def __init__(self, pid: str, admin: ConfigurationAdmin) -> None:
        self.pid = pid
        self._admin = admin
        initial = self.read_state()
        self.initially_existed = initial is not None
        self.initial_properties = frozen_mapping(initial)
        with backend_errors(f"Unable to read configuration {pid}"):
            self.factory_pid = admin.get_factory_pid(pid) if self.initially_existed else None

    def commit(self) -> None:
        if not self.initially_existed:
            return
        with backend_errors(f"Error deleting managed service {self.pid}", resource_id=self.pid):
            self._admin.delete(self.pid)

    def rollback(self) -> None:
        if not self.initially_existed or self.read_state() is not None:
            return
        with backend_errors(f"Error recreating managed service {self.pid}", resource_id=self.pid):
            self._admin.update(self.pid, self.initial_properties, factory_pid=self.factory_pid)

    def read_state(self) -> dict[str, Any] | None:
        with backend_errors(f"Unable to read configuration {self.pid}"):
            return self._admin.get_properties(self.pid)
