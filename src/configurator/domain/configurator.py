"""Registration facade for building and committing configuration transactions."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from .actions import (
    ComponentStateAction,
    ConfigurationUpdateAction,
    FeatureStateAction,
    ManagedServiceCreateAction,
    ManagedServiceDeleteAction,
    PropertyFileAction,
)
from .errors import ActionError, MissingBackendError
from .transaction import Transaction

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from .ports import (
        AuditLogger,
        ComponentRuntime,
        ConfigurationAdmin,
        FeatureService,
        PropertyStore,
    )
    from .results import OperationReport

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class Backends:
    """Ports the configurator hands to the actions it builds."""

    components: ComponentRuntime | None = None
    features: FeatureService | None = None
    properties: PropertyStore | None = None
    config_admin: ConfigurationAdmin | None = None


class Configurator:
    """Queue configuration changes in order, then commit them as one batch.

    Each registration call captures the current state of its target and returns
    a key that identifies the action in the report produced by :meth:`commit`.
    Query methods read current state directly and never touch the batch.
    """

    def __init__(
        self,
        backends: Backends,
        *,
        audit: AuditLogger | None = None,
        transaction: Transaction | None = None,
    ) -> None:
        self._backends = backends
        self._audit = audit
        self._transaction = transaction or Transaction()

    @property
    def transaction(self) -> Transaction:
        return self._transaction

    def commit(self, audit_message: str | None = None, *audit_params: object) -> OperationReport:
        """Commit every registered action; audit ``audit_message`` only on success."""

        report = self._transaction.commit()
        if report.transaction_succeeded() and audit_message is not None:
            if self._audit is None:
                log.warning("No audit logger configured; dropping audit record: %s", audit_message)
            else:
                self._audit.audit(audit_message, *audit_params)
        return report

    # Components ---------------------------------------------------------------

    def start_component(self, name: str) -> str:
        return self._transaction.register(ComponentStateAction.for_start(name, self._components))

    def stop_component(self, name: str) -> str:
        return self._transaction.register(ComponentStateAction.for_stop(name, self._components))

    def is_component_started(self, name: str) -> bool:
        try:
            return ComponentStateAction.for_start(name, self._components).read_state()
        except ActionError:
            log.debug("Unable to determine state of component %s", name, exc_info=True)
            return False

    # Features -----------------------------------------------------------------

    def start_feature(self, name: str) -> str:
        """Install the feature ``name``."""
        return self._transaction.register(FeatureStateAction.for_start(name, self._features))

    def stop_feature(self, name: str) -> str:
        """Uninstall the feature ``name``."""
        return self._transaction.register(FeatureStateAction.for_stop(name, self._features))

    def is_feature_started(self, name: str) -> bool:
        return FeatureStateAction.for_start(name, self._features).read_state()

    # Property files -----------------------------------------------------------

    def create_property_file(self, path: Path, properties: Mapping[str, str]) -> str:
        return self._transaction.register(
            PropertyFileAction.for_create(path, properties, self._properties)
        )

    def update_property_file(
        self,
        path: Path,
        properties: Mapping[str, str],
        *,
        keep_ignored: bool = True,
    ) -> str:
        """Update ``path``; ``keep_ignored`` retains existing keys absent from ``properties``."""

        return self._transaction.register(
            PropertyFileAction.for_update(
                path, properties, self._properties, keep_ignored=keep_ignored
            )
        )

    def delete_property_file(self, path: Path) -> str:
        return self._transaction.register(PropertyFileAction.for_delete(path, self._properties))

    def get_properties(self, path: Path) -> dict[str, str]:
        return PropertyFileAction.for_update(
            path, {}, self._properties, keep_ignored=True
        ).read_state()

    # Service configurations ---------------------------------------------------

    def update_config(
        self,
        pid: str,
        configs: Mapping[str, Any],
        *,
        keep_ignored: bool = True,
    ) -> str:
        return self._transaction.register(
            ConfigurationUpdateAction(pid, configs, self._config_admin, keep_ignored=keep_ignored)
        )

    def get_config(self, pid: str) -> dict[str, Any]:
        state = ConfigurationUpdateAction(pid, {}, self._config_admin).read_state()
        return state or {}

    def create_managed_service(self, factory_pid: str, configs: Mapping[str, Any]) -> str:
        return self._transaction.register(
            ManagedServiceCreateAction(factory_pid, configs, self._config_admin)
        )

    def delete_managed_service(self, pid: str) -> str:
        return self._transaction.register(ManagedServiceDeleteAction(pid, self._config_admin))

    def get_managed_service_configs(self, factory_pid: str) -> dict[str, dict[str, Any]]:
        return ManagedServiceCreateAction(factory_pid, {}, self._config_admin).read_state()

    # Backends -----------------------------------------------------------------

    @property
    def _components(self) -> ComponentRuntime:
        return _require(self._backends.components, "component runtime")

    @property
    def _features(self) -> FeatureService:
        return _require(self._backends.features, "feature service")

    @property
    def _properties(self) -> PropertyStore:
        return _require(self._backends.properties, "property store")

    @property
    def _config_admin(self) -> ConfigurationAdmin:
        return _require(self._backends.config_admin, "configuration admin")


def _require[T](backend: T | None, description: str) -> T:
    if backend is None:
        raise MissingBackendError(f"No {description} configured")
    return backend
