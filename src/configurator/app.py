"""Application wiring: build configurators from settings and apply plans."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from configurator.adapters.audit import LoggingAuditLogger
from configurator.adapters.management import ManagementClient
from configurator.adapters.properties import DotenvPropertyStore
from configurator.adapters.sqlalchemy import (
    SqlAlchemyConfigurationAdmin,
    configured_engine,
    startup,
)
from configurator.config import (
    MissingConfigurationError,
    get_database_config,
    get_management_config,
    get_storage_config,
)
from configurator.domain import Backends, Configurator
from configurator.plan import register_plan

if TYPE_CHECKING:
    from configurator.domain import OperationReport
    from configurator.domain.ports import AuditLogger
    from configurator.plan import Plan

ConfiguratorFactory = Callable[[], Configurator]

log = getLogger(__name__)


def build_backends() -> Backends:
    """Create the adapters described by the environment.

    The management interface is optional: without ``CONFIGURATOR_MANAGEMENT_URL``
    component and feature actions are unavailable.
    """

    storage = get_storage_config()
    if configured_engine() is None:
        startup(database_uri=get_database_config(storage=storage).uri)

    try:
        management = ManagementClient(config=get_management_config())
    except MissingConfigurationError:
        log.info("No management interface configured; component and feature actions disabled")
        management = None

    return Backends(
        components=management,
        features=management,
        properties=DotenvPropertyStore(storage.properties_dir()),
        config_admin=SqlAlchemyConfigurationAdmin(),
    )


def build_configurator(
    *,
    backends: Backends | None = None,
    audit: AuditLogger | None = None,
) -> Configurator:
    """Return a configurator for one new batch."""

    return Configurator(
        backends if backends is not None else build_backends(),
        audit=audit if audit is not None else LoggingAuditLogger(),
    )


@dataclass(frozen=True, slots=True)
class PlanResult:
    report: OperationReport
    labels: dict[str, str]


def apply_plan(
    plan: Plan,
    *,
    configurator_factory: ConfiguratorFactory | None = None,
    audit_message: str | None = None,
) -> PlanResult:
    """Register every step of ``plan`` with a fresh configurator and commit it."""

    configurator = (configurator_factory or build_configurator)()
    labels = register_plan(configurator, plan)
    message = audit_message or plan.audit_message
    log.info(
        "Applying plan with %d step(s)%s",
        len(labels),
        f": {plan.description}" if plan.description else "",
    )

    report = configurator.commit(message)

    log.info("Plan finished: outcome=%s", report.outcome)
    return PlanResult(report=report, labels=labels)
