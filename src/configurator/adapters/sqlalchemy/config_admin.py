"""SQLAlchemy-backed configuration store."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from configurator.domain.ports.errors import BackendError

from .mappings import (
    StoredConfiguration,
    configuration_table,
    create_all_tables,
    start_mappers,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the configuration store is used before initialisation."""


class ConfigurationStoreError(BackendError):
    """Raised when the configuration store rejects a read or write."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "Configuration store not initialised. Call configurator.adapters.sqlalchemy."
                "startup() before creating a SqlAlchemyConfigurationAdmin."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the engine, mappers and tables of the configuration store."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "Configuration store already initialised. Pass force=True to reconfigure."
        )
    if engine is not None:
        resolved_engine = engine
    elif database_uri is not None:
        resolved_engine = create_engine(database_uri, future=True)
    else:
        raise StartupError("startup() needs an engine or a database_uri")

    start_mappers()
    create_all_tables(resolved_engine)
    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def _new_factory_pid(factory_pid: str) -> str:
    return f"{factory_pid}.{uuid4().hex}"


class SqlAlchemyConfigurationAdmin:
    """``ConfigurationAdmin`` persisting configurations in one table.

    Each call runs in its own short transaction, so every change is durable as
    soon as the method returns.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        if engine is None:
            self._session_factory = _STATE.session_factory
        else:
            start_mappers()
            self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def get_properties(self, pid: str) -> dict[str, Any] | None:
        with self._session() as session:
            record = session.get(StoredConfiguration, pid)
            return dict(record.properties) if record is not None else None

    def get_factory_pid(self, pid: str) -> str | None:
        with self._session() as session:
            record = session.get(StoredConfiguration, pid)
            return record.factory_pid if record is not None else None

    def list_factory_configurations(self, factory_pid: str) -> dict[str, dict[str, Any]]:
        statement = (
            select(StoredConfiguration)
            .where(configuration_table.c.factory_pid == factory_pid)
            .order_by(configuration_table.c.pid)
        )
        with self._session() as session:
            return {
                record.pid: dict(record.properties) for record in session.scalars(statement)
            }

    def create_factory_configuration(
        self, factory_pid: str, properties: Mapping[str, Any]
    ) -> str:
        pid = _new_factory_pid(factory_pid)
        with self._session() as session:
            session.add(
                StoredConfiguration(pid=pid, factory_pid=factory_pid, properties=dict(properties))
            )
        log.info("Created configuration %s for factory %s", pid, factory_pid)
        return pid

    def update(
        self,
        pid: str,
        properties: Mapping[str, Any],
        *,
        factory_pid: str | None = None,
    ) -> None:
        with self._session() as session:
            record = session.get(StoredConfiguration, pid)
            if record is None:
                session.add(
                    StoredConfiguration(
                        pid=pid, factory_pid=factory_pid, properties=dict(properties)
                    )
                )
                return
            record.properties = dict(properties)
            record.updated_at = datetime.now(UTC)
            if factory_pid is not None:
                record.factory_pid = factory_pid

    def delete(self, pid: str) -> None:
        with self._session() as session:
            record = session.get(StoredConfiguration, pid)
            if record is None:
                raise ConfigurationStoreError(f"No configuration found with pid {pid}")
            session.delete(record)
        log.info("Deleted configuration %s", pid)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self._session_factory.begin() as session:
                yield session
        except SQLAlchemyError as exc:
            raise ConfigurationStoreError(f"Configuration store error: {exc}") from exc
