from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from configurator.adapters.sqlalchemy import (
    SqlAlchemyConfigurationAdmin,
    create_all_tables,
    shutdown,
    start_mappers,
)
from configurator.domain import Backends, Configurator
from tests.support.backends import (
    FakeComponentRuntime,
    FakeFeatureService,
    InMemoryConfigurationAdmin,
    InMemoryPropertyStore,
    RecordingAuditLogger,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_config_admin(sqlite_engine: Engine) -> SqlAlchemyConfigurationAdmin:
    return SqlAlchemyConfigurationAdmin(sqlite_engine)


@pytest.fixture(autouse=True)
def reset_configuration_store() -> Iterator[None]:
    yield
    shutdown()


@pytest.fixture
def components() -> FakeComponentRuntime:
    return FakeComponentRuntime(components={"web": False, "search": True})


@pytest.fixture
def features() -> FakeFeatureService:
    return FakeFeatureService(features={"security-ldap": False, "catalog": True})


@pytest.fixture
def property_store() -> InMemoryPropertyStore:
    return InMemoryPropertyStore()


@pytest.fixture
def config_admin() -> InMemoryConfigurationAdmin:
    return InMemoryConfigurationAdmin()


@pytest.fixture
def audit_logger() -> RecordingAuditLogger:
    return RecordingAuditLogger()


@pytest.fixture
def backends(
    components: FakeComponentRuntime,
    features: FakeFeatureService,
    property_store: InMemoryPropertyStore,
    config_admin: InMemoryConfigurationAdmin,
) -> Backends:
    return Backends(
        components=components,
        features=features,
        properties=property_store,
        config_admin=config_admin,
    )


@pytest.fixture
def configurator(backends: Backends, audit_logger: RecordingAuditLogger) -> Configurator:
    return Configurator(backends, audit=audit_logger)
