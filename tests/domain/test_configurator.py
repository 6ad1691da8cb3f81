from __future__ import annotations

from pathlib import Path

import pytest

from configurator.domain import (
    ActionError,
    Backends,
    Configurator,
    MissingBackendError,
    Passed,
    ReportOutcome,
    RolledBack,
    Skipped,
)
from tests.support.backends import (
    FakeComponentRuntime,
    FakeFeatureService,
    InMemoryConfigurationAdmin,
    InMemoryPropertyStore,
    RecordingAuditLogger,
)


def test_mixed_batch_is_applied_and_audited(
    configurator: Configurator,
    components: FakeComponentRuntime,
    property_store: InMemoryPropertyStore,
    config_admin: InMemoryConfigurationAdmin,
    audit_logger: RecordingAuditLogger,
) -> None:
    start = configurator.start_component("web")
    props = configurator.create_property_file(Path("web.cfg"), {"port": "8080"})
    service = configurator.create_managed_service("org.example.ds", {"url": "x"})

    report = configurator.commit("Enabled web for %s", "ops")

    assert report.outcome is ReportOutcome.APPLIED
    assert list(report) == [start, props, service]
    assert report[service] == Passed(resource_id="org.example.ds.1")
    assert components.components["web"] is True
    assert property_store.files[Path("web.cfg")] == {"port": "8080"}
    assert config_admin.configs["org.example.ds.1"] == {"url": "x"}
    assert audit_logger.records == [("Enabled web for %s", ("ops",))]


def test_failed_batch_is_reverted_and_not_audited(
    configurator: Configurator,
    components: FakeComponentRuntime,
    features: FakeFeatureService,
    config_admin: InMemoryConfigurationAdmin,
    audit_logger: RecordingAuditLogger,
) -> None:
    features.failing.add(("install", "security-ldap"))
    config_key = configurator.update_config("org.example.http", {"port": 8443})
    start = configurator.start_component("web")
    feature = configurator.start_feature("security-ldap")
    stop = configurator.stop_component("search")

    report = configurator.commit("never written")

    assert report.outcome is ReportOutcome.REVERTED
    assert isinstance(report[config_key], RolledBack)
    assert isinstance(report[start], RolledBack)
    assert isinstance(report[stop], Skipped)
    assert report.failures().keys() == {feature}
    assert components.components == {"web": False, "search": True}
    assert "org.example.http" not in config_admin.configs
    assert audit_logger.records == []


def test_commit_without_audit_message_skips_audit(
    configurator: Configurator, audit_logger: RecordingAuditLogger
) -> None:
    configurator.start_component("web")

    configurator.commit()

    assert audit_logger.records == []


def test_commit_without_audit_logger_still_succeeds(backends: Backends) -> None:
    configurator = Configurator(backends)
    configurator.start_component("web")

    report = configurator.commit("message")

    assert report.transaction_succeeded()


def test_registration_error_surfaces_from_call(configurator: Configurator) -> None:
    with pytest.raises(ActionError, match="No component found with name ghost"):
        configurator.start_component("ghost")

    assert len(configurator.transaction) == 0


def test_missing_backend_is_reported() -> None:
    configurator = Configurator(Backends(properties=InMemoryPropertyStore()))

    with pytest.raises(MissingBackendError, match="component runtime"):
        configurator.start_component("web")
    with pytest.raises(MissingBackendError, match="configuration admin"):
        configurator.get_config("org.example.http")


def test_queries_read_current_state(
    configurator: Configurator,
    property_store: InMemoryPropertyStore,
    config_admin: InMemoryConfigurationAdmin,
) -> None:
    property_store.files[Path("web.cfg")] = {"port": "80"}
    config_admin.configs["org.example.http"] = {"port": 80}
    pid = config_admin.create_factory_configuration("org.example.ds", {"url": "x"})

    assert configurator.is_component_started("search") is True
    assert configurator.is_component_started("web") is False
    assert configurator.is_feature_started("catalog") is True
    assert configurator.get_properties(Path("web.cfg")) == {"port": "80"}
    assert configurator.get_properties(Path("missing.cfg")) == {}
    assert configurator.get_config("org.example.http") == {"port": 80}
    assert configurator.get_config("org.example.none") == {}
    assert configurator.get_managed_service_configs("org.example.ds") == {pid: {"url": "x"}}
    assert len(configurator.transaction) == 0


def test_unknown_component_is_reported_as_not_started(configurator: Configurator) -> None:
    assert configurator.is_component_started("ghost") is False


def test_batch_of_actions_already_in_desired_state_changes_nothing(
    configurator: Configurator,
    components: FakeComponentRuntime,
    features: FakeFeatureService,
    property_store: InMemoryPropertyStore,
    config_admin: InMemoryConfigurationAdmin,
) -> None:
    property_store.files[Path("web.cfg")] = {"port": "80"}
    config_admin.configs["org.example.http"] = {"port": 80}
    keys = [
        configurator.start_component("search"),
        configurator.start_feature("catalog"),
        configurator.update_property_file(Path("web.cfg"), {"port": "80"}),
        configurator.update_config("org.example.http", {"port": 80}),
    ]

    report = configurator.commit()

    assert [report[key] for key in keys] == [Passed()] * 4
    assert report.transaction_succeeded()
    assert components.calls == []
    assert features.calls == []
    assert property_store.writes == 0
    assert config_admin.configs == {"org.example.http": {"port": 80}}


def test_rollback_of_unchanged_actions_leaves_backends_untouched(
    configurator: Configurator,
    components: FakeComponentRuntime,
    features: FakeFeatureService,
    property_store: InMemoryPropertyStore,
) -> None:
    property_store.files[Path("web.cfg")] = {"port": "80"}
    features.failing.add(("install", "security-ldap"))
    unchanged = [
        configurator.start_component("search"),
        configurator.update_property_file(Path("web.cfg"), {"port": "80"}),
    ]
    failing = configurator.start_feature("security-ldap")

    report = configurator.commit()

    assert [report[key] for key in unchanged] == [RolledBack()] * 2
    assert report.failures().keys() == {failing}
    assert components.calls == []
    assert features.calls == []
    assert property_store.writes == 0
