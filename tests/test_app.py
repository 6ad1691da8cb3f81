from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from configurator.adapters.properties import DotenvPropertyStore
from configurator.app import apply_plan, build_backends, build_configurator
from configurator.config import AUDIT_LOGGER_NAME
from configurator.domain import MissingBackendError, ReportOutcome
from configurator.plan import parse_plan

if TYPE_CHECKING:
    from configurator.domain import Backends, Configurator
    from tests.support.backends import FakeComponentRuntime, RecordingAuditLogger


def test_apply_plan_commits_and_audits(
    configurator: Configurator,
    components: FakeComponentRuntime,
    audit_logger: RecordingAuditLogger,
) -> None:
    plan = parse_plan(
        json.dumps(
            {
                "audit_message": "web started",
                "steps": [{"action": "start_component", "name": "web"}],
            }
        )
    )

    result = apply_plan(plan, configurator_factory=lambda: configurator)

    assert result.report.outcome is ReportOutcome.APPLIED
    assert list(result.labels.values()) == ["start component web"]
    assert components.components["web"] is True
    assert audit_logger.records == [("web started", ())]


def test_apply_plan_message_override(
    configurator: Configurator, audit_logger: RecordingAuditLogger
) -> None:
    plan = parse_plan(
        json.dumps(
            {"audit_message": "plan", "steps": [{"action": "stop_component", "name": "web"}]}
        )
    )

    apply_plan(plan, configurator_factory=lambda: configurator, audit_message="override")

    assert audit_logger.records == [("override", ())]


def test_build_backends_from_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("CONFIGURATOR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CONFIGURATOR_DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.delenv("CONFIGURATOR_PROPERTIES_DIR", raising=False)
    monkeypatch.delenv("CONFIGURATOR_MANAGEMENT_URL", raising=False)

    backends = build_backends()

    assert backends.components is None
    assert backends.features is None
    assert isinstance(backends.properties, DotenvPropertyStore)
    configurator = build_configurator(backends=backends)
    configurator.update_property_file(Path("web.cfg"), {"port": "80"})
    configurator.update_config("org.example.http", {"port": 80})
    assert configurator.commit().transaction_succeeded()
    assert (tmp_path / "etc" / "web.cfg").is_file()
    assert configurator.get_config("org.example.http") == {"port": 80}
    with pytest.raises(MissingBackendError):
        configurator.start_component("web")


def test_logging_audit_logger_writes_audit_records(
    backends: Backends, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger=AUDIT_LOGGER_NAME)
    configurator = build_configurator(backends=backends)
    configurator.start_component("web")

    configurator.commit("Started %s", "web")

    audit_records = [record for record in caplog.records if record.name == AUDIT_LOGGER_NAME]
    assert [record.getMessage() for record in audit_records] == ["Started web"]
