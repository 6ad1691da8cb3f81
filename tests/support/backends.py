"""In-memory fakes of the backend ports, with switchable failures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from configurator.domain.errors import ActionError
from configurator.domain.ports import BackendError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass
class FakeComponentRuntime:
    components: dict[str, bool] = field(default_factory=dict)
    failing: set[tuple[str, str]] = field(default_factory=set)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def _check(self, operation: str, name: str) -> None:
        if name not in self.components:
            raise BackendError(f"unknown component {name}")
        if (operation, name) in self.failing:
            raise BackendError(f"{operation} of {name} rejected")

    def is_active(self, name: str) -> bool:
        self._check("read", name)
        return self.components[name]

    def start(self, name: str) -> None:
        self._check("start", name)
        self.calls.append(("start", name))
        self.components[name] = True

    def stop(self, name: str) -> None:
        self._check("stop", name)
        self.calls.append(("stop", name))
        self.components[name] = False


@dataclass
class FakeFeatureService:
    features: dict[str, bool] = field(default_factory=dict)
    failing: set[tuple[str, str]] = field(default_factory=set)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def _check(self, operation: str, name: str) -> None:
        if (operation, name) in self.failing:
            raise BackendError(f"{operation} of {name} rejected")

    def is_installed(self, name: str) -> bool:
        self._check("read", name)
        return self.features.get(name, False)

    def install(self, name: str) -> None:
        self._check("install", name)
        self.calls.append(("install", name))
        self.features[name] = True

    def uninstall(self, name: str) -> None:
        self._check("uninstall", name)
        self.calls.append(("uninstall", name))
        self.features[name] = False


@dataclass
class InMemoryPropertyStore:
    files: dict[Path, dict[str, str]] = field(default_factory=dict)
    failing: set[tuple[str, Path]] = field(default_factory=set)
    writes: int = 0

    def _check(self, operation: str, path: Path) -> None:
        if (operation, Path(path)) in self.failing:
            raise BackendError(f"{operation} of {path} rejected")

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read(self, path: Path) -> dict[str, str]:
        self._check("read", path)
        return dict(self.files.get(Path(path), {}))

    def write(self, path: Path, properties: Mapping[str, str]) -> None:
        self._check("write", path)
        self.writes += 1
        self.files[Path(path)] = dict(properties)

    def delete(self, path: Path) -> None:
        self._check("delete", path)
        if Path(path) not in self.files:
            raise BackendError(f"{path} does not exist")
        del self.files[Path(path)]


@dataclass
class InMemoryConfigurationAdmin:
    configs: dict[str, dict[str, Any]] = field(default_factory=dict)
    factories: dict[str, str] = field(default_factory=dict)
    failing: set[tuple[str, str]] = field(default_factory=set)
    created: int = 0

    def _check(self, operation: str, target: str) -> None:
        if (operation, target) in self.failing:
            raise BackendError(f"{operation} of {target} rejected")

    def get_properties(self, pid: str) -> dict[str, Any] | None:
        self._check("read", pid)
        properties = self.configs.get(pid)
        return dict(properties) if properties is not None else None

    def get_factory_pid(self, pid: str) -> str | None:
        return self.factories.get(pid)

    def list_factory_configurations(self, factory_pid: str) -> dict[str, dict[str, Any]]:
        return {
            pid: dict(self.configs[pid])
            for pid, factory in self.factories.items()
            if factory == factory_pid and pid in self.configs
        }

    def create_factory_configuration(
        self, factory_pid: str, properties: Mapping[str, Any]
    ) -> str:
        self._check("create", factory_pid)
        self.created += 1
        pid = f"{factory_pid}.{self.created}"
        self.configs[pid] = dict(properties)
        self.factories[pid] = factory_pid
        return pid

    def update(
        self,
        pid: str,
        properties: Mapping[str, Any],
        *,
        factory_pid: str | None = None,
    ) -> None:
        self._check("update", pid)
        self.configs[pid] = dict(properties)
        if factory_pid is not None:
            self.factories[pid] = factory_pid

    def delete(self, pid: str) -> None:
        self._check("delete", pid)
        if pid not in self.configs:
            raise BackendError(f"no configuration {pid}")
        del self.configs[pid]


@dataclass
class RecordingAuditLogger:
    records: list[tuple[str, tuple[object, ...]]] = field(default_factory=list)

    def audit(self, message: str, *params: object) -> None:
        self.records.append((message, params))


@dataclass
class ScriptedAction:
    """Action whose commit/rollback outcome is fixed up front; logs calls to ``events``."""

    name: str
    events: list[str]
    commit_error: str | None = None
    rollback_error: str | None = None
    resource_id: str | None = None

    def commit(self) -> str | None:
        self.events.append(f"commit:{self.name}")
        if self.commit_error is not None:
            raise ActionError(self.commit_error)
        return self.resource_id

    def rollback(self) -> None:
        self.events.append(f"rollback:{self.name}")
        if self.rollback_error is not None:
            raise ActionError(self.rollback_error)

    def read_state(self) -> str:
        return self.name
