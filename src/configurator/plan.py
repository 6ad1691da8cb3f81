"""Declarative batch plans: a JSON list of steps registered in order."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from configurator.domain import Configurator


class PlanError(ValueError):
    """Raised when a plan document cannot be read or is invalid."""


class _Step(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class StartComponentStep(_Step):
    action: Literal["start_component"]
    name: str

    def label(self) -> str:
        return f"start component {self.name}"

    def register(self, configurator: Configurator) -> str:
        return configurator.start_component(self.name)


class StopComponentStep(_Step):
    action: Literal["stop_component"]
    name: str

    def label(self) -> str:
        return f"stop component {self.name}"

    def register(self, configurator: Configurator) -> str:
        return configurator.stop_component(self.name)


class StartFeatureStep(_Step):
    action: Literal["start_feature"]
    name: str

    def label(self) -> str:
        return f"install feature {self.name}"

    def register(self, configurator: Configurator) -> str:
        return configurator.start_feature(self.name)


class StopFeatureStep(_Step):
    action: Literal["stop_feature"]
    name: str

    def label(self) -> str:
        return f"uninstall feature {self.name}"

    def register(self, configurator: Configurator) -> str:
        return configurator.stop_feature(self.name)


class CreatePropertiesStep(_Step):
    action: Literal["create_properties"]
    path: Path
    properties: dict[str, str]

    def label(self) -> str:
        return f"create property file {self.path}"

    def register(self, configurator: Configurator) -> str:
        return configurator.create_property_file(self.path, self.properties)


class UpdatePropertiesStep(_Step):
    action: Literal["update_properties"]
    path: Path
    properties: dict[str, str]
    keep_ignored: bool = True

    def label(self) -> str:
        return f"update property file {self.path}"

    def register(self, configurator: Configurator) -> str:
        return configurator.update_property_file(
            self.path, self.properties, keep_ignored=self.keep_ignored
        )


class DeletePropertiesStep(_Step):
    action: Literal["delete_properties"]
    path: Path

    def label(self) -> str:
        return f"delete property file {self.path}"

    def register(self, configurator: Configurator) -> str:
        return configurator.delete_property_file(self.path)


class UpdateConfigStep(_Step):
    action: Literal["update_config"]
    pid: str
    properties: dict[str, Any]
    keep_ignored: bool = True

    def label(self) -> str:
        return f"update configuration {self.pid}"

    def register(self, configurator: Configurator) -> str:
        return configurator.update_config(
            self.pid, self.properties, keep_ignored=self.keep_ignored
        )


class CreateServiceStep(_Step):
    action: Literal["create_service"]
    factory_pid: str
    properties: dict[str, Any] = Field(default_factory=dict)

    def label(self) -> str:
        return f"create managed service for {self.factory_pid}"

    def register(self, configurator: Configurator) -> str:
        return configurator.create_managed_service(self.factory_pid, self.properties)


class DeleteServiceStep(_Step):
    action: Literal["delete_service"]
    pid: str

    def label(self) -> str:
        return f"delete managed service {self.pid}"

    def register(self, configurator: Configurator) -> str:
        return configurator.delete_managed_service(self.pid)


PlanStep = Annotated[
    StartComponentStep
    | StopComponentStep
    | StartFeatureStep
    | StopFeatureStep
    | CreatePropertiesStep
    | UpdatePropertiesStep
    | DeletePropertiesStep
    | UpdateConfigStep
    | CreateServiceStep
    | DeleteServiceStep,
    Field(discriminator="action"),
]


class Plan(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str | None = None
    audit_message: str | None = None
    steps: list[PlanStep] = Field(min_length=1)


def parse_plan(document: str | bytes) -> Plan:
    try:
        return Plan.model_validate_json(document)
    except ValidationError as exc:
        raise PlanError(f"Invalid plan: {exc}") from exc


def load_plan(path: Path) -> Plan:
    try:
        document = Path(path).read_bytes()
    except OSError as exc:
        raise PlanError(f"Unable to read plan {path}: {exc}") from exc
    return parse_plan(document)


def register_plan(configurator: Configurator, plan: Plan) -> dict[str, str]:
    """Register every step in order; return action key -> step label."""

    return {step.register(configurator): step.label() for step in plan.steps}
