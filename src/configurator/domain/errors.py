"""Error types raised by the configuration transaction core."""

from __future__ import annotations


class ActionError(RuntimeError):
    """Raised when a single action cannot commit, roll back, or read its resource."""

    def __init__(self, message: str, *, resource_id: str | None = None) -> None:
        super().__init__(message)
        self.resource_id = resource_id

    @property
    def cause(self) -> str:
        return str(self)


class ConfiguratorError(RuntimeError):
    """Raised when the configurator or a transaction is used incorrectly."""


class TransactionStateError(ConfiguratorError):
    """Raised when registering or committing outside the building phase."""


class MissingBackendError(ConfiguratorError):
    """Raised when an action needs a backend port that was not provided."""
