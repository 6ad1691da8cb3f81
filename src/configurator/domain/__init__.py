"""Transactional configuration core: actions, transaction, report, facade."""

from __future__ import annotations

from .configurator import Backends, Configurator
from .errors import ActionError, ConfiguratorError, MissingBackendError, TransactionStateError
from .results import (
    ActionResult,
    Failed,
    OperationReport,
    Passed,
    ReportOutcome,
    ResultStatus,
    RollbackFailed,
    RolledBack,
    Skipped,
)
from .transaction import Transaction, TransactionState

__all__ = [
    "ActionError",
    "ActionResult",
    "Backends",
    "Configurator",
    "ConfiguratorError",
    "Failed",
    "MissingBackendError",
    "OperationReport",
    "Passed",
    "ReportOutcome",
    "ResultStatus",
    "RollbackFailed",
    "RolledBack",
    "Skipped",
    "Transaction",
    "TransactionState",
    "TransactionStateError",
]
