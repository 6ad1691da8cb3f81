"""Per-action results and the ordered report returned by a transaction.

Responsibilities of this module:
- define one result type per outcome an action can have in a batch
- keep results ordered by the first time each action key was recorded
- derive the overall outcome the caller should present to an operator
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import ItemsView, Iterator

    from .errors import ActionError


class ResultStatus(StrEnum):
    """Outcome of a single action within a batch."""

    PASSED = "passed"
    SKIPPED = "skipped"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"
    ROLLBACK_FAILED = "rollback_failed"


class ReportOutcome(StrEnum):
    """Overall outcome of a batch as shown to an operator."""

    APPLIED = "applied"
    REVERTED = "reverted"
    REVERTED_WITH_ERRORS = "reverted_with_errors"


@dataclass(slots=True, frozen=True, kw_only=True)
class Passed:
    """Action committed; ``resource_id`` is set when the commit created a resource."""

    resource_id: str | None = None
    status: Literal[ResultStatus.PASSED] = ResultStatus.PASSED


@dataclass(slots=True, frozen=True, kw_only=True)
class Skipped:
    """Action was queued after the failing action and never attempted."""

    status: Literal[ResultStatus.SKIPPED] = ResultStatus.SKIPPED


@dataclass(slots=True, frozen=True, kw_only=True)
class Failed:
    """Action whose commit failed and triggered the rollback."""

    error: ActionError
    status: Literal[ResultStatus.FAILED] = ResultStatus.FAILED

    @property
    def cause(self) -> str:
        return self.error.cause


@dataclass(slots=True, frozen=True, kw_only=True)
class RolledBack:
    """Action committed and was reverted successfully."""

    status: Literal[ResultStatus.ROLLED_BACK] = ResultStatus.ROLLED_BACK


@dataclass(slots=True, frozen=True, kw_only=True)
class RollbackFailed:
    """Action committed but could not be reverted; needs manual intervention."""

    error: ActionError
    resource_id: str | None = None
    status: Literal[ResultStatus.ROLLBACK_FAILED] = ResultStatus.ROLLBACK_FAILED

    @property
    def cause(self) -> str:
        return self.error.cause


type ActionResult = Passed | Skipped | Failed | RolledBack | RollbackFailed


@dataclass(slots=True)
class OperationReport:
    """Ordered mapping of action key to result, complete once a commit returns."""

    _results: dict[str, ActionResult] = field(default_factory=dict)

    def put_result(self, key: str, result: ActionResult) -> None:
        """Record ``result`` for ``key``; overwriting keeps the original position."""

        self._results[key] = result

    def get_result(self, key: str) -> ActionResult | None:
        return self._results.get(key)

    def transaction_succeeded(self) -> bool:
        """Return ``True`` unless any action failed to commit or to roll back."""

        return not any(
            isinstance(result, Failed | RollbackFailed) for result in self._results.values()
        )

    @property
    def outcome(self) -> ReportOutcome:
        if self.transaction_succeeded():
            return ReportOutcome.APPLIED
        if any(isinstance(result, RollbackFailed) for result in self._results.values()):
            return ReportOutcome.REVERTED_WITH_ERRORS
        return ReportOutcome.REVERTED

    def failures(self) -> dict[str, Failed | RollbackFailed]:
        return {
            key: result
            for key, result in self._results.items()
            if isinstance(result, Failed | RollbackFailed)
        }

    def resource_ids(self) -> tuple[str, ...]:
        """Resource ids created during the batch, in ledger order."""

        ids: list[str] = []
        for result in self._results.values():
            if isinstance(result, Passed | RollbackFailed) and result.resource_id is not None:
                ids.append(result.resource_id)
        return tuple(ids)

    def items(self) -> ItemsView[str, ActionResult]:
        return self._results.items()

    def __getitem__(self, key: str) -> ActionResult:
        return self._results[key]

    def __contains__(self, key: object) -> bool:
        return key in self._results

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)
