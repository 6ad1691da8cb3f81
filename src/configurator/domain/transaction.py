"""Sequential commit of registered actions with best-effort reverse rollback.

Responsibilities of this module:
- keep actions in registration order under opaque keys
- commit them one by one and stop at the first failure
- undo the committed prefix innermost-first, attempting every rollback
- convert every ``ActionError`` into a result in the returned report

A transaction does not lock shared resources. Reads of a resource made while
another transaction is committing it may observe intermediate state.
"""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from .errors import ActionError, TransactionStateError
from .results import Failed, OperationReport, Passed, RollbackFailed, RolledBack, Skipped

if TYPE_CHECKING:
    from collections.abc import Callable

    from .actions import Action

log = getLogger(__name__)


class TransactionState(StrEnum):
    BUILDING = "building"
    COMMITTING = "committing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


def new_action_key() -> str:
    return str(uuid4())


class Transaction:
    """One batch of actions, committed at most once."""

    def __init__(self, *, key_factory: Callable[[], str] = new_action_key) -> None:
        self._actions: dict[str, Action[Any]] = {}
        self._key_factory = key_factory
        self._state = TransactionState.BUILDING

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def register(self, action: Action[Any]) -> str:
        """Queue ``action`` after those already registered and return its key."""

        if self._state is not TransactionState.BUILDING:
            raise TransactionStateError(
                f"Cannot register actions on a transaction that is {self._state}"
            )
        key = self._key_factory()
        if key in self._actions:
            raise TransactionStateError(f"Duplicate action key {key}")
        self._actions[key] = action
        return key

    def commit(self) -> OperationReport:
        """Commit all actions in order; on the first failure roll back the rest.

        Never raises ``ActionError``; inspect the returned report instead.
        """

        if self._state is not TransactionState.BUILDING:
            raise TransactionStateError(f"Transaction is already {self._state}")
        self._state = TransactionState.COMMITTING
        log.info("Committing %d configuration action(s)", len(self._actions))

        report = OperationReport()
        for key, action in self._actions.items():
            try:
                resource_id = action.commit()
            except ActionError as exc:
                log.debug("Error committing configuration change %s", key, exc_info=True)
                self._rollback(key, report, exc)
                self._state = TransactionState.ROLLED_BACK
                return report
            report.put_result(key, Passed(resource_id=resource_id))

        self._state = TransactionState.COMMITTED
        log.info("Committed %d configuration action(s)", len(self._actions))
        return report

    def _rollback(self, failed_key: str, report: OperationReport, error: ActionError) -> None:
        report.put_result(failed_key, Failed(error=error))

        undo_stack: list[str] = []
        failed_seen = False
        for key in self._actions:
            if key == failed_key:
                failed_seen = True
            elif failed_seen:
                report.put_result(key, Skipped())
            else:
                undo_stack.append(key)

        log.info(
            "Rolling back %d configuration action(s) after failure: %s",
            len(undo_stack),
            error,
        )
        for key in reversed(undo_stack):
            try:
                self._actions[key].rollback()
            except ActionError as exc:
                previous = report.get_result(key)
                resource_id = previous.resource_id if isinstance(previous, Passed) else None
                if resource_id is None:
                    resource_id = exc.resource_id
                log.warning("Rollback of configuration action %s failed: %s", key, exc)
                report.put_result(key, RollbackFailed(error=exc, resource_id=resource_id))
            else:
                report.put_result(key, RolledBack())
