"""Contract shared by every reversible configuration action."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from configurator.domain.errors import ActionError
from configurator.domain.ports.errors import BackendError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

log = getLogger(__name__)


@runtime_checkable
class Action[TState](Protocol):
    """A single reversible change registered with a transaction.

    Implementations capture the state of their target when constructed and use
    only that snapshot to undo their own effect.
    """

    def commit(self) -> str | None:
        """Apply the change; return the id of a newly created resource, if any."""
        ...

    def rollback(self) -> None:
        """Restore the captured initial state; a no-op when nothing differs."""
        ...

    def read_state(self) -> TState: ...


def frozen_mapping[K, V](values: Mapping[K, V] | None) -> Mapping[K, V]:
    """Return a read-only copy so later edits by the caller do not leak in."""

    return MappingProxyType(dict(values or {}))


@contextmanager
def backend_errors(message: str, *, resource_id: str | None = None) -> Iterator[None]:
    """Translate ``BackendError`` raised inside the block into ``ActionError``."""

    try:
        yield
    except BackendError as exc:
        log.debug("%s", message, exc_info=True)
        raise ActionError(f"{message}: {exc}", resource_id=resource_id) from exc
