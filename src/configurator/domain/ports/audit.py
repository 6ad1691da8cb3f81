"""Port for security audit records."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AuditLogger(Protocol):
    def audit(self, message: str, *params: object) -> None: ...
