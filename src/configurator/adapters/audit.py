"""Audit records written through the standard logging system."""

from __future__ import annotations

import logging

from configurator.config.logging import AUDIT_LOGGER_NAME


class LoggingAuditLogger:
    """``AuditLogger`` that emits one INFO record per audited event."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def audit(self, message: str, *params: object) -> None:
        self._log.info(message, *params)
