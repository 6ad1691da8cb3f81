"""Errors shared by all backend ports."""

from __future__ import annotations


class BackendError(RuntimeError):
    """Raised by adapters when the backing store or service rejects a request."""
