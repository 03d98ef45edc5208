"""
Workflow error taxonomy.

Routers translate these into HTTP responses; persistence errors raised by
SQLAlchemy are deliberately not wrapped so they surface as internal failures.
"""
from __future__ import annotations

from typing import Any, Optional


class WorkflowError(Exception):
    """Base class for expected, caller-facing workflow failures."""

    status_code: int = 400
    retryable: bool = False

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(WorkflowError):
    """Missing or malformed input, or a reference to a record that does not exist."""

    status_code = 422


class NotFoundError(WorkflowError):
    status_code = 404


class VersionConflictError(WorkflowError):
    """The header changed since the caller last read it; re-read and retry."""

    status_code = 409
    retryable = True


__all__ = ["WorkflowError", "ValidationError", "NotFoundError", "VersionConflictError"]
