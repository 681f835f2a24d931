"""Operation-scoped context variables."""

from __future__ import annotations

from contextvars import ContextVar

# Context variable storing the identifier of the current hashing operation.
OPERATION_ID: ContextVar[str | None] = ContextVar("operation_id", default=None)

__all__ = ["OPERATION_ID"]
