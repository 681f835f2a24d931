"""Logging helpers for BLAKE3 sessions."""

from __future__ import annotations

import logging
from threading import Lock

from blake3_session.context import OPERATION_ID

_factory_lock = Lock()
_factory_installed = False


def _add_operation_id(record: logging.LogRecord) -> logging.LogRecord:
    if not hasattr(record, "operation_id"):
        record.operation_id = OPERATION_ID.get() or "-"
    return record


class OperationIdFilter(logging.Filter):
    """Inject ``operation_id`` from :mod:`contextvars` into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - simple
        """Add the ``operation_id`` attribute to *record* from context."""
        _add_operation_id(record)
        return True


def setup_operation_id_logging() -> None:
    """Ensure all log records include the ``operation_id`` attribute."""
    global _factory_installed
    with _factory_lock:
        if _factory_installed:
            return
        old_factory = logging.getLogRecordFactory()

        def record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
            return _add_operation_id(old_factory(*args, **kwargs))

        logging.setLogRecordFactory(record_factory)
        _factory_installed = True


__all__ = ["OperationIdFilter", "setup_operation_id_logging"]
