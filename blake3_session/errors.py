"""
Exception hierarchy for BLAKE3 hash sessions.

Every error raised by the library derives from :class:`Blake3SessionError`
and carries a stable machine-readable ``code`` plus a ``details`` mapping.
Validation failures additionally subclass :class:`ValueError` so callers
written against :mod:`hashlib` keep catching the exceptions they expect.
Validation errors are deterministic and are never retried internally.
"""

from __future__ import annotations

from typing import Any


class ErrorCodes:
    """Stable machine-readable error codes."""

    INVALID_DIGEST_SIZE = "INVALID_DIGEST_SIZE"
    INVALID_KEY_LENGTH = "INVALID_KEY_LENGTH"
    EMPTY_CONTEXT = "EMPTY_CONTEXT"
    INVALID_CONTEXT = "INVALID_CONTEXT"
    CONFLICTING_MODE = "CONFLICTING_MODE"
    ALREADY_FINALIZED = "ALREADY_FINALIZED"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    UNSUPPORTED_PARAMETER = "UNSUPPORTED_PARAMETER"


class Blake3SessionError(Exception):
    """Base class for all errors raised by :mod:`blake3_session`."""

    code: str = "BLAKE3_SESSION_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidDigestSizeError(Blake3SessionError, ValueError):
    """Requested output length is outside ``[1, 65536]``."""

    code = ErrorCodes.INVALID_DIGEST_SIZE


class InvalidKeyLengthError(Blake3SessionError, ValueError):
    """Keyed-mode key is not exactly 32 bytes."""

    code = ErrorCodes.INVALID_KEY_LENGTH


class EmptyContextError(Blake3SessionError, ValueError):
    """Derive-key context is empty or missing."""

    code = ErrorCodes.EMPTY_CONTEXT


class InvalidContextError(Blake3SessionError, ValueError):
    """Derive-key context bytes are not valid UTF-8."""

    code = ErrorCodes.INVALID_CONTEXT


class ConflictingModeError(Blake3SessionError, ValueError):
    """Both ``key`` and ``context`` were supplied."""

    code = ErrorCodes.CONFLICTING_MODE


class AlreadyFinalizedError(Blake3SessionError, RuntimeError):
    """``update`` was called on a one-shot session after output was produced."""

    code = ErrorCodes.ALREADY_FINALIZED


class ResourceExhaustedError(Blake3SessionError, MemoryError):
    """Hasher state could not be allocated during construction or copy."""

    code = ErrorCodes.RESOURCE_EXHAUSTED


class UnsupportedParameterError(Blake3SessionError, ValueError):
    """An advisory parameter was set while the host policy rejects them."""

    code = ErrorCodes.UNSUPPORTED_PARAMETER


__all__ = [
    "AlreadyFinalizedError",
    "Blake3SessionError",
    "ConflictingModeError",
    "EmptyContextError",
    "ErrorCodes",
    "InvalidContextError",
    "InvalidDigestSizeError",
    "InvalidKeyLengthError",
    "ResourceExhaustedError",
    "UnsupportedParameterError",
]
