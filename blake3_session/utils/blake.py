"""
One-shot BLAKE3 helpers.

Convenience wrappers for callers that hash a single buffer and do not need a
long-lived :class:`~blake3_session.core.session.Blake3Session`.
"""

from __future__ import annotations

from typing import Any

from blake3_session.core.modes import DEFAULT_DIGEST_SIZE
from blake3_session.core.session import Blake3Session


def blake3_digest(data: Any, length: int = DEFAULT_DIGEST_SIZE, *, key: Any = None) -> bytes:
    """Return a raw BLAKE3 digest of *data*."""
    return Blake3Session(data, key=key).digest(length)


def blake3_hex(data: Any, length: int = DEFAULT_DIGEST_SIZE, *, key: Any = None) -> str:
    """Return a hexadecimal BLAKE3 digest of *data*."""
    return Blake3Session(data, key=key).hexdigest(length)


__all__ = ["blake3_digest", "blake3_hex"]
