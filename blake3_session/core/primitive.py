"""
Thin adapter over the :mod:`blake3` package.

Sessions reach the BLAKE3 compression function only through the functions in
this module, which mirror the reference C API: three initialisers (one per
mode), an order-sensitive ``update`` and a seekable extendable-output
finalize. The hasher object returned by the initialisers is the opaque
session state. It is always created with ``max_threads=1``; sessions hash
sequentially.
"""

from __future__ import annotations

from typing import Any, Final, cast

try:
    import blake3 as _blake3
except ModuleNotFoundError as exc:  # pragma: no cover - exercised via tests
    msg = (
        "The 'blake3' package is required. Install it directly or use "
        "'pip install blake3-session'."
    )
    raise ModuleNotFoundError(msg) from exc

KEY_LEN: Final = 32
BLOCK_LEN: Final = 64

# The hasher type is a compiled extension class without stubs.
HasherState = Any


def primitive_init() -> HasherState:
    """Return a fresh unkeyed hasher."""
    return _blake3.blake3(max_threads=1)


def primitive_init_keyed(key: bytes) -> HasherState:
    """Return a hasher in keyed mode; *key* must be :data:`KEY_LEN` bytes."""
    return _blake3.blake3(key=key, max_threads=1)


def primitive_init_derive_key(context: str) -> HasherState:
    """Return a hasher in derive-key mode for the given *context* string."""
    return _blake3.blake3(derive_key_context=context, max_threads=1)


def primitive_update(state: HasherState, data: Any) -> HasherState:
    """Feed *data* (any contiguous buffer) into *state* and return it."""
    state.update(data)
    return state


def primitive_finalize_seek(state: HasherState, offset: int, length: int) -> bytes:
    """Read *length* output bytes starting at *offset* without consuming *state*."""
    return cast("bytes", state.digest(length, seek=offset))


def primitive_copy(state: HasherState) -> HasherState:
    """Return an independent value-copy of *state*."""
    return state.copy()


__all__ = [
    "BLOCK_LEN",
    "KEY_LEN",
    "HasherState",
    "primitive_copy",
    "primitive_finalize_seek",
    "primitive_init",
    "primitive_init_derive_key",
    "primitive_init_keyed",
    "primitive_update",
]
