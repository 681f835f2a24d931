"""
Hash modes and the validators that select them.

A session runs in exactly one of three modes, represented by the frozen
dataclasses :class:`Unkeyed`, :class:`Keyed` and :class:`DeriveKey`. The mode
is chosen once by :func:`select_mode` and never changes afterwards, so the
rest of the code dispatches on the mode type instead of re-checking which
constructor arguments were set.

Validation order matches the construction contract:

1. ``key`` and ``context`` together -> :class:`ConflictingModeError`
2. key length != 32 -> :class:`InvalidKeyLengthError`
3. empty context -> :class:`EmptyContextError`
4. digest size outside ``[1, 65536]`` -> :class:`InvalidDigestSizeError`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Final, Literal, TypeAlias

from blake3_session.constants import DEFAULT_DIGEST_SIZE, MAX_DIGEST_SIZE, MIN_DIGEST_SIZE
from blake3_session.core.primitive import KEY_LEN
from blake3_session.errors import (
    ConflictingModeError,
    EmptyContextError,
    InvalidContextError,
    InvalidDigestSizeError,
    InvalidKeyLengthError,
    UnsupportedParameterError,
)

logger = logging.getLogger(__name__)

# Sentinel accepted by ``max_threads`` meaning "let the library decide".
AUTO: Final = -1

AdvisoryPolicy: TypeAlias = Literal["ignore", "reject"]


@dataclass(frozen=True)
class Unkeyed:
    """Plain BLAKE3 hashing."""

    name: ClassVar[str] = "unkeyed"


@dataclass(frozen=True)
class Keyed:
    """Keyed hashing (MAC) with a 32-byte secret key."""

    key: bytes = field(repr=False)
    name: ClassVar[str] = "keyed"


@dataclass(frozen=True)
class DeriveKey:
    """Key derivation with a domain-separation context."""

    context: bytes
    name: ClassVar[str] = "derive_key"

    @property
    def context_text(self) -> str:
        """Context decoded as UTF-8, the form the primitive consumes."""
        return self.context.decode("utf-8")


HashMode: TypeAlias = Unkeyed | Keyed | DeriveKey


def read_buffer(data: Any, *, name: str = "data") -> memoryview:
    """
    Return a :class:`memoryview` over a bytes-like *data*.

    ``str`` is rejected the same way :mod:`hashlib` rejects it, since hashing
    text requires an explicit encoding.
    """
    if isinstance(data, str):
        raise TypeError(f"Strings must be encoded before hashing ({name})")
    try:
        return memoryview(data)
    except TypeError as exc:
        raise TypeError(
            f"{name} must be a bytes-like object, not {type(data).__name__!r}"
        ) from exc


def validate_digest_size(value: Any, *, name: str = "digest_size") -> int:
    """Return *value* if it is an ``int`` within ``[1, 65536]``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__!r}")
    if not MIN_DIGEST_SIZE <= value <= MAX_DIGEST_SIZE:
        raise InvalidDigestSizeError(
            f"{name} must be between {MIN_DIGEST_SIZE} and {MAX_DIGEST_SIZE}, got {value}",
            details={"field": name, "value": value},
        )
    return value


def validate_key(key: Any) -> bytes:
    """Return an owned copy of *key*, which must be exactly 32 bytes."""
    with read_buffer(key, name="key") as view:
        if view.nbytes != KEY_LEN:
            raise InvalidKeyLengthError(
                f"key must be exactly {KEY_LEN} bytes, got {view.nbytes}",
                details={"length": view.nbytes},
            )
        return view.tobytes()


def validate_context(context: Any) -> bytes:
    """
    Return *context* as owned, non-empty UTF-8 bytes.

    ``str`` contexts are encoded as UTF-8. Byte contexts must decode as UTF-8
    because the underlying primitive takes the context as text.
    """
    if context is None:
        raise EmptyContextError("context is required for key derivation")
    if isinstance(context, str):
        raw = context.encode("utf-8")
    else:
        with read_buffer(context, name="context") as view:
            raw = view.tobytes()
    if not raw:
        raise EmptyContextError("context must be non-empty")
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidContextError(
            "context must be valid UTF-8",
            details={"position": exc.start},
        ) from exc
    return raw


def select_mode(key: Any = None, context: Any = None) -> HashMode:
    """Pick the session mode from the constructor's ``key``/``context`` arguments."""
    if key is not None and context is not None:
        raise ConflictingModeError("key and context are mutually exclusive")
    if key is not None:
        return Keyed(validate_key(key))
    if context is not None:
        return DeriveKey(validate_context(context))
    return Unkeyed()


def check_advisory_params(
    *,
    usedforsecurity: Any = True,
    max_threads: Any = 1,
    policy: AdvisoryPolicy = "ignore",
) -> None:
    """
    Validate the hashlib/blake3 compatibility parameters.

    ``usedforsecurity`` has no effect (BLAKE3 has no weak variant) and
    ``max_threads`` has no effect (sessions hash sequentially). Under the
    ``"reject"`` policy any non-default value raises
    :class:`UnsupportedParameterError`; under ``"ignore"`` it is logged.
    """
    if not isinstance(usedforsecurity, bool):
        raise TypeError("usedforsecurity must be a bool")
    if isinstance(max_threads, bool) or not isinstance(max_threads, int):
        raise TypeError("max_threads must be an integer")
    if max_threads != AUTO and max_threads < 1:
        raise ValueError(f"max_threads must be positive or AUTO (-1), got {max_threads}")

    ignored: dict[str, Any] = {}
    if usedforsecurity is not True:
        ignored["usedforsecurity"] = usedforsecurity
    if max_threads != 1:
        ignored["max_threads"] = max_threads
    if not ignored:
        return
    if policy == "reject":
        names = ", ".join(sorted(ignored))
        raise UnsupportedParameterError(
            f"advisory parameters are not accepted: {names}",
            details=ignored,
        )
    logger.debug("ignoring advisory parameters %s", ignored)


__all__ = [
    "AUTO",
    "DEFAULT_DIGEST_SIZE",
    "MAX_DIGEST_SIZE",
    "MIN_DIGEST_SIZE",
    "AdvisoryPolicy",
    "DeriveKey",
    "HashMode",
    "Keyed",
    "Unkeyed",
    "check_advisory_params",
    "read_buffer",
    "select_mode",
    "validate_context",
    "validate_digest_size",
    "validate_key",
]
