"""
Incremental BLAKE3 hash sessions.

A :class:`Blake3Session` owns one hasher state. Its mode (unkeyed, keyed or
derive-key) is fixed at construction, input is appended with :meth:`update`,
and :meth:`digest` reads any number of output bytes from the extendable output
function, always starting at output offset zero. Shorter digests are therefore
prefixes of longer ones.

Finalize policy
---------------
``repeatable`` (default)
    ``digest`` may be called any number of times and ``update`` keeps
    working afterwards; each digest reflects everything ingested so far.
``one_shot``
    The first ``digest``/``hexdigest`` moves the session to
    :attr:`SessionState.FINALIZED`; later ``update`` calls raise
    :class:`AlreadyFinalizedError`. Further digests still succeed.

Sessions are not thread-safe. Use :meth:`copy` to fork independent branches
before handing them to other threads.

Example:
~~~~~~~
>>> s = Blake3Session(b"abc")
>>> s.hexdigest()[:16]
'6437b3ac38465133'
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from blake3_session.core.encoding import encode_hex
from blake3_session.core.modes import (
    AUTO,
    DEFAULT_DIGEST_SIZE,
    DeriveKey,
    HashMode,
    Keyed,
    check_advisory_params,
    read_buffer,
    select_mode,
    validate_context,
    validate_digest_size,
)
from blake3_session.core.primitive import (
    BLOCK_LEN,
    KEY_LEN,
    HasherState,
    primitive_copy,
    primitive_finalize_seek,
    primitive_init,
    primitive_init_derive_key,
    primitive_init_keyed,
    primitive_update,
)
from blake3_session.errors import AlreadyFinalizedError, ResourceExhaustedError
from blake3_session.settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FinalizePolicy(str, Enum):
    """Whether a session accepts input after producing output."""

    REPEATABLE = "repeatable"
    ONE_SHOT = "one_shot"


class SessionState(Enum):
    """Lifecycle tag of a session."""

    ACTIVE = "active"
    FINALIZED = "finalized"


def _allocate(factory: Callable[..., T], *args: Any) -> T:
    try:
        return factory(*args)
    except MemoryError as exc:
        raise ResourceExhaustedError("could not allocate BLAKE3 hasher state") from exc


def _init_state(mode: HashMode) -> HasherState:
    if isinstance(mode, Keyed):
        return _allocate(primitive_init_keyed, mode.key)
    if isinstance(mode, DeriveKey):
        return _allocate(primitive_init_derive_key, mode.context_text)
    return _allocate(primitive_init)


class Blake3Session:
    """
    BLAKE3 hash object with hashlib-style methods and extendable output.

    Args:
        data: Optional bytes-like input, ingested exactly as ``update(data)``.
        digest_size: Default output length for ``digest()``/``hexdigest()``,
            ``1..65536``. Falls back to ``settings.session.default_digest_size``.
        key: 32-byte key selecting keyed mode.
        context: Non-empty context (``str`` or UTF-8 bytes) selecting
            derive-key mode. Mutually exclusive with *key*.
        usedforsecurity: Accepted for :mod:`hashlib` compatibility; no effect.
        max_threads: Accepted for ``blake3`` compatibility; sessions are
            always sequential.
        finalize_policy: ``"repeatable"`` or ``"one_shot"``; falls back to
            ``settings.session.finalize_policy``.

    Raises:
        ConflictingModeError: Both *key* and *context* were given.
        InvalidKeyLengthError: *key* is not 32 bytes.
        EmptyContextError: *context* is empty.
        InvalidDigestSizeError: *digest_size* is out of range.
        UnsupportedParameterError: Advisory parameters set under the
            ``reject`` policy.
        ResourceExhaustedError: The hasher state could not be allocated.
    """

    name = "blake3"
    block_size = BLOCK_LEN
    key_size = KEY_LEN
    AUTO = AUTO

    def __init__(
        self,
        data: Any = None,
        /,
        *,
        digest_size: int | None = None,
        key: Any = None,
        context: Any = None,
        usedforsecurity: bool = True,
        max_threads: int = 1,
        finalize_policy: FinalizePolicy | str | None = None,
    ) -> None:
        cfg = get_settings().session
        mode = select_mode(key, context)
        size = validate_digest_size(
            cfg.default_digest_size if digest_size is None else digest_size
        )
        check_advisory_params(
            usedforsecurity=usedforsecurity,
            max_threads=max_threads,
            policy=cfg.advisory_params,
        )
        self._mode: HashMode = mode
        self._digest_size = size
        self._policy = FinalizePolicy(
            cfg.finalize_policy if finalize_policy is None else finalize_policy
        )
        self._usedforsecurity = usedforsecurity
        self._state = SessionState.ACTIVE
        self._hasher = _init_state(mode)
        logger.debug("created %s session digest_size=%d", mode.name, size)
        if data is not None:
            self.update(data)

    # ------------------------------------------------------------------
    # read-only attributes
    # ------------------------------------------------------------------

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def mode(self) -> HashMode:
        return self._mode

    @property
    def finalize_policy(self) -> FinalizePolicy:
        return self._policy

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._state is SessionState.FINALIZED

    @property
    def usedforsecurity(self) -> bool:
        return self._usedforsecurity

    # ------------------------------------------------------------------
    # hashing
    # ------------------------------------------------------------------

    def update(self, data: Any) -> Blake3Session:
        """
        Append *data* to the hashed input and return ``self``.

        Repeated calls are equivalent to a single call with the concatenation
        of all inputs. The buffer is fully consumed before returning and is
        not referenced afterwards.
        """
        if self._state is SessionState.FINALIZED:
            raise AlreadyFinalizedError("cannot update a finalized one-shot session")
        with read_buffer(data) as view:
            primitive_update(self._hasher, view)
        return self

    def digest(self, length: int | None = None) -> bytes:
        """Return *length* bytes of output (default :attr:`digest_size`)."""
        size = self._digest_size if length is None else validate_digest_size(length, name="length")
        out = primitive_finalize_seek(self._hasher, 0, size)
        if self._policy is FinalizePolicy.ONE_SHOT:
            self._state = SessionState.FINALIZED
        return out

    def hexdigest(self, length: int | None = None) -> str:
        """Return :meth:`digest` encoded as ``2 * length`` lowercase hex characters."""
        return encode_hex(self.digest(length))

    # ------------------------------------------------------------------
    # copying
    # ------------------------------------------------------------------

    def copy(self) -> Blake3Session:
        """Return an independent session holding a value-copy of the current state."""
        clone = object.__new__(type(self))
        clone._mode = self._mode
        clone._digest_size = self._digest_size
        clone._policy = self._policy
        clone._usedforsecurity = self._usedforsecurity
        clone._state = self._state
        clone._hasher = _allocate(primitive_copy, self._hasher)
        logger.debug("copied %s session", self._mode.name)
        return clone

    def __copy__(self) -> Blake3Session:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Blake3Session:
        return self.copy()

    def __reduce__(self) -> Any:
        raise TypeError(f"cannot pickle {type(self).__name__!r} object")

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} mode={self._mode.name} "
            f"digest_size={self._digest_size} state={self._state.value} "
            f"at {id(self):#x}>"
        )


def derive_key(key_material: Any, context: Any, length: int = DEFAULT_DIGEST_SIZE) -> bytes:
    """
    Derive *length* bytes from *key_material* under a domain-separation *context*.

    Equivalent to ``Blake3Session(context=context).update(key_material).digest(length)``
    and implemented that way.

    Raises:
        InvalidDigestSizeError: *length* is outside ``[1, 65536]``.
        EmptyContextError: *context* is empty or ``None``.
    """
    size = validate_digest_size(length, name="length")
    validate_context(context)
    session = Blake3Session(
        context=context,
        digest_size=size,
        finalize_policy=FinalizePolicy.REPEATABLE,
    )
    session.update(key_material)
    return session.digest(size)


def hash_file(
    path: str | Path,
    *,
    digest_size: int | None = None,
    key: Any = None,
    context: Any = None,
    chunk_size: int | None = None,
) -> Blake3Session:
    """Stream the file at *path* through a new session and return the session."""
    session = Blake3Session(digest_size=digest_size, key=key, context=context)
    size = get_settings().session.file_chunk_size if chunk_size is None else chunk_size
    if size < 1:
        raise ValueError(f"chunk_size must be positive, got {size}")
    with Path(path).open("rb") as fh:
        while chunk := fh.read(size):
            session.update(chunk)
    return session


# Familiar lowercase constructor name, as in ``hashlib`` and ``blake3``.
blake3 = Blake3Session


__all__ = [
    "Blake3Session",
    "FinalizePolicy",
    "SessionState",
    "blake3",
    "derive_key",
    "hash_file",
]
