"""Core session, mode validation, primitive adapter and digest encoding."""

from .encoding import decode_hex, encode_hex
from .modes import (
    AUTO,
    DEFAULT_DIGEST_SIZE,
    MAX_DIGEST_SIZE,
    MIN_DIGEST_SIZE,
    DeriveKey,
    HashMode,
    Keyed,
    Unkeyed,
)
from .session import Blake3Session, FinalizePolicy, SessionState, blake3, derive_key, hash_file

__all__ = [
    "AUTO",
    "DEFAULT_DIGEST_SIZE",
    "MAX_DIGEST_SIZE",
    "MIN_DIGEST_SIZE",
    "Blake3Session",
    "DeriveKey",
    "FinalizePolicy",
    "HashMode",
    "Keyed",
    "SessionState",
    "Unkeyed",
    "blake3",
    "decode_hex",
    "derive_key",
    "encode_hex",
    "hash_file",
]
