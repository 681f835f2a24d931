"""Utilities for BLAKE3 sessions (logging, one-shot helpers)."""

# Loaded lazily via ``__getattr__`` so importing ``blake3_session.utils.logging``
# from the settings layer does not pull in the session module.

from typing import Any

__all__ = ["blake3_digest", "blake3_hex"]


def __getattr__(name: str) -> Any:  # pragma: no cover - trivial forwarding
    if name in {"blake3_digest", "blake3_hex"}:
        from .blake import blake3_digest, blake3_hex

        return {"blake3_digest": blake3_digest, "blake3_hex": blake3_hex}[name]
    raise AttributeError(f"module {__name__} has no attribute {name}")
