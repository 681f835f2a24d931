"""
BLAKE3 Session.

Incremental BLAKE3 hashing with extendable output, keyed and derive-key
modes, and safe copy semantics.

This package provides:
- ``Blake3Session``: hashlib-style incremental hash object
- ``derive_key``: standalone key derivation
- One-shot helpers and file hashing
- Pydantic settings and a Typer command line
"""

from __future__ import annotations

import logging
from typing import Any

__version__: str = "1.0.0"
# Rebuild the module docstring to embed the current version.
__doc__ = f"BLAKE3 Session v{__version__}.\n\n" + __doc__.split("\n", 3)[3]
__description__ = "Incremental BLAKE3 hash sessions with extendable output"

# Configure default logging (no handlers by default for library use)
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Blake3Session",
    "FinalizePolicy",
    "UnifiedSettings",
    "__version__",
    "blake3",
    "blake3_digest",
    "blake3_hex",
    "derive_key",
    "get_settings",
    "hash_file",
]

_SESSION_NAMES = {"Blake3Session", "FinalizePolicy", "blake3", "derive_key", "hash_file"}


# Lazy attribute access so the settings layer can import ``__version__``
# without pulling in the session module.
def __getattr__(name: str) -> Any:
    """Lazily import and return objects from submodules on attribute access."""
    if name in _SESSION_NAMES:
        from blake3_session.core import session

        return getattr(session, name)
    if name in {"blake3_digest", "blake3_hex"}:
        from blake3_session.utils import blake

        return getattr(blake, name)
    if name in {"UnifiedSettings", "get_settings"}:
        from blake3_session import settings

        return getattr(settings, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def get_version_info() -> dict[str, Any]:
    """Get version information of the package and the BLAKE3 backend."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        backend = version("blake3")
    except PackageNotFoundError:  # pragma: no cover - blake3 is a hard dependency
        backend = "unknown"
    return {
        "version": __version__,
        "description": __description__,
        "blake3": backend,
    }
