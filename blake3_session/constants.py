"""Output-length bounds shared by the session, validators and settings."""

from typing import Final

MIN_DIGEST_SIZE: Final = 1
MAX_DIGEST_SIZE: Final = 65_536
DEFAULT_DIGEST_SIZE: Final = 32

__all__ = ["DEFAULT_DIGEST_SIZE", "MAX_DIGEST_SIZE", "MIN_DIGEST_SIZE"]
