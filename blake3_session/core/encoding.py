"""Hexadecimal encoding of raw digests."""

from __future__ import annotations

import binascii


def encode_hex(digest: bytes) -> str:
    """Return the lowercase hexadecimal form of *digest* (two chars per byte)."""
    return bytes(digest).hex()


def decode_hex(text: str) -> bytes:
    """
    Decode a hexadecimal string into bytes.

    Upper- and lowercase digits are accepted. Surrounding whitespace is
    ignored, anything else that is not a hex digit is rejected.

    Raises:
        ValueError: If *text* has odd length or contains non-hex characters.
    """
    cleaned = text.strip()
    if len(cleaned) % 2:
        raise ValueError(f"Hex string must have even length, got length {len(cleaned)}")
    try:
        return binascii.unhexlify(cleaned)
    except ValueError as exc:  # binascii.Error and non-ASCII input
        raise ValueError(f"Invalid hex characters in string: {exc}") from exc


__all__ = ["decode_hex", "encode_hex"]
