"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Digest encoding helpers.

Digests are raw 32-byte values inside the tree. Hex text is only a surface
representation for display and transport, and is decoded back to bytes
before any hashing happens.
"""

from typing import Union

from hashtree.exceptions import InvalidDigestError
from hashtree.merkle.hashing import DIGEST_SIZE

DigestLike = Union[bytes, bytearray, memoryview, str]


def digest_to_hex(digest: bytes) -> str:
    """Encode a raw digest as lowercase hex."""
    return bytes(digest).hex()


def digest_from_hex(text: str) -> bytes:
    """
    Decode a hex digest.

    Args:
        text: Hex encoded digest, optionally prefixed with "0x"

    Returns:
        Raw digest bytes

    Raises:
        InvalidDigestError: If text is not valid hex or not DIGEST_SIZE bytes
    """
    if not isinstance(text, str):
        raise InvalidDigestError(f"Hex digest must be str, got {type(text).__name__}")

    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]

    try:
        digest = bytes.fromhex(cleaned)
    except ValueError as e:
        raise InvalidDigestError(f"Invalid hex digest {text!r}: {e}")

    if len(digest) != DIGEST_SIZE:
        raise InvalidDigestError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


def coerce_digest(value: DigestLike) -> bytes:
    """
    Accept a digest as raw bytes or hex text and return raw bytes.

    Raises:
        InvalidDigestError: If value is neither, or has the wrong length
    """
    if isinstance(value, str):
        return digest_from_hex(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        digest = bytes(value)
        if len(digest) != DIGEST_SIZE:
            raise InvalidDigestError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
            )
        return digest
    raise InvalidDigestError(f"Unsupported digest type {type(value).__name__}")


def shorten_hex(digest: bytes, width: int = 0) -> str:
    """
    Hex encode a digest, truncated to width characters for display.

    A width of 0 keeps the full encoding.
    """
    text = digest_to_hex(digest)
    if width and width < len(text):
        return text[:width] + "…"
    return text
