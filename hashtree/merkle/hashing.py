"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Hash primitives for the Merkle tree.

Leaf and internal-node hashes are domain separated with a one-byte prefix so
a leaf hash can never be replayed as an internal node (or vice versa):
- LeafHash(data) = SHA256(0x00 || data)
- PairHash(left, right) = SHA256(0x01 || left || right)

Pair hashing always operates on raw digest bytes, never on their hex text.
"""

import hashlib
from typing import Union

from hashtree.exceptions import InvalidLeafError

LeafValue = Union[bytes, bytearray, memoryview, str]

DIGEST_SIZE = 32
LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"
DEFAULT_TEXT_ENCODING = "utf-8"


def sha256(data: bytes) -> bytes:
    """Return the bare SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


def leaf_bytes(value: LeafValue, encoding: str = DEFAULT_TEXT_ENCODING) -> bytes:
    """
    Convert a leaf value to the bytes that get hashed.

    Args:
        value: Raw leaf value (bytes-like or text)
        encoding: Codec used for text values

    Returns:
        Leaf bytes

    Raises:
        InvalidLeafError: If value is not bytes-like or text, or is text
            the codec cannot encode (or the codec is unknown)
    """
    if isinstance(value, str):
        try:
            return value.encode(encoding)
        except (UnicodeError, LookupError) as e:
            raise InvalidLeafError(f"Cannot encode leaf with {encoding!r}: {e}") from e
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidLeafError(
        f"Leaf must be bytes or str, got {type(value).__name__}"
    )


def hash_leaf(value: LeafValue, encoding: str = DEFAULT_TEXT_ENCODING) -> bytes:
    """
    Hash a leaf value: SHA256(0x00 || value).

    Args:
        value: Raw leaf value (bytes-like or text)
        encoding: Codec used for text values

    Returns:
        32-byte leaf hash
    """
    return sha256(LEAF_PREFIX + leaf_bytes(value, encoding))


def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash two child digests into their parent: SHA256(0x01 || left || right).

    Order matters, left operand first.

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte parent hash
    """
    return sha256(NODE_PREFIX + left + right)
