"""
Unit tests for the hash primitives and digest encoding helpers.
"""

import hashlib

import pytest

from hashtree.exceptions import InvalidDigestError, InvalidLeafError
from hashtree.merkle.encoding import (
    coerce_digest,
    digest_from_hex,
    digest_to_hex,
    shorten_hex,
)
from hashtree.merkle.hashing import (
    DIGEST_SIZE,
    hash_leaf,
    hash_pair,
    leaf_bytes,
    sha256,
)


TEST_SHA256 = "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"


class TestPrimitive:
    """Test the bare SHA-256 primitive."""

    def test_known_digest_for_test(self):
        """SHA-256 of "test" matches the published digest."""
        assert sha256(b"test").hex() == TEST_SHA256

    def test_digest_size(self):
        assert len(sha256(b"")) == DIGEST_SIZE


class TestLeafHash:
    """Test leaf hashing."""

    def test_leaf_hash_is_prefixed(self):
        """Leaf hash is SHA-256 over 0x00 || data."""
        assert hash_leaf(b"test") == hashlib.sha256(b"\x00test").digest()

    def test_leaf_hash_differs_from_bare_hash(self):
        assert hash_leaf(b"test").hex() != TEST_SHA256

    def test_text_and_bytes_agree(self):
        """Text leaves are UTF-8 encoded before hashing."""
        assert hash_leaf("héllo") == hash_leaf("héllo".encode("utf-8"))

    def test_custom_encoding(self):
        assert hash_leaf("héllo", encoding="latin-1") == hash_leaf("héllo".encode("latin-1"))

    def test_bytearray_and_memoryview(self):
        assert hash_leaf(bytearray(b"abc")) == hash_leaf(b"abc")
        assert hash_leaf(memoryview(b"abc")) == hash_leaf(b"abc")

    @pytest.mark.parametrize("value", [1, 1.5, None, ["a"], object()])
    def test_invalid_leaf_type(self, value):
        with pytest.raises(InvalidLeafError, match="Leaf must be bytes or str"):
            leaf_bytes(value)

    def test_unencodable_text(self):
        with pytest.raises(InvalidLeafError, match="Cannot encode leaf"):
            leaf_bytes("é", encoding="ascii")

    def test_lone_surrogate_under_utf8(self):
        with pytest.raises(InvalidLeafError, match="Cannot encode leaf"):
            hash_leaf("\udcff")

    def test_unknown_codec(self):
        with pytest.raises(InvalidLeafError, match="no-such-codec"):
            leaf_bytes("a", encoding="no-such-codec")


class TestPairHash:
    """Test internal node hashing."""

    def test_pair_hash_is_prefixed(self):
        left, right = sha256(b"l"), sha256(b"r")
        assert hash_pair(left, right) == hashlib.sha256(b"\x01" + left + right).digest()

    def test_pair_hash_is_order_sensitive(self):
        left, right = sha256(b"l"), sha256(b"r")
        assert hash_pair(left, right) != hash_pair(right, left)

    def test_pair_hash_cannot_be_replayed_as_leaf(self):
        """A 64-byte leaf equal to two concatenated digests hashes differently."""
        left, right = sha256(b"l"), sha256(b"r")
        assert hash_leaf(left + right) != hash_pair(left, right)


class TestDigestEncoding:
    """Test hex encoding helpers."""

    def test_hex_round_trip(self):
        digest = sha256(b"test")
        assert digest_to_hex(digest) == TEST_SHA256
        assert digest_from_hex(TEST_SHA256) == digest

    def test_from_hex_accepts_prefix_and_uppercase(self):
        assert digest_from_hex("0x" + TEST_SHA256.upper()) == sha256(b"test")

    def test_from_hex_rejects_bad_hex(self):
        with pytest.raises(InvalidDigestError, match="Invalid hex digest"):
            digest_from_hex("zz" * 32)

    def test_from_hex_rejects_wrong_length(self):
        with pytest.raises(InvalidDigestError, match="must be 32 bytes"):
            digest_from_hex("ab" * 16)

    def test_from_hex_rejects_non_str(self):
        with pytest.raises(InvalidDigestError):
            digest_from_hex(b"ab" * 32)

    def test_coerce_digest(self):
        digest = sha256(b"test")
        assert coerce_digest(digest) == digest
        assert coerce_digest(bytearray(digest)) == digest
        assert coerce_digest(TEST_SHA256) == digest

        with pytest.raises(InvalidDigestError):
            coerce_digest(b"short")
        with pytest.raises(InvalidDigestError, match="Unsupported digest type"):
            coerce_digest(42)

    def test_shorten_hex(self):
        digest = sha256(b"test")
        assert shorten_hex(digest) == TEST_SHA256
        assert shorten_hex(digest, 8) == TEST_SHA256[:8] + "…"
        assert shorten_hex(digest, 100) == TEST_SHA256
