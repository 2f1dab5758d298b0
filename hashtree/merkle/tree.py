"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Merkle tree implementation for data-integrity commitments.

This module implements a binary Merkle tree with SHA-256 hashing. It supports:
- Tree construction from raw leaf values
- Merkle proof generation for any leaf
- Merkle proof verification without access to the tree
- Appending leaves (full rebuild of the layers above the leaves)

The tree is not thread-safe. Construction and add_leaf must be serialised by
the caller; readers are safe only while no mutation is in flight.
"""

import time
from typing import Iterable, List, Sequence

from hashtree.exceptions import (
    EmptyInputError,
    HashTreeError,
    IndexOutOfRangeError,
    InvalidLeafError,
)
from hashtree.logging_config import get_logger, log_proof_verification, log_tree_build
from hashtree.merkle.encoding import DigestLike, coerce_digest, digest_to_hex
from hashtree.merkle.hashing import (
    DEFAULT_TEXT_ENCODING,
    LeafValue,
    hash_leaf,
    hash_pair,
)
from hashtree.merkle.proof import ProofStep

logger = get_logger(__name__)


class HashTree:
    """
    Binary Merkle tree stored as a list of layers.

    layers[0] holds the leaf hashes and layers[-1] holds the single root.
    Each layer is derived from the one below by hashing consecutive pairs
    left to right. When a layer has an odd number of nodes, the last node is
    promoted unchanged into the next layer (no duplication, no padding).

    Example:
        >>> tree = HashTree(["a", "b", "c", "d"])
        >>> proof = tree.get_proof(2)
        >>> HashTree.verify_proof(tree.get_root(), "c", proof)
        True
    """

    def __init__(
        self,
        leaves: Iterable[LeafValue],
        encoding: str = DEFAULT_TEXT_ENCODING,
    ):
        """
        Build Merkle tree from leaf values.

        Args:
            leaves: Ordered leaf values (bytes or str), hashed with the leaf hash
            encoding: Codec used for text leaves

        Raises:
            EmptyInputError: If leaves is empty
            InvalidLeafError: If leaves is a single value or not iterable, or
                contains a value that is neither bytes nor str or cannot be
                encoded
        """
        if isinstance(leaves, (str, bytes, bytearray, memoryview)):
            raise InvalidLeafError(
                "Leaves must be a sequence of values, not a single value"
            )
        try:
            leaves = iter(leaves)
        except TypeError:
            raise InvalidLeafError(
                f"Leaves must be iterable, got {type(leaves).__name__}"
            )

        leaf_hashes = [hash_leaf(leaf, encoding) for leaf in leaves]
        if not leaf_hashes:
            raise EmptyInputError("Cannot create Merkle tree from empty leaves list")

        self.encoding = encoding
        self._layers: List[List[bytes]] = [leaf_hashes]
        self._build_tree()

    @classmethod
    def new(
        cls,
        leaves: Iterable[LeafValue],
        encoding: str = DEFAULT_TEXT_ENCODING,
    ) -> "HashTree":
        """Construct a tree from leaf values. Alias of the constructor."""
        return cls(leaves, encoding=encoding)

    @property
    def leaf_count(self) -> int:
        """Number of leaves in the tree."""
        return len(self._layers[0])

    @property
    def depth(self) -> int:
        """Number of layers, leaf layer and root layer included."""
        return len(self._layers)

    @property
    def leaves(self) -> List[bytes]:
        """Copy of the leaf hashes (layer 0)."""
        return list(self._layers[0])

    @property
    def layers(self) -> List[List[bytes]]:
        """Copy of every layer, bottom to top."""
        return [list(layer) for layer in self._layers]

    def _build_tree(self) -> None:
        """
        Rebuild every layer above layer 0.

        Layers above the leaves are a pure function of layer 0, so they are
        always recomputed from scratch.
        """
        start = time.perf_counter()

        layers = [self._layers[0]]
        current_level = self._layers[0]

        while len(current_level) > 1:
            next_level = []
            for i in range(0, len(current_level), 2):
                if i + 1 < len(current_level):
                    next_level.append(hash_pair(current_level[i], current_level[i + 1]))
                else:
                    # Odd node is carried upward unchanged
                    next_level.append(current_level[i])
            layers.append(next_level)
            current_level = next_level

        self._layers = layers

        log_tree_build(
            logger,
            leaf_count=self.leaf_count,
            depth=self.depth,
            merkle_root=digest_to_hex(self.get_root()),
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def get_root(self) -> bytes:
        """
        Get the Merkle root hash.

        Returns:
            Root hash of the tree (32 bytes)
        """
        return self._layers[-1][0]

    def get_root_hex(self) -> str:
        """Get the Merkle root as lowercase hex."""
        return digest_to_hex(self.get_root())

    def get_proof(self, index: int) -> List[ProofStep]:
        """
        Generate a Merkle proof for the leaf at index.

        Walks from the leaf layer up to (excluding) the root layer, collecting
        the sibling of the current node at each level. A level where the
        current node has no sibling (the promoted odd node) adds no step.

        Args:
            index: Index of the leaf (0-based)

        Returns:
            Ordered proof steps, leaf level first

        Raises:
            IndexOutOfRangeError: If index is not in [0, leaf_count)
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(
                f"Leaf index must be an integer, got {type(index).__name__}"
            )
        if index < 0 or index >= self.leaf_count:
            raise IndexOutOfRangeError(
                f"Leaf index {index} out of range [0, {self.leaf_count})"
            )

        proof = []
        current_index = index

        for layer in self._layers[:-1]:
            if current_index % 2 == 0:
                sibling_index = current_index + 1
            else:
                sibling_index = current_index - 1

            if sibling_index < len(layer):
                proof.append(ProofStep(layer[sibling_index], current_index % 2 == 1))

            current_index //= 2

        return proof

    @staticmethod
    def verify_proof(
        root: DigestLike,
        leaf: LeafValue,
        proof: Sequence,
        encoding: str = DEFAULT_TEXT_ENCODING,
    ) -> bool:
        """
        Verify a Merkle proof.

        Recomputes the root from the leaf value and the proof steps, then
        compares it with the claimed root. Digests may be raw bytes or hex.

        This never raises: a malformed, mismatched or adversarial proof
        yields False.

        Args:
            root: Claimed root hash
            leaf: Original leaf value (will be hashed)
            proof: Sequence of (sibling, is_left) pairs
            encoding: Codec used for a text leaf

        Returns:
            True if the recomputed root equals the claimed root
        """
        steps = 0
        try:
            expected_root = coerce_digest(root)
            current_hash = hash_leaf(leaf, encoding)
            logger.debug("proof_leaf_hash", leaf_hash=digest_to_hex(current_hash))

            for step in proof:
                sibling, is_left = step
                if not isinstance(is_left, bool):
                    log_proof_verification(
                        logger, success=False, proof_length=steps,
                        failure_reason="non-boolean direction",
                    )
                    return False
                sibling = coerce_digest(sibling)

                if is_left:
                    current_hash = hash_pair(sibling, current_hash)
                else:
                    current_hash = hash_pair(current_hash, sibling)
                steps += 1

                logger.debug(
                    "proof_step",
                    sibling=digest_to_hex(sibling),
                    is_left=is_left,
                    current_hash=digest_to_hex(current_hash),
                )
        except (HashTreeError, TypeError, ValueError, LookupError) as e:
            log_proof_verification(
                logger, success=False, proof_length=steps,
                failure_reason=f"malformed input: {e}",
            )
            return False

        result = current_hash == expected_root
        log_proof_verification(
            logger,
            success=result,
            proof_length=steps,
            failure_reason=None if result else "root mismatch",
            computed_root=digest_to_hex(current_hash),
            expected_root=digest_to_hex(expected_root),
        )
        return result

    def add_leaf(self, leaf: LeafValue) -> None:
        """
        Append a leaf and rebuild the tree.

        Every layer above layer 0 is recomputed, so proofs generated before
        the append are generally invalid against the new root.

        Args:
            leaf: Leaf value (bytes or str)

        Raises:
            InvalidLeafError: If leaf is neither bytes nor str
        """
        leaf_hash = hash_leaf(leaf, self.encoding)
        self._layers = [self._layers[0] + [leaf_hash]]
        self._build_tree()
