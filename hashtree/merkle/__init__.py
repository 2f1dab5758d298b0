"""
Merkle tree implementation for data-integrity commitments.

This module provides Merkle tree construction, proof generation, and proof
verification over an ordered list of leaf values.
"""

from hashtree.merkle.encoding import coerce_digest, digest_from_hex, digest_to_hex
from hashtree.merkle.hashing import DIGEST_SIZE, hash_leaf, hash_pair, sha256
from hashtree.merkle.proof import ProofStep, proof_from_dict, proof_to_dict
from hashtree.merkle.tree import HashTree

__all__ = [
    "DIGEST_SIZE",
    "HashTree",
    "ProofStep",
    "coerce_digest",
    "digest_from_hex",
    "digest_to_hex",
    "hash_leaf",
    "hash_pair",
    "proof_from_dict",
    "proof_to_dict",
    "sha256",
]
