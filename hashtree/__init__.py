"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Hashtree - Merkle tree commitments with membership proofs.

Hashtree builds a binary hash tree over an ordered list of items, producing a
single root digest, and generates and verifies succinct inclusion proofs.
"""

from hashtree._version import __version__
from hashtree.merkle import HashTree, ProofStep

__all__ = ["__version__", "HashTree", "ProofStep"]
