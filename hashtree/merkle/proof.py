"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Merkle proof types and their JSON-ready representation.

A proof is an ordered list of ProofStep values from the leaf level upwards.
Each step holds a sibling digest and whether that sibling sits to the left of
the node being recomputed. Levels where the node was an unpaired, promoted
element contribute no step, so proof length varies between leaves of the same
tree and must not be assumed to equal ceil(log2(n)).
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from hashtree.exceptions import HashTreeError, InvalidProofFormatError
from hashtree.merkle.encoding import coerce_digest, digest_to_hex


class ProofStep(NamedTuple):
    """
    One step of a Merkle path.

    Attributes:
        sibling: Sibling digest (32 raw bytes)
        is_left: True if the sibling is the left operand of the pair hash
    """
    sibling: bytes
    is_left: bool


def proof_to_dict(
    proof: Sequence[ProofStep],
    root: Optional[bytes] = None,
    leaf_index: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build a JSON-ready dict for a proof.

    Args:
        proof: Proof steps
        root: Optional root the proof was generated against
        leaf_index: Optional index of the proven leaf

    Returns:
        Dict with hex encoded digests
    """
    data: Dict[str, Any] = {
        "steps": [
            {"sibling": digest_to_hex(step.sibling), "is_left": step.is_left}
            for step in proof
        ],
    }
    if root is not None:
        data["root"] = digest_to_hex(root)
    if leaf_index is not None:
        data["leaf_index"] = leaf_index
    return data


def proof_from_dict(data: Any) -> List[ProofStep]:
    """
    Parse proof steps from a dict produced by proof_to_dict.

    A bare list of steps is accepted as well.

    Raises:
        InvalidProofFormatError: If the structure or any digest is malformed
    """
    steps = data.get("steps") if isinstance(data, dict) else data
    if not isinstance(steps, list):
        raise InvalidProofFormatError("Proof must contain a list of steps")

    proof = []
    for position, step in enumerate(steps):
        if not isinstance(step, dict) or set(step) != {"sibling", "is_left"}:
            raise InvalidProofFormatError(
                f"Step {position} must have exactly 'sibling' and 'is_left'"
            )
        if not isinstance(step["is_left"], bool):
            raise InvalidProofFormatError(f"Step {position} 'is_left' must be a boolean")
        try:
            sibling = coerce_digest(step["sibling"])
        except HashTreeError as e:
            raise InvalidProofFormatError(f"Step {position}: {e}")
        proof.append(ProofStep(sibling, step["is_left"]))
    return proof
