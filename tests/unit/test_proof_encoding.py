"""
Unit tests for proof serialization.
"""

import json

import pytest

from hashtree.exceptions import InvalidProofFormatError
from hashtree.merkle.proof import ProofStep, proof_from_dict, proof_to_dict
from hashtree.merkle.tree import HashTree


class TestProofToDict:
    """Test building the JSON-ready proof representation."""

    def test_layout(self, abcd_leaves):
        tree = HashTree(abcd_leaves)
        proof = tree.get_proof(2)

        data = proof_to_dict(proof, root=tree.get_root(), leaf_index=2)

        assert data["root"] == tree.get_root_hex()
        assert data["leaf_index"] == 2
        assert data["steps"] == [
            {"sibling": proof[0].sibling.hex(), "is_left": False},
            {"sibling": proof[1].sibling.hex(), "is_left": True},
        ]

    def test_optional_fields_omitted(self):
        assert proof_to_dict([]) == {"steps": []}

    def test_survives_json_and_verifies(self, abcd_leaves):
        tree = HashTree(abcd_leaves)
        text = json.dumps(proof_to_dict(tree.get_proof(1), root=tree.get_root()))

        proof = proof_from_dict(json.loads(text))

        assert proof == tree.get_proof(1)
        assert all(isinstance(step, ProofStep) for step in proof)
        assert HashTree.verify_proof(tree.get_root(), "b", proof)


class TestProofFromDict:
    """Test parsing proofs."""

    def test_bare_list_of_steps(self):
        sibling = "ab" * 32
        assert proof_from_dict([{"sibling": sibling, "is_left": True}]) == [
            ProofStep(bytes.fromhex(sibling), True)
        ]

    @pytest.mark.parametrize(
        "data, message",
        [
            ({}, "list of steps"),
            ("steps", "list of steps"),
            ({"steps": [["ab", True]]}, "exactly 'sibling' and 'is_left'"),
            ({"steps": [{"sibling": "ab" * 32}]}, "exactly 'sibling' and 'is_left'"),
            ({"steps": [{"sibling": "ab" * 32, "is_left": True, "x": 1}]}, "exactly"),
            ({"steps": [{"sibling": "ab" * 32, "is_left": "true"}]}, "must be a boolean"),
            ({"steps": [{"sibling": "xyz", "is_left": True}]}, "Step 0"),
            ({"steps": [{"sibling": "ab" * 31, "is_left": True}]}, "32 bytes"),
        ],
    )
    def test_malformed(self, data, message):
        with pytest.raises(InvalidProofFormatError, match=message):
            proof_from_dict(data)
