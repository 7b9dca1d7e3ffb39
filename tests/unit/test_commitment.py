"""Unit tests for batch commitments and their JSON models."""

import pytest
from pydantic import ValidationError

from namecommit.core import (
    EmptyBatchError,
    MerkleProofModel,
    ProofStepModel,
    Side,
    build,
    commit_digests,
    commit_identifiers,
    namehash,
    verify,
)

NAMES = ["alice.eth", "bob.eth", "carol.eth", "dave.eth", "erin.eth"]


def test_commit_identifiers_matches_manual_build() -> None:
    commitment = commit_identifiers(NAMES)
    assert commitment.root == build([namehash(name) for name in NAMES]).root
    assert commitment.size == len(NAMES)
    assert commitment.identifiers == tuple(NAMES)


def test_every_identifier_has_a_verifying_proof() -> None:
    commitment = commit_identifiers(NAMES)
    for name in NAMES:
        proof = commitment.proof_for(namehash(name))
        assert verify(proof, namehash(name), commitment.root)


def test_unknown_digest_has_no_proof() -> None:
    commitment = commit_identifiers(NAMES)
    with pytest.raises(KeyError):
        commitment.proof_for(namehash("mallory.eth"))


def test_empty_batch() -> None:
    with pytest.raises(EmptyBatchError):
        commit_identifiers([])


def test_records_carry_domain_hash_and_path() -> None:
    commitment = commit_identifiers(NAMES)
    records = commitment.records()
    assert [record.domain for record in records] == NAMES
    assert records[1].hash == namehash("bob.eth").hex()
    assert records[1].index == 1
    assert records[4].path[0].side is Side.NONE
    assert records[4].path[0].hash is None


def test_digest_batch_records_use_hex_domain() -> None:
    leaves = [namehash(name) for name in NAMES[:2]]
    records = commit_digests(leaves).records()
    assert records[0].domain == leaves[0].hex()


def test_proof_model_round_trip_through_json() -> None:
    commitment = commit_identifiers(NAMES)
    model = commitment.proof_model(4)
    restored = MerkleProofModel.model_validate_json(model.model_dump_json())
    assert restored.root_digest == commitment.root
    assert restored.to_proof() == commitment.proofs[4]
    assert restored.model_dump(mode="json")["path"][0] == {"hash": None, "side": "none"}


def test_proof_step_model_validation() -> None:
    with pytest.raises(ValidationError):
        ProofStepModel(hash=None, side="left")
    with pytest.raises(ValidationError):
        ProofStepModel(hash=namehash("eth").hex(), side="none")
    with pytest.raises(ValidationError):
        ProofStepModel(hash="1234", side="right")


def test_proof_model_rejects_negative_index() -> None:
    root = namehash("eth").hex()
    with pytest.raises(ValidationError):
        MerkleProofModel(leaf_index=-1, leaf=root, root=root, path=[])


def test_proof_model_accepts_uppercase_hex() -> None:
    """Hex fields are case-insensitive and stored lowercase."""
    commitment = commit_identifiers(NAMES)
    data = commitment.proof_model(1).model_dump(mode="json")
    data["root"] = "0X" + data["root"].upper()
    data["leaf"] = data["leaf"].upper()
    data["path"][0]["hash"] = data["path"][0]["hash"].upper()
    model = MerkleProofModel(**data)
    assert model.leaf == namehash("bob.eth").hex()
    assert model.root_digest == commitment.root
    assert verify(model.to_proof(), namehash("bob.eth"), model.root_digest)
