"""JSON models for handing digests and proofs to collaborators."""

from typing import List, Optional

from pydantic import BaseModel, Field, StringConstraints, model_validator
from typing_extensions import Annotated

from namecommit.core.digest import Digest
from namecommit.core.merkle import MerkleProof, ProofStep, Side

# Type aliases
HexDigest = Annotated[str, StringConstraints(to_lower=True, pattern=r'^(0[xX])?[a-fA-F0-9]{64}$')]


class ProofStepModel(BaseModel):
    """One level of an authentication path."""
    hash: Optional[HexDigest] = Field(
        None,
        description="Hex-encoded sibling digest, or null when the node was promoted."
    )
    side: Side = Field(
        ...,
        description="Side of the sibling relative to the running node."
    )

    @model_validator(mode="after")
    def check_sibling_marker(self) -> "ProofStepModel":
        """A sibling hash is present exactly when the side is not 'none'."""
        if (self.side is Side.NONE) != (self.hash is None):
            raise ValueError("hash must be null if and only if side is 'none'")
        return self

    @classmethod
    def from_step(cls, step: ProofStep) -> "ProofStepModel":
        return cls(hash=step.sibling.hex() if step.sibling is not None else None, side=step.side)

    def to_step(self) -> ProofStep:
        if self.hash is None:
            return ProofStep.promoted()
        return ProofStep(sibling=Digest.from_hex(self.hash), side=self.side)


class MerkleProofModel(BaseModel):
    """A Merkle inclusion proof together with the root it was derived from."""
    leaf_index: int = Field(
        ...,
        ge=0,
        description="Index of the leaf in the committed batch."
    )
    leaf: HexDigest = Field(
        ...,
        description="Hex-encoded leaf digest."
    )
    root: HexDigest = Field(
        ...,
        description="Hex-encoded root the proof reconciles to."
    )
    path: List[ProofStepModel] = Field(
        default_factory=list,
        description="Authentication path from the leaf level up to the root."
    )

    @classmethod
    def from_proof(cls, proof: MerkleProof, root: Digest) -> "MerkleProofModel":
        return cls(
            leaf_index=proof.leaf_index,
            leaf=proof.leaf.hex(),
            root=root.hex(),
            path=[ProofStepModel.from_step(step) for step in proof.steps],
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            leaf_index=self.leaf_index,
            leaf=Digest.from_hex(self.leaf),
            steps=tuple(step.to_step() for step in self.path),
        )

    @property
    def root_digest(self) -> Digest:
        return Digest.from_hex(self.root)


class IdentifierRecord(BaseModel):
    """A committed identifier: its name, namehash, and inclusion path."""
    domain: str = Field(
        ...,
        description="The identifier as supplied, e.g. 'alice.eth'."
    )
    hash: HexDigest = Field(
        ...,
        description="Hex-encoded namehash of the identifier."
    )
    index: int = Field(
        ...,
        ge=0,
        description="Position of the leaf in the committed batch."
    )
    path: List[ProofStepModel] = Field(
        default_factory=list,
        description="Authentication path for the leaf."
    )
