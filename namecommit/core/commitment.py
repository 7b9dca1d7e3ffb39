"""
Batch commitment of identifiers.

Takes an ordered batch of identifiers (or their digests), builds one Merkle
tree over them and hands back the root to publish along with a proof for
every leaf.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from namecommit.core.digest import Digest
from namecommit.core.hashing import NodeHasher, hash_pair
from namecommit.core.merkle import MerkleProof, MerkleTree
from namecommit.core.models import IdentifierRecord, MerkleProofModel, ProofStepModel
from namecommit.core.namehash import namehash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchCommitment:
    """The result of committing a batch: a tree, its root and per-leaf proofs."""
    tree: MerkleTree
    proofs: Tuple[MerkleProof, ...]
    identifiers: Optional[Tuple[str, ...]] = None

    @property
    def root(self) -> Digest:
        return self.tree.root

    @property
    def size(self) -> int:
        return self.tree.size

    def proof_for(self, digest: Digest) -> MerkleProof:
        """Return the proof for the first leaf equal to ``digest``."""
        for proof in self.proofs:
            if proof.leaf == digest:
                return proof
        raise KeyError(digest.hex())

    def proof_model(self, index: int) -> MerkleProofModel:
        """The proof for leaf ``index`` as a JSON model bound to this root."""
        return MerkleProofModel.from_proof(self.proofs[index], self.root)

    def records(self) -> List[IdentifierRecord]:
        """One record per leaf, in batch order."""
        records = []
        for position, proof in enumerate(self.proofs):
            domain = self.identifiers[position] if self.identifiers is not None else proof.leaf.hex()
            records.append(IdentifierRecord(
                domain=domain,
                hash=proof.leaf.hex(),
                index=proof.leaf_index,
                path=[ProofStepModel.from_step(step) for step in proof.steps],
            ))
        return records


def commit_digests(
    digests: Iterable[Digest],
    node_hash: NodeHasher = hash_pair,
    workers: Optional[int] = None,
) -> BatchCommitment:
    """Commit an ordered batch of digests.

    Raises:
        EmptyBatchError: If ``digests`` is empty.
    """
    tree = MerkleTree.build(digests, node_hash=node_hash, workers=workers)
    proofs = tuple(tree.prove(index) for index in range(tree.size))
    return BatchCommitment(tree=tree, proofs=proofs)


def commit_identifiers(
    identifiers: Iterable[str],
    node_hash: NodeHasher = hash_pair,
    workers: Optional[int] = None,
) -> BatchCommitment:
    """Namehash each identifier, then commit the digests in the same order."""
    names = tuple(identifiers)
    logger.debug("Committing batch of %d identifiers", len(names))
    commitment = commit_digests((namehash(name) for name in names), node_hash=node_hash, workers=workers)
    return BatchCommitment(tree=commitment.tree, proofs=commitment.proofs, identifiers=names)
