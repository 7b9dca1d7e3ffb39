"""
Core functionality for namecommit.

This package contains the digest type, the Keccak-256 primitive, namehash,
the Merkle tree builder and the proof generation and verification logic.
"""

from .commitment import BatchCommitment, commit_digests, commit_identifiers
from .digest import DIGEST_SIZE, ZERO_DIGEST, Digest
from .errors import (
    EmptyBatchError,
    EmptyInputError,
    HasherFinalizedError,
    IndexOutOfRangeError,
    InvalidDigestLengthError,
    NamecommitError,
    ProofFormatError,
)
from .hashing import Keccak256, NodeHasher, hash_pair, keccak256
from .merkle import MerkleProof, MerkleTree, ProofStep, Side, build, prove, verify
from .models import IdentifierRecord, MerkleProofModel, ProofStepModel
from .namehash import labelhash, namehash, split_labels

__all__ = [
    'BatchCommitment', 'commit_digests', 'commit_identifiers',
    'DIGEST_SIZE', 'ZERO_DIGEST', 'Digest',
    'EmptyBatchError', 'EmptyInputError', 'HasherFinalizedError', 'IndexOutOfRangeError',
    'InvalidDigestLengthError', 'NamecommitError', 'ProofFormatError',
    'Keccak256', 'NodeHasher', 'hash_pair', 'keccak256',
    'MerkleProof', 'MerkleTree', 'ProofStep', 'Side', 'build', 'prove', 'verify',
    'IdentifierRecord', 'MerkleProofModel', 'ProofStepModel',
    'labelhash', 'namehash', 'split_labels',
]
