"""
namecommit - content-addressed commitments for dotted identifiers.

This package hashes hierarchical identifiers such as ``alice.eth`` into
32-byte namehashes, commits batches of them into a Keccak-256 Merkle tree and
verifies per-identifier inclusion proofs against a published root.
"""

from importlib.metadata import version

# Set up version
__version__ = "0.1.0"

try:
    __version__ = version("namecommit")
except Exception:
    pass

# Core components
from namecommit.core import (
    BatchCommitment,
    Digest,
    EmptyBatchError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidDigestLengthError,
    Keccak256,
    MerkleProof,
    MerkleTree,
    NamecommitError,
    ProofFormatError,
    ProofStep,
    Side,
    build,
    commit_digests,
    commit_identifiers,
    keccak256,
    namehash,
    prove,
    verify,
)

__all__ = [
    # Core functionality
    "namehash",
    "keccak256",
    "Keccak256",
    "build",
    "prove",
    "verify",
    "commit_digests",
    "commit_identifiers",
    # Types
    "BatchCommitment",
    "Digest",
    "MerkleProof",
    "MerkleTree",
    "ProofStep",
    "Side",
    # Errors
    "NamecommitError",
    "EmptyBatchError",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "InvalidDigestLengthError",
    "ProofFormatError",
]
