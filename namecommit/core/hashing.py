"""
Keccak-256 hash primitive.

This is the original Keccak padding used by Ethereum, not NIST SHA3-256
(``hashlib.sha3_256``); the two give different outputs for the same input.
"""

from typing import Callable

from Crypto.Hash import keccak

from namecommit.core.digest import BytesLike, Digest
from namecommit.core.errors import HasherFinalizedError

# Combines a left and a right child into their parent node
NodeHasher = Callable[[Digest, Digest], Digest]


class Keccak256:
    """Streaming Keccak-256 accumulator.

    Feed input with :meth:`update` as many times as needed, then call
    :meth:`finalize` once. A finalized accumulator cannot be reused.
    """

    def __init__(self, data: BytesLike = b""):
        self._engine = keccak.new(digest_bits=256)
        self._finalized = False
        if data:
            self.update(data)

    def update(self, data: BytesLike) -> "Keccak256":
        """Absorb more input."""
        if self._finalized:
            raise HasherFinalizedError("Keccak256 accumulator already finalized")
        self._engine.update(bytes(data))
        return self

    def finalize(self) -> Digest:
        """Return the digest of all absorbed input."""
        if self._finalized:
            raise HasherFinalizedError("Keccak256 accumulator already finalized")
        self._finalized = True
        return Digest(self._engine.digest())

    @property
    def finalized(self) -> bool:
        return self._finalized


def keccak256(*chunks: BytesLike) -> Digest:
    """One-shot Keccak-256 over the concatenation of ``chunks``."""
    hasher = Keccak256()
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.finalize()


def hash_pair(left: Digest, right: Digest) -> Digest:
    """Hash an internal Merkle node: ``keccak256(left || right)``."""
    return keccak256(left.value, right.value)
