"""Exception hierarchy for the commitment engine."""


class NamecommitError(Exception):
    """Base class for all errors raised by namecommit."""

    pass


class InvalidDigestLengthError(NamecommitError, ValueError):
    """Raised when a digest is built from a byte string that is not 32 bytes."""

    def __init__(self, length: int, expected: int = 32):
        super().__init__(f"Digest must be exactly {expected} bytes, got {length}")
        self.length = length
        self.expected = expected


class EmptyBatchError(NamecommitError, ValueError):
    """Raised when a Merkle tree is requested for zero leaves."""

    pass


# Older name kept for callers that use the builder's contract wording
EmptyInputError = EmptyBatchError


class IndexOutOfRangeError(NamecommitError, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(self, index, size: int):
        super().__init__(f"Leaf index {index!r} is out of range for a tree of {size} leaves")
        self.index = index
        self.size = size


class ProofFormatError(NamecommitError, ValueError):
    """Raised when a serialized proof cannot be decoded."""

    pass


class HasherFinalizedError(NamecommitError, RuntimeError):
    """Raised when a Keccak-256 accumulator is used after finalize()."""

    pass
