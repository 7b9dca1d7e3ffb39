"""
Fixed-size digest value type.

Every hash produced by the engine (label hashes, namehashes, Merkle nodes and
roots) is a :class:`Digest`: an immutable, totally ordered wrapper around
exactly 32 bytes.
"""

from dataclasses import dataclass
from typing import Union

from namecommit.core.errors import InvalidDigestLengthError

DIGEST_SIZE = 32

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True, order=True)
class Digest:
    """A 32-byte digest.

    Instances compare and sort by their raw bytes, so they can be used as
    dictionary keys or sorted for deterministic storage.
    """

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Digest expects a bytes-like value, got {type(self.value).__name__}")
        raw = bytes(self.value)
        if len(raw) != DIGEST_SIZE:
            raise InvalidDigestLengthError(len(raw), DIGEST_SIZE)
        object.__setattr__(self, "value", raw)

    @classmethod
    def from_hex(cls, text: str) -> "Digest":
        """Parse a 64-character hex string, with or without a ``0x`` prefix."""
        if text[:2].lower() == "0x":
            text = text[2:]
        try:
            raw = bytes.fromhex(text)
        except ValueError as e:
            raise ValueError(f"Invalid hex digest: {e}") from e
        return cls(raw)

    @classmethod
    def zero(cls) -> "Digest":
        """The all-zero digest, the namehash of the empty identifier."""
        return cls(bytes(DIGEST_SIZE))

    def hex(self) -> str:
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return DIGEST_SIZE

    def __str__(self) -> str:
        return self.value.hex()

    def __repr__(self) -> str:
        return f"Digest('{self.value.hex()}')"


ZERO_DIGEST = Digest.zero()
