"""Unit tests for the Digest value type."""

import pytest

from namecommit.core import DIGEST_SIZE, ZERO_DIGEST, Digest, InvalidDigestLengthError


def test_digest_round_trips_raw_bytes() -> None:
    """A digest keeps its 32 bytes unchanged."""
    raw = bytes(range(32))
    digest = Digest(raw)
    assert bytes(digest) == raw
    assert digest.value == raw
    assert len(digest) == DIGEST_SIZE


@pytest.mark.parametrize("length", [0, 1, 31, 33, 64])
def test_wrong_length_is_rejected(length: int) -> None:
    """Anything other than 32 bytes fails, with no truncation or padding."""
    with pytest.raises(InvalidDigestLengthError) as excinfo:
        Digest(b"\x01" * length)
    assert excinfo.value.length == length
    assert isinstance(excinfo.value, ValueError)


def test_bytearray_input_is_frozen_to_bytes() -> None:
    """Mutable input is copied, so later mutation does not leak in."""
    buf = bytearray(32)
    digest = Digest(buf)
    buf[0] = 0xFF
    assert digest.value == bytes(32)
    assert isinstance(digest.value, bytes)


def test_non_bytes_input_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        Digest("00" * 32)


def test_hex_conversion() -> None:
    """Hex parsing accepts an optional 0x prefix."""
    text = "93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
    digest = Digest.from_hex(text)
    assert digest.hex() == text
    assert str(digest) == text
    assert Digest.from_hex("0x" + text) == digest
    with pytest.raises(InvalidDigestLengthError):
        Digest.from_hex(text[:-2])
    with pytest.raises(ValueError):
        Digest.from_hex("zz" * 32)


def test_ordering_and_hashing() -> None:
    """Digests are totally ordered by their bytes and usable as dict keys."""
    low = Digest(b"\x00" * 31 + b"\x01")
    high = Digest(b"\x01" + b"\x00" * 31)
    assert low < high
    assert sorted([high, ZERO_DIGEST, low]) == [ZERO_DIGEST, low, high]
    assert {low: "a"}[Digest(bytes(low))] == "a"


def test_zero_digest() -> None:
    assert ZERO_DIGEST == Digest.zero() == Digest(bytes(32))
