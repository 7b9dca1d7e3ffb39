"""Unit tests for namehash."""

from hypothesis import given, strategies as st

from namecommit.core import ZERO_DIGEST, Digest, keccak256, labelhash, namehash, split_labels

ETH = "93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
ALICE_ETH = "787192fc5378cc32aa956ddfdedbf26b24e8d78e40109add0eea2c1a012c3dec"

labels = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=10)
identifiers = st.lists(labels, min_size=1, max_size=4).map(".".join)


def test_namehash_eth() -> None:
    assert namehash("eth").hex() == ETH


def test_namehash_alice_eth() -> None:
    assert namehash("alice.eth").hex() == ALICE_ETH


def test_namehash_folds_from_top_level_label() -> None:
    """Each label is folded onto its parent's node."""
    parent = namehash("eth")
    assert namehash("alice.eth") == keccak256(parent.value, labelhash("alice").value)
    assert namehash("eth") == keccak256(ZERO_DIGEST.value, keccak256(b"eth").value)


def test_empty_identifier_is_zero_digest() -> None:
    assert split_labels("") == []
    assert namehash("") == ZERO_DIGEST


def test_empty_labels_are_hashed_as_empty_bytes() -> None:
    """Leading, trailing and doubled dots produce empty labels, not errors."""
    empty = labelhash("")
    assert empty == keccak256(b"")
    assert split_labels("a..b") == ["b", "", "a"]
    assert namehash(".") == keccak256(keccak256(ZERO_DIGEST.value, empty.value).value, empty.value)
    assert namehash("eth.") == keccak256(keccak256(ZERO_DIGEST.value, empty.value).value, labelhash("eth").value)
    assert len({namehash("a.b"), namehash("a..b"), namehash(".a.b"), namehash("a.b.")}) == 4


def test_no_normalisation() -> None:
    """Case and Unicode form are hashed byte-exact."""
    assert namehash("Alice.eth") != namehash("alice.eth")
    assert namehash("caf\u00e9.eth") != namehash("cafe\u0301.eth")
    assert labelhash("caf\u00e9") == keccak256(b"caf\xc3\xa9")


def test_namehash_is_deterministic() -> None:
    assert namehash("sub.alice.eth") == namehash("sub.alice.eth")


@given(st.sets(identifiers, min_size=2, max_size=30))
def test_distinct_identifiers_have_distinct_namehashes(names) -> None:
    """Different identifiers never collide."""
    assert len({namehash(name) for name in names}) == len(names)


def test_lone_surrogates_are_hashed() -> None:
    """Strings carrying undecodable bytes still get a namehash."""
    digest = namehash("\udcff.eth")
    assert isinstance(digest, Digest)
    assert digest == keccak256(namehash("eth").value, keccak256(b"\xed\xb3\xbf").value)
    assert namehash("\ud800") != namehash("\udcff")


@given(st.text(min_size=0, max_size=20))
def test_any_string_has_a_namehash(identifier) -> None:
    assert isinstance(namehash(identifier), Digest)
