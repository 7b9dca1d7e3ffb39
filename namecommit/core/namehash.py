"""
Recursive hashing of dotted identifiers (namehash).

``namehash("alice.eth")`` is computed as::

    node = 0x00 * 32
    node = keccak256(node || keccak256("eth"))
    node = keccak256(node || keccak256("alice"))

Input is hashed byte-exact as UTF-8. Callers that need case folding or
Unicode normalisation must apply it before calling :func:`namehash`.
Lone surrogates (for example from undecodable command line bytes) are
encoded with ``surrogatepass`` so that every ``str`` has a namehash.
"""

from typing import List

from namecommit.core.digest import ZERO_DIGEST, Digest
from namecommit.core.hashing import keccak256

LABEL_SEPARATOR = "."


def split_labels(identifier: str) -> List[str]:
    """Return the labels of ``identifier``, top-level label first.

    The empty identifier has no labels. Empty labels produced by leading,
    trailing or repeated dots are kept.
    """
    if not identifier:
        return []
    labels = identifier.split(LABEL_SEPARATOR)
    labels.reverse()
    return labels


def labelhash(label: str) -> Digest:
    """Hash a single label."""
    return keccak256(label.encode("utf-8", "surrogatepass"))


def namehash(identifier: str) -> Digest:
    """Compute the namehash of a dotted identifier.

    Any string is accepted. The empty identifier maps to the all-zero digest,
    and an empty label is hashed as an empty byte string.
    """
    node = ZERO_DIGEST
    for label in split_labels(identifier):
        node = keccak256(node.value, labelhash(label).value)
    return node
