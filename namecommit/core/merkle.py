"""
Binary Merkle tree over 32-byte digests, with inclusion proofs.

The tree is built left to right over the leaves in the order given. Adjacent
pairs at positions ``2i`` and ``2i + 1`` are combined with a node hasher
(``keccak256(left || right)`` by default). When a level has an odd number of
nodes, the last node is promoted unchanged to the next level; it is never
duplicated. A single leaf is its own root.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from namecommit.core.digest import DIGEST_SIZE, Digest
from namecommit.core.errors import EmptyBatchError, IndexOutOfRangeError, ProofFormatError
from namecommit.core.hashing import NodeHasher, hash_pair

logger = logging.getLogger(__name__)

# Levels with fewer pairs than this are always hashed on the calling thread
PARALLEL_THRESHOLD = 1024

# Binary proof layout
INDEX_SIZE = 8
STEP_SIZE = 1 + DIGEST_SIZE


class Side(str, Enum):
    """Position of a proof sibling relative to the node being proven."""
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


_SIDE_TO_FLAG = {Side.LEFT: 0x00, Side.RIGHT: 0x01, Side.NONE: 0xFF}
_FLAG_TO_SIDE = {flag: side for side, flag in _SIDE_TO_FLAG.items()}


@dataclass(frozen=True)
class ProofStep:
    """One level of an authentication path.

    ``sibling`` is ``None`` exactly when ``side`` is :attr:`Side.NONE`, which
    marks a level where the node was promoted without a sibling.
    """
    sibling: Optional[Digest]
    side: Side

    @classmethod
    def promoted(cls) -> "ProofStep":
        return cls(sibling=None, side=Side.NONE)


@dataclass(frozen=True)
class MerkleProof:
    """Inclusion proof for a single leaf."""
    leaf_index: int
    leaf: Digest
    steps: Tuple[ProofStep, ...]

    def verify(self, root: Digest, node_hash: NodeHasher = hash_pair) -> bool:
        """Check this proof's own leaf against ``root``."""
        return verify(self, self.leaf, root, node_hash=node_hash)

    @property
    def siblings(self) -> List[Digest]:
        """The sibling digests, skipping promoted levels."""
        return [step.sibling for step in self.steps if step.sibling is not None]

    def to_bytes(self) -> bytes:
        """Serialize as ``index || leaf || (flag || digest)*``."""
        out = bytearray(self.leaf_index.to_bytes(INDEX_SIZE, "big"))
        out += self.leaf.value
        for step in self.steps:
            out.append(_SIDE_TO_FLAG[step.side])
            out += step.sibling.value if step.sibling is not None else bytes(DIGEST_SIZE)
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MerkleProof":
        """Decode a proof produced by :meth:`to_bytes`."""
        header = INDEX_SIZE + DIGEST_SIZE
        if len(data) < header:
            raise ProofFormatError(f"Proof too short: {len(data)} bytes, need at least {header}")
        body = data[header:]
        if len(body) % STEP_SIZE:
            raise ProofFormatError(f"Proof step area of {len(body)} bytes is not a multiple of {STEP_SIZE}")

        leaf_index = int.from_bytes(data[:INDEX_SIZE], "big")
        leaf = Digest(data[INDEX_SIZE:header])
        steps = []
        for offset in range(0, len(body), STEP_SIZE):
            flag = body[offset]
            raw = body[offset + 1:offset + STEP_SIZE]
            side = _FLAG_TO_SIDE.get(flag)
            if side is None:
                raise ProofFormatError(f"Unknown proof step flag 0x{flag:02x}")
            if side is Side.NONE:
                if any(raw):
                    raise ProofFormatError("Promoted proof step must carry an all-zero digest")
                steps.append(ProofStep.promoted())
            else:
                steps.append(ProofStep(sibling=Digest(raw), side=side))
        return cls(leaf_index=leaf_index, leaf=leaf, steps=tuple(steps))


class MerkleTree:
    """
    An immutable binary Merkle tree.

    Every level is retained, from the leaves (``levels[0]``) to the root
    (``levels[-1]``), so proofs are read off the tree without rehashing.
    Any change to the leaf set requires building a new tree.
    """

    def __init__(
        self,
        leaves: Iterable[Digest],
        node_hash: NodeHasher = hash_pair,
        workers: Optional[int] = None,
    ):
        """
        Build a tree from ``leaves`` in the given order.

        Args:
            leaves: The leaf digests. Order is significant.
            node_hash: Combiner for internal nodes.
            workers: If greater than one, large levels are hashed on a thread
                pool of this size. The root is the same either way.

        Raises:
            EmptyBatchError: If ``leaves`` is empty.
            TypeError: If a leaf is not a :class:`Digest`.
        """
        current = list(leaves)
        if not current:
            raise EmptyBatchError("Cannot build a Merkle tree from an empty batch")
        for position, leaf in enumerate(current):
            if not isinstance(leaf, Digest):
                raise TypeError(f"Leaf {position} is {type(leaf).__name__}, expected Digest")

        levels = [current]
        if workers is not None and workers > 1 and len(current) // 2 >= PARALLEL_THRESHOLD:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                while len(current) > 1:
                    current = _next_level(current, node_hash, pool, workers)
                    levels.append(current)
        else:
            while len(current) > 1:
                current = _next_level(current, node_hash)
                levels.append(current)

        logger.debug("Built Merkle tree with %d leaves and %d levels, root %s",
                     len(levels[0]), len(levels), current[0].hex())
        self._levels: Tuple[Tuple[Digest, ...], ...] = tuple(tuple(level) for level in levels)

    @classmethod
    def build(
        cls,
        leaves: Iterable[Digest],
        node_hash: NodeHasher = hash_pair,
        workers: Optional[int] = None,
    ) -> "MerkleTree":
        """Build a tree from ``leaves``; same as calling the constructor."""
        return cls(leaves, node_hash=node_hash, workers=workers)

    @property
    def root(self) -> Digest:
        return self._levels[-1][0]

    @property
    def leaves(self) -> Tuple[Digest, ...]:
        return self._levels[0]

    @property
    def levels(self) -> Tuple[Tuple[Digest, ...], ...]:
        return self._levels

    @property
    def size(self) -> int:
        """Number of leaves."""
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels above the leaves."""
        return len(self._levels) - 1

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._levels == other._levels

    def __hash__(self) -> int:
        return hash(self._levels)

    def __repr__(self) -> str:
        return f"MerkleTree(size={self.size}, root={self.root.hex()})"

    def prove(self, leaf_index: int) -> MerkleProof:
        """
        Generate the inclusion proof for the leaf at ``leaf_index``.

        Raises:
            IndexOutOfRangeError: If ``leaf_index`` is not in ``[0, size)``.
        """
        if isinstance(leaf_index, bool) or not isinstance(leaf_index, int):
            raise IndexOutOfRangeError(leaf_index, self.size)
        if leaf_index < 0 or leaf_index >= self.size:
            raise IndexOutOfRangeError(leaf_index, self.size)

        steps = []
        index = leaf_index
        for level in self._levels[:-1]:
            sibling_index = index ^ 1
            if sibling_index < len(level):
                side = Side.LEFT if index % 2 else Side.RIGHT
                steps.append(ProofStep(sibling=level[sibling_index], side=side))
            else:
                # Last node of an odd level, carried up as is
                steps.append(ProofStep.promoted())
            index //= 2

        return MerkleProof(leaf_index=leaf_index, leaf=self.leaves[leaf_index], steps=tuple(steps))


def _hash_slice(level: List[Digest], start: int, stop: int, node_hash: NodeHasher) -> List[Digest]:
    return [node_hash(level[i], level[i + 1]) for i in range(start, stop, 2)]


def _next_level(
    level: List[Digest],
    node_hash: NodeHasher,
    pool: Optional[ThreadPoolExecutor] = None,
    workers: int = 1,
) -> List[Digest]:
    """Combine adjacent pairs of ``level``, promoting an unpaired last node."""
    paired = len(level) - len(level) % 2

    if pool is None or paired // 2 < PARALLEL_THRESHOLD:
        parents = _hash_slice(level, 0, paired, node_hash)
    else:
        chunk = max(2, (paired // workers) & ~1)
        bounds = [(start, min(start + chunk, paired)) for start in range(0, paired, chunk)]
        parents = []
        for part in pool.map(lambda b: _hash_slice(level, b[0], b[1], node_hash), bounds):
            parents.extend(part)

    if paired < len(level):
        parents.append(level[-1])
    return parents


def build(
    leaves: Iterable[Digest],
    node_hash: NodeHasher = hash_pair,
    workers: Optional[int] = None,
) -> MerkleTree:
    """Build a :class:`MerkleTree`; see :meth:`MerkleTree.build`."""
    return MerkleTree.build(leaves, node_hash=node_hash, workers=workers)


def prove(tree: MerkleTree, leaf_index: int) -> MerkleProof:
    """Generate the inclusion proof for one leaf of ``tree``."""
    return tree.prove(leaf_index)


def verify(proof: MerkleProof, leaf: Digest, root: Digest, node_hash: NodeHasher = hash_pair) -> bool:
    """
    Verify that ``leaf`` is included under ``root``.

    The leaf is folded upward through the proof's steps. Returns ``True`` only
    if the result equals ``root``; a malformed or foreign proof yields
    ``False`` rather than an exception.
    """
    if not isinstance(leaf, Digest) or not isinstance(root, Digest):
        return False
    try:
        current = leaf
        for step in proof.steps:
            if step.side is Side.NONE:
                if step.sibling is not None:
                    return False
                continue
            if not isinstance(step.sibling, Digest):
                return False
            if step.side is Side.LEFT:
                current = node_hash(step.sibling, current)
            elif step.side is Side.RIGHT:
                current = node_hash(current, step.sibling)
            else:
                return False
    except (AttributeError, TypeError):
        return False
    return current == root
