"""Sorted-pair keccak Merkle tree, compatible with OpenZeppelin ``MerkleProof``.

Internal nodes hash the two children in ascending byte order, so a proof is
just the list of sibling hashes with no left/right flags.  A level with an odd
number of nodes promotes its last node unchanged to the next level; that node
contributes no proof element at that level.  This is the same tree
merkletreejs builds with ``sortPairs: true``.
"""
import logging
from typing import Iterable, List, Sequence, Union

from eth_utils import decode_hex, keccak

from .errors import EmptyInputError, LeafNotFoundError

HashLike = Union[bytes, str]

logger = logging.getLogger(__name__)


def to_bytes32(value: HashLike) -> bytes:
    """Return ``value`` as 32 bytes; hex strings may carry a 0x prefix.

    Raises ``ValueError`` for any other type or length.
    """
    if isinstance(value, str):
        value = decode_hex(value)
    elif isinstance(value, (bytes, bytearray)):
        value = bytes(value)
    else:
        raise ValueError(f"expected bytes or hex string, got: {type(value).__name__}")
    if len(value) != 32:
        raise ValueError(f"expected 32 bytes, got {len(value)}")
    return value


def hash_pair(a: bytes, b: bytes) -> bytes:
    if a < b:
        return keccak(a + b)
    else:
        return keccak(b + a)


class MerkleTree:
    def __init__(self, leaves: Iterable[HashLike], sort_leaves: bool = True):
        unique: List[bytes] = []
        seen = set()
        for leaf in leaves:
            leaf = to_bytes32(leaf)
            if leaf not in seen:
                seen.add(leaf)
                unique.append(leaf)
        if not unique:
            raise EmptyInputError()
        if sort_leaves:
            unique.sort()

        self.leaves = unique
        self._index = {leaf: i for i, leaf in enumerate(unique)}
        self.tree = self._build_tree(unique)
        logger.debug("Built tree with %d leaves, depth %d", len(unique), self.depth)

    def _build_tree(self, leaves: List[bytes]) -> List[List[bytes]]:
        tree = [leaves]
        current_level = leaves
        while len(current_level) > 1:
            next_level: List[bytes] = []
            for i in range(0, len(current_level), 2):
                if i + 1 < len(current_level):
                    next_level.append(hash_pair(current_level[i], current_level[i + 1]))
                else:
                    # Promote odd node
                    next_level.append(current_level[i])
            tree.append(next_level)
            current_level = next_level
        return tree

    @property
    def depth(self) -> int:
        return len(self.tree) - 1

    def get_root(self) -> bytes:
        return self.tree[-1][0]

    def get_hex_root(self) -> str:
        return "0x" + self.get_root().hex()

    def index_of(self, leaf: HashLike) -> int:
        leaf = to_bytes32(leaf)
        try:
            return self._index[leaf]
        except KeyError:
            raise LeafNotFoundError(leaf) from None

    def __contains__(self, leaf: HashLike) -> bool:
        return to_bytes32(leaf) in self._index

    def __len__(self) -> int:
        return len(self.leaves)

    def get_proof(self, leaf: HashLike) -> List[bytes]:
        """Return the sibling hashes authenticating ``leaf``, bottom-up.

        Raises :class:`LeafNotFoundError` if ``leaf`` is not in the tree.
        """
        idx = self.index_of(leaf)
        proof: List[bytes] = []
        for level in self.tree[:-1]:
            sibling = idx ^ 1
            if sibling < len(level):
                proof.append(level[sibling])
            idx //= 2
        return proof

    def get_hex_proof(self, leaf: HashLike) -> List[str]:
        return ["0x" + p.hex() for p in self.get_proof(leaf)]

    def verify(self, proof: Sequence[HashLike], leaf: HashLike) -> bool:
        return verify_proof(proof, leaf, self.get_root())


def verify_proof(proof: Sequence[HashLike], leaf: HashLike, root: HashLike) -> bool:
    """Return ``True`` if ``proof`` authenticates ``leaf`` against ``root``.

    Pure function; needs neither the tree nor the leaf set.  Malformed input
    (bad hex, wrong length, wrong type) is reported as a mismatch rather than
    raised.
    """
    try:
        computed = to_bytes32(leaf)
        siblings = [to_bytes32(p) for p in proof]
        expected = to_bytes32(root)
    except (TypeError, ValueError):
        return False
    for sibling in siblings:
        computed = hash_pair(computed, sibling)
    return computed == expected
