"""
Merkle Tree Nodes

A node is built bottom-up from either two leaves or two subtrees, or is
reconstructed from a previously certified digest with no children.

Key properties:
- digest = Hash(left || right), left first, never swapped
- digest and children are fixed at construction
- parents own their children exclusively (no sharing, no cycles)
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import List, Optional, Union

from treecert.merkle.digest import AlgorithmLike, HashAlgorithm, resolve_algorithm
from treecert.merkle.leaf import Leaf
from treecert.protocol.errors import InvalidInputError


# ===========================================================================
# Child Variants
# ===========================================================================


@dataclass(frozen=True)
class LeafPair:
    """Children of a first-level node."""
    left: Leaf
    right: Leaf


@dataclass(frozen=True)
class TreePair:
    """Children of an inner node."""
    left: "MerkleTree"
    right: "MerkleTree"


@dataclass(frozen=True)
class DigestOnly:
    """No children: the node was rebuilt from a recorded digest."""


Children = Union[LeafPair, TreePair, DigestOnly]


def _hex_bracketed(data: bytes) -> str:
    return "[" + ",".join(f"{b:02X}" for b in data) + "]"


# ===========================================================================
# Merkle Tree
# ===========================================================================


class MerkleTree:
    """
    A binary Merkle tree node.

    The digest of a pair node is always derived from its children; only a
    digest-only node takes a digest from the caller. The factories are the
    usual entry points:
    - combine_leaves: parent of two leaves
    - combine_trees: parent of two subtrees
    - from_digest: digest-only node for comparing against a recorded root
    """

    __slots__ = ("_digest", "_children", "_algorithm")

    def __init__(
        self,
        children: Children,
        algorithm: HashAlgorithm,
        digest: Optional[bytes] = None,
    ):
        if isinstance(children, LeafPair):
            derived = algorithm.digest_pair(
                algorithm.digest_leaf(children.left),
                algorithm.digest_leaf(children.right),
            )
        elif isinstance(children, TreePair):
            left, right = children.left, children.right
            if left.algorithm != algorithm or right.algorithm != algorithm:
                raise InvalidInputError(
                    f"Cannot combine subtrees hashed with {left.algorithm.name} "
                    f"and {right.algorithm.name} under {algorithm.name}"
                )
            derived = algorithm.digest_pair(left.digest, right.digest)
        elif isinstance(children, DigestOnly):
            if digest is None:
                raise InvalidInputError("A digest-only node needs a digest")
            derived = None
        else:
            raise InvalidInputError(f"Unknown child variant {type(children).__name__}")

        if digest is None:
            digest = derived
        if not isinstance(digest, (bytes, bytearray, memoryview)):
            raise InvalidInputError(f"Digest must be bytes, got {type(digest).__name__}")
        digest = bytes(digest)
        if derived is not None and digest != derived:
            raise InvalidInputError("Digest does not match the node's children")
        if len(digest) != algorithm.digest_size:
            raise InvalidInputError(
                f"Digest length {len(digest)} does not match {algorithm.name} "
                f"digest size {algorithm.digest_size}"
            )

        self._digest = digest
        self._children = children
        self._algorithm = algorithm

    @classmethod
    def combine_leaves(
        cls,
        left: Leaf,
        right: Leaf,
        algorithm: AlgorithmLike = None,
    ) -> "MerkleTree":
        """
        Build a first-level node.

        digest = Hash(Hash(left blocks) || Hash(right blocks))
        """
        return cls(LeafPair(left, right), resolve_algorithm(algorithm))

    @classmethod
    def combine_trees(cls, left: "MerkleTree", right: "MerkleTree") -> "MerkleTree":
        """
        Build an inner node: digest = Hash(left.digest || right.digest).

        Raises:
            InvalidInputError: If the subtrees were hashed with different algorithms
        """
        return cls(TreePair(left, right), left.algorithm)

    @classmethod
    def from_digest(cls, digest: bytes, algorithm: AlgorithmLike = None) -> "MerkleTree":
        """Rebuild a childless node from a previously recorded root digest."""
        return cls(DigestOnly(), resolve_algorithm(algorithm), digest)

    @property
    def digest(self) -> bytes:
        return self._digest

    @property
    def hex_digest(self) -> str:
        return self._digest.hex()

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def children(self) -> Children:
        return self._children

    @property
    def is_digest_only(self) -> bool:
        return isinstance(self._children, DigestOnly)

    @property
    def left_leaf(self) -> Optional[Leaf]:
        return self._children.left if isinstance(self._children, LeafPair) else None

    @property
    def right_leaf(self) -> Optional[Leaf]:
        return self._children.right if isinstance(self._children, LeafPair) else None

    @property
    def left_tree(self) -> Optional["MerkleTree"]:
        return self._children.left if isinstance(self._children, TreePair) else None

    @property
    def right_tree(self) -> Optional["MerkleTree"]:
        return self._children.right if isinstance(self._children, TreePair) else None

    @property
    def height(self) -> int:
        """Number of levels below this node (0 for a digest-only node)."""
        children = self._children
        if isinstance(children, LeafPair):
            return 1
        if isinstance(children, TreePair):
            return 1 + children.left.height
        return 0

    def matches(self, other: "MerkleTree") -> bool:
        """Constant-time digest comparison, e.g. a rebuilt tree against a recorded root."""
        return hmac.compare_digest(self._digest, other.digest)

    def render(self, indent: int = 0) -> str:
        """Indented dump of the tree, one line per node and leaf."""
        lines: List[str] = []
        self._render(indent, lines)
        return "\n".join(lines) + "\n"

    def _render(self, indent: int, lines: List[str]) -> None:
        pad = " " * indent
        lines.append(f"{pad}Node digest: {_hex_bracketed(self._digest)}")

        children = self._children
        if isinstance(children, LeafPair):
            lines.append(f"{pad} Left leaf : {children.left}")
            lines.append(f"{pad} Right leaf: {children.right}")
        elif isinstance(children, TreePair):
            children.left._render(indent + 1, lines)
            children.right._render(indent + 1, lines)
        else:
            lines.append(f"{pad}Empty tree")

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        kind = type(self._children).__name__
        return f"MerkleTree(digest={self.hex_digest!r}, children={kind}, algorithm={self._algorithm.name!r})"
