"""
Tree Builder

Builds a Merkle tree from rows, level by level.

Construction rules:
1. Rows are padded to a power-of-two leaf count (minimum 2) with
   single-empty-block padding leaves.
2. First level: leaves paired (0,1), (2,3), ... into nodes.
3. Next levels: nodes paired the same way until one root remains.
4. A level with fewer than 2 items or an odd count is rejected, never
   truncated and never padded by duplication.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from treecert.merkle.digest import AlgorithmLike, resolve_algorithm
from treecert.merkle.leaf import Leaf
from treecert.merkle.tree import MerkleTree
from treecert.protocol.errors import InvalidInputError
from treecert.utils.json import rows_from_json
from treecert.utils.logging import get_logger

logger = get_logger(__name__)


def _check_level(items: Sequence[Any], kind: str) -> None:
    count = len(items)
    if count < 2:
        raise InvalidInputError(f"A level needs at least 2 {kind}, got {count}")
    if count % 2 != 0:
        raise InvalidInputError(f"Cannot pair an odd number of {kind} ({count})")


def next_power_of_2(n: int) -> int:
    """
    Smallest power of two >= n.

    next_power_of_2(0) == 1 and next_power_of_2(1) == 1. Padding applies its
    own minimum of two leaves on top of this.
    """
    if n < 0:
        raise InvalidInputError(f"Expected a non-negative count, got {n}")
    if n == 0:
        return 1
    return 1 << (n - 1).bit_length()


def pad_to_power_of_two(rows: Sequence[Sequence[Any]]) -> List[Leaf]:
    """
    Convert rows to leaves and pad up to a power-of-two count.

    Zero or one row still yields two leaves. Real rows come first, in order,
    followed by padding leaves.
    """
    rows = list(rows)
    count = len(rows)
    target = 2 if count <= 1 else next_power_of_2(count)

    leaves = [Leaf.from_row(row) for row in rows]
    leaves.extend(Leaf.padding() for _ in range(target - count))

    logger.debug("Padded %d rows to %d leaves", count, target)
    return leaves


def leaves_from_json(text: str) -> List[Leaf]:
    """Padded leaves from a JSON array of row arrays."""
    return pad_to_power_of_two(rows_from_json(text))


def build_first_level(leaves: Sequence[Leaf], algorithm: AlgorithmLike = None) -> List[MerkleTree]:
    """
    Pair leaves by position into first-level nodes.

    Raises:
        InvalidInputError: If fewer than 2 leaves or an odd count is given
    """
    _check_level(leaves, "leaves")
    algorithm = resolve_algorithm(algorithm)

    return [
        MerkleTree.combine_leaves(leaves[i], leaves[i + 1], algorithm)
        for i in range(0, len(leaves), 2)
    ]


def build_next_level(nodes: Sequence[MerkleTree]) -> List[MerkleTree]:
    """
    Pair nodes by position into the level above.

    Raises:
        InvalidInputError: If fewer than 2 nodes or an odd count is given
    """
    _check_level(nodes, "nodes")

    return [
        MerkleTree.combine_trees(nodes[i], nodes[i + 1])
        for i in range(0, len(nodes), 2)
    ]


def build_tree(leaves: Sequence[Leaf], algorithm: AlgorithmLike = None) -> MerkleTree:
    """
    Build the tree and return its root.

    The leaf count must be a power of two (see pad_to_power_of_two); any
    other count fails with InvalidInputError at the first odd level.
    """
    level = build_first_level(leaves, algorithm)
    levels = 1

    while len(level) > 1:
        level = build_next_level(level)
        levels += 1

    root = level[0]
    logger.debug(
        "Built Merkle tree over %d leaves in %d levels (%s): %s",
        len(leaves),
        levels,
        root.algorithm.name,
        root.hex_digest,
    )
    return root


def build_tree_from_rows(rows: Sequence[Sequence[Any]], algorithm: AlgorithmLike = None) -> MerkleTree:
    """Pad rows to a power-of-two leaf count and build the tree."""
    return build_tree(pad_to_power_of_two(rows), algorithm)
