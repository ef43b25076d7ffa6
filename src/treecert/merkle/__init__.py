"""
Merkle Trees over Tabular Rows

Builds a binary hash tree over a padded set of rows.

Key concepts:
- Leaves hash their field blocks as one stream
- Parents hash left digest || right digest
- Power-of-two padding with empty-block leaves
- Digest-only nodes for recorded roots
"""

from treecert.merkle.digest import (
    HashAlgorithm,
    resolve_algorithm,
    digest_leaf,
)

from treecert.merkle.leaf import (
    Leaf,
    field_to_bytes,
)

from treecert.merkle.tree import (
    MerkleTree,
    LeafPair,
    TreePair,
    DigestOnly,
)

from treecert.merkle.builder import (
    next_power_of_2,
    pad_to_power_of_two,
    leaves_from_json,
    build_first_level,
    build_next_level,
    build_tree,
    build_tree_from_rows,
)

__all__ = [
    # Hashing
    "HashAlgorithm",
    "resolve_algorithm",
    "digest_leaf",
    # Leaves
    "Leaf",
    "field_to_bytes",
    # Nodes
    "MerkleTree",
    "LeafPair",
    "TreePair",
    "DigestOnly",
    # Construction
    "next_power_of_2",
    "pad_to_power_of_two",
    "leaves_from_json",
    "build_first_level",
    "build_next_level",
    "build_tree",
    "build_tree_from_rows",
]
