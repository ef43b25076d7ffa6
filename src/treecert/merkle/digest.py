"""
Hash algorithm wrapper for tree construction.

Every digest is computed on a fresh ``hashlib`` context, so a single
HashAlgorithm can be shared between nodes and threads.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Iterator, Optional, Union

from treecert.core.settings import get_settings
from treecert.protocol.errors import EmptyLeafBlocksError, UnsupportedAlgorithmError

if TYPE_CHECKING:
    from treecert.merkle.leaf import Leaf


def _candidate_names(name: str) -> Iterator[str]:
    # Accept "SHA-1" / "SHA-256" / "SHA3-256" as well as hashlib names.
    lowered = name.strip().lower()
    seen = set()
    for candidate in (lowered.replace("-", ""), lowered.replace("-", "_"), lowered, name):
        if candidate not in seen:
            seen.add(candidate)
            yield candidate


class HashAlgorithm:
    """
    A fixed-size hashlib digest resolved by name.

    Raises:
        UnsupportedAlgorithmError: If no such algorithm exists in this runtime,
            or it has no fixed digest size (SHAKE).
    """

    __slots__ = ("_name", "_digest_size")

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise UnsupportedAlgorithmError(repr(name))
        for candidate in _candidate_names(name):
            try:
                instance = hashlib.new(candidate)
            except ValueError:
                continue
            if candidate.startswith("shake") or not instance.digest_size:
                break
            self._name = candidate
            self._digest_size = instance.digest_size
            return
        raise UnsupportedAlgorithmError(name)

    @classmethod
    def default(cls) -> "HashAlgorithm":
        """Algorithm named by TREECERT_HASH_ALGORITHM (SHA-1 unless configured)."""
        return cls(get_settings().hash_algorithm)

    @property
    def name(self) -> str:
        return self._name

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def new(self):
        """Return a fresh hash context."""
        return hashlib.new(self._name)

    def digest_leaf(self, leaf: "Leaf") -> bytes:
        """
        Digest a leaf as one continuous stream: Hash(block_0 || ... || block_n).

        Raises:
            EmptyLeafBlocksError: If the leaf holds no blocks
        """
        blocks = leaf.blocks
        if not blocks:
            raise EmptyLeafBlocksError()

        hasher = self.new()
        for block in blocks:
            hasher.update(block)
        return hasher.digest()

    def digest_pair(self, left: bytes, right: bytes) -> bytes:
        """Parent digest: Hash(left || right). Order is never swapped."""
        hasher = self.new()
        hasher.update(left)
        hasher.update(right)
        return hasher.digest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashAlgorithm):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"HashAlgorithm({self._name!r})"


AlgorithmLike = Union[HashAlgorithm, str, None]


def resolve_algorithm(algorithm: AlgorithmLike = None) -> HashAlgorithm:
    """Coerce None (configured default), a name, or a HashAlgorithm."""
    if algorithm is None:
        return HashAlgorithm.default()
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    return HashAlgorithm(algorithm)


def digest_leaf(leaf: "Leaf", algorithm: Optional[AlgorithmLike] = None) -> bytes:
    """Shortcut for ``resolve_algorithm(algorithm).digest_leaf(leaf)``."""
    return resolve_algorithm(algorithm).digest_leaf(leaf)
