"""
Merkle leaves built from tabular rows.

A leaf is an ordered, immutable tuple of byte blocks, one per row field.
Padding leaves hold a single empty block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple

from treecert.protocol.errors import EmptyLeafBlocksError, InvalidInputError
from treecert.utils.json import json_dumps

PADDING_BLOCK = b""


def field_to_bytes(value: Any) -> bytes:
    """
    Convert one row field to its byte block.

    Strings are UTF-8 encoded as-is, bytes pass through, everything else
    uses its JSON text form (None -> b"null", True -> b"true", 7 -> b"7").
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    try:
        return json_dumps(value).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Field of type {type(value).__name__} cannot be converted to bytes"
        ) from e


@dataclass(frozen=True)
class Leaf:
    """
    One row's serialized fields.

    Attributes:
        blocks: Byte blocks hashed as a single stream, never empty
    """
    blocks: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        blocks = []
        for block in self.blocks:
            if not isinstance(block, (bytes, bytearray, memoryview)):
                raise InvalidInputError(
                    f"Leaf blocks must be bytes, got {type(block).__name__}"
                )
            blocks.append(bytes(block))
        if not blocks:
            raise EmptyLeafBlocksError()
        object.__setattr__(self, "blocks", tuple(blocks))

    @classmethod
    def from_row(cls, row: Iterable[Any]) -> "Leaf":
        return cls(tuple(field_to_bytes(value) for value in row))

    @classmethod
    def padding(cls) -> "Leaf":
        return cls((PADDING_BLOCK,))

    @property
    def is_padding(self) -> bool:
        """
        True when the leaf holds exactly one empty block.

        Content-based: a real row with a single empty-string field has the
        same blocks, and the same digest, as a padding leaf.
        """
        return self.blocks == (PADDING_BLOCK,)

    def __str__(self) -> str:
        return "[" + ", ".join(block.hex() for block in self.blocks) + "]"
