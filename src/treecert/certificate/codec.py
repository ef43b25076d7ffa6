"""
Certificate Payload Codec

The payload is the exact byte string a signer signs and a verifier
re-derives:

    id (4 bytes, big-endian) || timestamp (8 bytes, big-endian) || root_0 || root_1 || ...

Roots are raw digests in caller order, with no length prefix or separator.
No hashing happens here.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from treecert.merkle.tree import MerkleTree
from treecert.protocol.errors import InvalidInputError
from treecert.utils.logging import get_logger

logger = get_logger(__name__)

_HEADER = struct.Struct(">IQ")
HEADER_SIZE = _HEADER.size

RootLike = Union[bytes, bytearray, memoryview, MerkleTree]


def check_int_field(name: str, value: int, bits: int) -> int:
    """
    Accept any integer whose bit pattern fits in ``bits`` bits, read either
    as signed or unsigned.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}")
    if not -(1 << (bits - 1)) <= value < (1 << bits):
        raise InvalidInputError(f"{name} {value} does not fit in {bits} bits")
    return value


def _to_signed(value: int, bits: int) -> int:
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _root_bytes(root: RootLike) -> bytes:
    if isinstance(root, MerkleTree):
        return root.digest
    if isinstance(root, (bytes, bytearray, memoryview)):
        return bytes(root)
    raise InvalidInputError(f"Root must be bytes or a MerkleTree, got {type(root).__name__}")


@dataclass(frozen=True)
class CertificatePayload:
    """Decoded payload fields."""
    id: int
    timestamp: int
    roots: Tuple[bytes, ...]


def encode_payload(id: int, timestamp: int, roots: Iterable[RootLike]) -> bytes:
    """
    Encode (id, timestamp, roots) into the signable byte layout.

    Raises:
        InvalidInputError: If id or timestamp do not fit their widths, or a
            root is not bytes-like
    """
    check_int_field("id", id, 32)
    check_int_field("timestamp", timestamp, 64)

    root_bytes = [_root_bytes(root) for root in roots]
    header = _HEADER.pack(id & 0xFFFFFFFF, timestamp & 0xFFFFFFFFFFFFFFFF)
    payload = header + b"".join(root_bytes)

    logger.debug(
        "Encoded certificate payload id=%d timestamp=%d roots=%d (%d bytes)",
        id, timestamp, len(root_bytes), len(payload),
    )
    return payload


def decode_payload(payload: bytes, digest_size: int) -> CertificatePayload:
    """
    Split a payload back into id, timestamp and fixed-size roots.

    id and timestamp come back as signed 32/64-bit integers.

    Raises:
        InvalidInputError: If the payload is truncated or its root section is
            not a whole number of digests
    """
    if digest_size <= 0:
        raise InvalidInputError(f"Digest size must be positive, got {digest_size}")

    payload = bytes(payload)
    if len(payload) < HEADER_SIZE:
        raise InvalidInputError(
            f"Payload too short: {len(payload)} bytes, header needs {HEADER_SIZE}"
        )

    raw_id, raw_timestamp = _HEADER.unpack_from(payload)
    body = payload[HEADER_SIZE:]
    if len(body) % digest_size != 0:
        raise InvalidInputError(
            f"Root section of {len(body)} bytes is not a multiple of {digest_size}"
        )

    roots = tuple(body[i:i + digest_size] for i in range(0, len(body), digest_size))
    return CertificatePayload(
        id=_to_signed(raw_id, 32),
        timestamp=_to_signed(raw_timestamp, 64),
        roots=roots,
    )
