"""
Tree Certificates

A certificate binds an id, a timestamp and a signature computed by an
external signer over the encoded payload (see codec.encode_payload).

Identity rule: two certificates are equal, and hash equal, when their
timestamps are equal. id and signature are ignored for equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from treecert.certificate.codec import check_int_field
from treecert.protocol.errors import InvalidInputError


@dataclass(frozen=True, eq=False)
class TreeCertificate:
    """
    Signed certificate over a set of tree roots.

    Attributes:
        id: Caller-chosen 32-bit identifier
        timestamp: 64-bit timestamp (e.g. epoch time)
        signature: Opaque signature bytes over the payload
    """
    id: int
    timestamp: int
    signature: bytes

    def __post_init__(self) -> None:
        check_int_field("id", self.id, 32)
        check_int_field("timestamp", self.timestamp, 64)
        if not isinstance(self.signature, (bytes, bytearray, memoryview)):
            raise InvalidInputError(
                f"Signature must be bytes, got {type(self.signature).__name__}"
            )
        object.__setattr__(self, "signature", bytes(self.signature))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeCertificate):
            return NotImplemented
        return self.timestamp == other.timestamp

    def __hash__(self) -> int:
        return hash(self.timestamp)

    def __str__(self) -> str:
        # Signature bytes as signed decimals: [7, 1000, [-85, 16]]
        signed = ", ".join(str(b - 256 if b > 127 else b) for b in self.signature)
        return f"[{self.id}, {self.timestamp}, [{signed}]]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "signature": self.signature.hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeCertificate":
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            signature=bytes.fromhex(data["signature"]),
        )
