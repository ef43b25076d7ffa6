"""
Certificate Signing

Signs and verifies the certificate payload with Ed25519.

Key material is supplied by the caller (raw bytes or PEM); this module
does not generate, store or rotate production keys. Any object with a
matching ``sign`` / ``verify`` method can stand in for the Ed25519 classes
in issue_certificate / verify_certificate.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from treecert.certificate.codec import RootLike, encode_payload
from treecert.certificate.models import TreeCertificate
from treecert.protocol.errors import InvalidInputError
from treecert.utils.logging import get_logger

logger = get_logger(__name__)


class CertificateSigner(Protocol):
    def sign(self, data: bytes) -> bytes:
        ...


class CertificateVerifier(Protocol):
    def verify(self, data: bytes, signature: bytes) -> bool:
        ...


# ===========================================================================
# Issue / Verify
# ===========================================================================


def issue_certificate(
    id: int,
    timestamp: int,
    roots: Iterable[RootLike],
    signer: CertificateSigner,
) -> TreeCertificate:
    """Encode the payload, sign it and wrap the result in a certificate."""
    payload = encode_payload(id, timestamp, roots)
    certificate = TreeCertificate(id=id, timestamp=timestamp, signature=signer.sign(payload))
    logger.debug("Issued certificate id=%d timestamp=%d", id, timestamp)
    return certificate


def verify_certificate(
    certificate: TreeCertificate,
    roots: Iterable[RootLike],
    verifier: CertificateVerifier,
) -> bool:
    """Re-derive the payload from the certificate and roots, then check its signature."""
    payload = encode_payload(certificate.id, certificate.timestamp, roots)
    if verifier.verify(payload, certificate.signature):
        return True

    logger.warning(
        "Certificate signature check failed for id=%d timestamp=%d",
        certificate.id,
        certificate.timestamp,
    )
    return False


# ===========================================================================
# Ed25519
# ===========================================================================


def _raw_public_bytes(public_key: Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class Ed25519CertificateSigner:
    """
    Ed25519 signer for certificate payloads.

    Usage:
        signer = Ed25519CertificateSigner.from_pem_file("/path/to/key.pem")
        cert = signer.issue(7, 1700000000, [root])
    """

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key

    @classmethod
    def generate(cls) -> "Ed25519CertificateSigner":
        """Fresh key pair. Use only for testing."""
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_private_bytes(cls, key_bytes: bytes) -> "Ed25519CertificateSigner":
        return cls(Ed25519PrivateKey.from_private_bytes(key_bytes))

    @classmethod
    def from_pem_file(
        cls,
        path: Union[str, Path],
        password: Optional[bytes] = None,
    ) -> "Ed25519CertificateSigner":
        private_key = serialization.load_pem_private_key(
            Path(path).read_bytes(),
            password=password,
        )
        if not isinstance(private_key, Ed25519PrivateKey):
            raise InvalidInputError(
                f"{path} holds a {type(private_key).__name__}, not an Ed25519 private key"
            )
        return cls(private_key)

    @property
    def public_key_bytes(self) -> bytes:
        """Raw 32-byte public key to hand to verifiers."""
        return _raw_public_bytes(self._private_key.public_key())

    def export_public_pem(self) -> bytes:
        return self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def sign(self, data: bytes) -> bytes:
        return self._private_key.sign(data)

    def issue(self, id: int, timestamp: int, roots: Iterable[RootLike]) -> TreeCertificate:
        """Certificate over ``roots`` signed with this key."""
        return issue_certificate(id, timestamp, roots, self)


class Ed25519CertificateVerifier:
    """
    Ed25519 verifier bound to one public key.

    Verification is offline; an invalid signature yields False.
    """

    def __init__(self, public_key: Ed25519PublicKey):
        self._public_key = public_key

    @classmethod
    def from_public_bytes(cls, public_key_bytes: bytes) -> "Ed25519CertificateVerifier":
        return cls(Ed25519PublicKey.from_public_bytes(public_key_bytes))

    @classmethod
    def from_pem(cls, pem_data: bytes) -> "Ed25519CertificateVerifier":
        public_key = serialization.load_pem_public_key(pem_data)
        if not isinstance(public_key, Ed25519PublicKey):
            raise InvalidInputError(
                f"PEM holds a {type(public_key).__name__}, not an Ed25519 public key"
            )
        return cls(public_key)

    @classmethod
    def from_signer(cls, signer: Ed25519CertificateSigner) -> "Ed25519CertificateVerifier":
        return cls.from_public_bytes(signer.public_key_bytes)

    @property
    def public_key_bytes(self) -> bytes:
        return _raw_public_bytes(self._public_key)

    def verify(self, data: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, data)
        except InvalidSignature:
            return False
        return True

    def check(self, certificate: TreeCertificate, roots: Iterable[RootLike]) -> bool:
        """True when ``certificate`` was issued over exactly ``roots``."""
        return verify_certificate(certificate, roots, self)
