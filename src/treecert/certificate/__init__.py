"""
Tree Certificates

Deterministic payload encoding plus the certificate record that carries
an external signature over it.
"""

from treecert.certificate.codec import (
    CertificatePayload,
    encode_payload,
    decode_payload,
)

from treecert.certificate.models import (
    TreeCertificate,
)

from treecert.certificate.signing import (
    CertificateSigner,
    CertificateVerifier,
    Ed25519CertificateSigner,
    Ed25519CertificateVerifier,
    issue_certificate,
    verify_certificate,
)

__all__ = [
    # Codec
    "CertificatePayload",
    "encode_payload",
    "decode_payload",
    # Certificate
    "TreeCertificate",
    # Signing
    "CertificateSigner",
    "CertificateVerifier",
    "Ed25519CertificateSigner",
    "Ed25519CertificateVerifier",
    "issue_certificate",
    "verify_certificate",
]
