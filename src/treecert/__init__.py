from .merkle import (
    HashAlgorithm,
    Leaf,
    MerkleTree,
    digest_leaf,
    next_power_of_2,
    pad_to_power_of_two,
    build_first_level,
    build_next_level,
    build_tree,
    build_tree_from_rows,
)
from .certificate import (
    TreeCertificate,
    encode_payload,
    decode_payload,
    issue_certificate,
    verify_certificate,
)
from .protocol import (
    TreeCertError,
    InvalidInputError,
    UnsupportedAlgorithmError,
    EmptyLeafBlocksError,
)

__all__ = [
    "HashAlgorithm",
    "Leaf",
    "MerkleTree",
    "digest_leaf",
    "next_power_of_2",
    "pad_to_power_of_two",
    "build_first_level",
    "build_next_level",
    "build_tree",
    "build_tree_from_rows",
    "TreeCertificate",
    "encode_payload",
    "decode_payload",
    "issue_certificate",
    "verify_certificate",
    "TreeCertError",
    "InvalidInputError",
    "UnsupportedAlgorithmError",
    "EmptyLeafBlocksError",
]

__version__ = "1.0.0"
