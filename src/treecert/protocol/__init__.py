from .enums import ErrorCode
from .errors import (
    TreeCertError,
    InvalidInputError,
    UnsupportedAlgorithmError,
    EmptyLeafBlocksError,
)

__all__ = [
    "ErrorCode",
    "TreeCertError",
    "InvalidInputError",
    "UnsupportedAlgorithmError",
    "EmptyLeafBlocksError",
]
