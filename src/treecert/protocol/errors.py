from typing import Optional
from .enums import ErrorCode


class TreeCertError(Exception):
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.code = code or ErrorCode.INTERNAL_ERROR


class InvalidInputError(TreeCertError):
    """Raised when a level, integer field, root or payload is malformed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_INPUT)


class UnsupportedAlgorithmError(TreeCertError):
    """Raised when the requested hash algorithm is not available."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            f"Hash algorithm '{algorithm}' is not available",
            ErrorCode.UNSUPPORTED_ALGORITHM,
        )


class EmptyLeafBlocksError(TreeCertError):
    """Raised when a leaf without data blocks reaches construction or hashing."""

    def __init__(self, message: str = "Leaf must hold at least one data block"):
        super().__init__(message, ErrorCode.EMPTY_LEAF_BLOCKS)
