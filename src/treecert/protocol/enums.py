from enum import Enum


class ErrorCode(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    EMPTY_LEAF_BLOCKS = "empty_leaf_blocks"
    INTERNAL_ERROR = "internal_error"
