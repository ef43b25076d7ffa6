import json
from typing import Any, List, Sequence

from ..protocol.errors import InvalidInputError


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str) -> Any:
    return json.loads(s)


def rows_to_json(rows: Sequence[Sequence[Any]]) -> str:
    """Encode tabular rows as a JSON array of arrays."""
    try:
        return json_dumps([list(row) for row in rows])
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Rows are not JSON serializable: {e}") from e


def rows_from_json(text: str) -> List[List[Any]]:
    """Decode a JSON array of arrays back into rows."""
    try:
        data = json_loads(text)
    except ValueError as e:
        raise InvalidInputError(f"Invalid JSON rows: {e}") from e

    if not isinstance(data, list):
        raise InvalidInputError("JSON rows must be an array")
    for index, row in enumerate(data):
        if not isinstance(row, list):
            raise InvalidInputError(f"Row {index} is not an array")
    return data
