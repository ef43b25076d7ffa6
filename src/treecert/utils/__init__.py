from .json import json_dumps, json_loads, rows_to_json, rows_from_json
from .logging import get_logger

__all__ = ["json_dumps", "json_loads", "rows_to_json", "rows_from_json", "get_logger"]
