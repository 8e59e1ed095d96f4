from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

TRUTHY_FLAGS = ("y", "yes", "1", "t", "true")


def parse_truthy(flag: Optional[str]) -> bool:
    """Protocol-style boolean: y/yes/1/t/true, case-insensitive."""
    if flag is None:
        return False
    return str(flag).strip().lower() in TRUTHY_FLAGS


def deep_serialize(obj: Any) -> Any:
    """
    Recursively convert objects to JSON-safe primitives.
    """
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if hasattr(obj, "model_dump"):
        return deep_serialize(obj.model_dump())
    if isinstance(obj, dict):
        return {k: deep_serialize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [deep_serialize(v) for v in obj]
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
