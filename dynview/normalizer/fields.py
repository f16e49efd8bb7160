"""
Lenient readers for values pulled out of a parsed document.

Documents written by different tool versions disagree on types as well as on
field names, so every reader falls back to a default instead of failing.
"""

import json
import math
from typing import Any, Dict, Iterable, List, Optional

# Port indices and similar counters beyond this are treated as garbage
MAX_INT = 2 ** 31 - 1


def as_text(value: Any) -> str:
    """Return ``value`` as a string; ``None`` becomes ``""``, other scalars their JSON text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def is_blank(text: str) -> bool:
    return not text or not text.strip()


def first_text(obj: Dict[str, Any], keys: Iterable[str]) -> str:
    """Return the first non-blank text among ``keys``, or ``""``."""
    for key in keys:
        text = as_text(obj.get(key))
        if not is_blank(text):
            return text
    return ""


def as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def as_int(value: Any, default: int = 0) -> int:
    """Read an integer; values that are fractional or outside ``±MAX_INT`` give ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return default
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if abs(number) <= MAX_INT else default


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', 'false'):
            return lowered == 'true'
    return default


def as_object(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> Optional[List[Any]]:
    return value if isinstance(value, list) else None


def first_list(obj: Dict[str, Any], keys: Iterable[str]) -> Optional[List[Any]]:
    """Return the first value among ``keys`` that is a list."""
    for key in keys:
        items = as_list(obj.get(key))
        if items is not None:
            return items
    return None


def objects(items: Optional[List[Any]]) -> List[Dict[str, Any]]:
    """Keep only the object elements of a list, in order."""
    return [item for item in items or [] if isinstance(item, dict)]
