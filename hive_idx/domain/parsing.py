# hive_idx/domain/parsing.py
from __future__ import annotations

import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_TRUE_FLAGS = {"1", "true", "yes"}
_FALSE_FLAGS = {"0", "false", "no"}


def to_int(x: Any) -> int:
    """
    Loose integer coercion: leading digits of a string ("12abc" -> 12),
    truncation of floats, 0 for anything unparseable.
    """
    if x is None:
        return 0
    if isinstance(x, bool):
        return int(x)
    if isinstance(x, int):
        return x
    if isinstance(x, float):
        return int(x) if math.isfinite(x) else 0
    m = _LEADING_INT.match(str(x))
    if not m:
        return 0
    return int(m.group(1))


def is_empty(x: Any) -> bool:
    """True for None, "", "0", 0, False and empty collections."""
    if x is None or x is False:
        return True
    if isinstance(x, str):
        return x == "" or x == "0"
    if isinstance(x, (int, float)):
        return x == 0
    if isinstance(x, (list, tuple, dict, set)):
        return len(x) == 0
    return False


def parse_flag(x: Any) -> bool | None:
    """'1'/'true'/'yes' -> True, '0'/'false'/'no' -> False, anything else -> None."""
    if x is None:
        return None
    if isinstance(x, bool):
        return x
    s = str(x).strip().lower()
    if s in _TRUE_FLAGS:
        return True
    if s in _FALSE_FLAGS:
        return False
    return None


def get_first(payload: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in payload (None values skipped)."""
    for k in keys:
        v = payload.get(k)
        if v is None:
            continue
        return v
    return None
