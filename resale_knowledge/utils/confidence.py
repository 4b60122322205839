"""
Confidence and stringification helpers shared by every engine.
"""

import json
import math
from typing import Any, Optional, Set


def clamp_confidence(value: Any) -> float:
    """
    Clamp a confidence into [0, 1].

    NaN, infinities and anything that is not a real number collapse to 0.0
    rather than leaking out of the library.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


def safe_stringify(value: Any, _seen: Optional[Set[int]] = None) -> str:
    """
    Turn a decoded payload value into a flat string.

    Lists join with ", ", dicts go through JSON, and anything JSON cannot
    handle (circular references, odd objects) becomes "[Object]".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        seen = set(_seen or ())
        if id(value) in seen:
            return "[Object]"
        seen.add(id(value))
        return ", ".join(safe_stringify(item, seen) for item in value)
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError):
        return "[Object]"
