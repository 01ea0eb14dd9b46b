import math
from typing import Any, Optional


def to_float(value: Any) -> Optional[float]:
    """Finite float or None; bools and junk strings count as missing"""
    if value is None or isinstance(value, bool):
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def first_nonzero(*values: Any) -> Optional[float]:
    """First value that parses to a non-zero number (upstream uses 0 for 'unknown')"""
    for value in values:
        v = to_float(value)
        if v:
            return v
    return None
