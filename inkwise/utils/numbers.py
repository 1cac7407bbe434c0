"""Numeric coercion helpers."""

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?)(\d+)")

# Digit runs longer than this saturate instead of being converted
MAX_PARSED_DIGITS = 9
SATURATED_INT = 10 ** MAX_PARSED_DIGITS


def parse_int(value: Any):
    """
    Parse the leading integer of a value, or return None.

    Mirrors loose form-field parsing: "7abc" -> 7, " 8" -> 8, 5.9 -> 5.
    Booleans, None, containers and non-finite floats are not numbers.
    Very long digit strings saturate at +/- SATURATED_INT.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if not match:
            return None
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        if len(digits) > MAX_PARSED_DIGITS:
            return -SATURATED_INT if sign == "-" else SATURATED_INT
        return int(sign + digits)
    return None


def clamp_int(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """Parse value as an integer and clamp it into [minimum, maximum]."""
    n = parse_int(value)
    if n is None:
        return fallback
    return max(minimum, min(maximum, n))
