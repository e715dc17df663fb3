"""
Numeric helpers shared by the literal and composition rules.

The helpers RAISE (NumericFormatError / NumericOverflowError). The rule
production functions are the layer that turns those errors into "no token".
"""

from __future__ import annotations

import math
from typing import Optional

from .exceptions import NumericFormatError, NumericOverflowError
from .models import NumericToken

# Integers longer than this are not safely representable as a double.
MAX_INTEGER_DIGITS = 18

# decimals_to_fraction only looks at 1, 10, ..., 10**9
_MAX_DECIMAL_POWER = 10


def number(value: float, grain: Optional[int] = None) -> NumericToken:
    """Build a NumericToken, refusing values that are not finite."""
    if not math.isfinite(value):
        raise NumericOverflowError(
            f"Computed value is not finite: {value!r}", {"value": str(value)}
        )
    return NumericToken(value=float(value), grain=grain)


def parse_integer(raw: str) -> int:
    """Parse a plain digit run of at most MAX_INTEGER_DIGITS digits."""
    if not raw.isdigit():
        raise NumericFormatError(f"Not a digit run: {raw!r}", {"raw": raw})
    if len(raw) > MAX_INTEGER_DIGITS:
        raise NumericOverflowError(
            f"Integer literal has {len(raw)} digits (max {MAX_INTEGER_DIGITS})",
            {"raw": raw},
        )
    return int(raw)


def parse_float(normalized: str, raw: str) -> float:
    """Parse a string already normalized to Python float syntax."""
    if normalized.startswith("."):
        normalized = "0" + normalized
    try:
        value = float(normalized)
    except ValueError as exc:
        raise NumericFormatError(
            f"Invalid numeric literal: {raw!r}", {"raw": raw, "normalized": normalized}
        ) from exc
    if not math.isfinite(value):
        raise NumericOverflowError(f"Numeric literal overflows: {raw!r}", {"raw": raw})
    return value


def decimals_to_fraction(x: float) -> float:
    """Read ``x`` as the digits after a decimal point.

    Divides by the smallest power of ten (1 .. 10**9) strictly greater than x:

        5  → 0.5
        25 → 0.25
        10 → 0.1

    Values of 10**9 or more have no such power and expand to 0.
    """
    for exponent in range(_MAX_DECIMAL_POWER):
        multiplier = 10**exponent
        if x - multiplier < 0:
            return x / multiplier
    return 0.0
