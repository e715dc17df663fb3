"""
Composition rules: build a larger numeral out of smaller ones.

    "diez y siete"        → 10 + 7          = 17
    "treinta y siete"     → 30 + 7          = 37
    "tres cientos veinte" → 100 * 3 + 20    = 320
    "tres punto cinco"    → 3 + 0.5         = 3.5
    "2k"                  → 2 * 1e3         = 2000
    "menos cinco" / "-5"  → -1 * 5          = -5

Each rule only fires on a grammatically valid composition; the number
predicates in the pattern do the gatekeeping, the production does arithmetic.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import NumeralError
from .models import Capture, NumericToken
from .numeric import decimals_to_fraction, number
from .patterns import (
    Rule,
    Window,
    dimension_number,
    number_between,
    number_equal,
    one_of,
    regex,
    without_grain,
)

logger = logging.getLogger(__name__)

SUFFIX_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "k": 1e3,
    "m": 1e6,
    "g": 1e9,
})

_TENS_VALUES = (20, 30, 40, 50, 60, 70, 80, 90)


def _numbers(window: Window, *positions: int) -> Optional[tuple[float, ...]]:
    """Values of the NumericTokens at ``positions``, or None if any slot is a Capture."""
    values = []
    for i in positions:
        token = window[i]
        if not isinstance(token, NumericToken):
            return None
        values.append(token.value)
    return tuple(values)


def _safe(rule_name: str, value: float) -> Optional[NumericToken]:
    try:
        return number(value)
    except NumeralError as e:
        logger.debug("%s produced no token: %s", rule_name, e)
        return None


# ─── 16..19 as "diez y <6..9>" ───────────────────────────────────────


def _diez_y_units(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 2)
    if values is None:
        return None
    return _safe("number (16..19)", 10 + values[0])


rule_diez_y_units = Rule(
    name="number (16..19)",
    pattern=(number_equal(10), regex("y"), number_between(6, 10)),
    produce=_diez_y_units,
)


# ─── 21..99 as "<tens> y <1..9>" ─────────────────────────────────────


def _tens_y_units(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 0, 2)
    if values is None:
        return None
    tens, units = values
    return _safe("number (21..99)", tens + units)


rule_tens_y_units = Rule(
    name="number (21..29 31..39 41..49 51..59 61..69 71..79 81..89 91..99)",
    pattern=(one_of(_TENS_VALUES), regex("y"), number_between(1, 10)),
    produce=_tens_y_units,
)


# ─── 200..999 as "<2..9> cientos <0..99>" ────────────────────────────


def _hundreds(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 0, 2)
    if values is None:
        return None
    multiplier, remainder = values
    return _safe("numbers 200..999", 100 * multiplier + remainder)


rule_hundreds_composition = Rule(
    name="numbers 200..999",
    pattern=(number_between(2, 10), number_equal(100), number_between(0, 100)),
    produce=_hundreds,
)


# ─── "<n> punto <digits>" ────────────────────────────────────────────


def _dot_number(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 0, 2)
    if values is None:
        return None
    integer_part, fraction_digits = values
    return _safe("number dot number", integer_part + decimals_to_fraction(fraction_digits))


rule_number_dot_number = Rule(
    name="number dot number",
    pattern=(
        dimension_number(),
        regex("punto"),
        without_grain(),
    ),
    produce=_dot_number,
)


# ─── k / m / g magnitude suffixes ────────────────────────────────────


def _suffix(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 0)
    capture = window[1]
    if values is None or not isinstance(capture, Capture):
        return None
    multiplier = SUFFIX_MULTIPLIERS.get(capture.first_group.lower())
    if multiplier is None:
        return None
    return _safe("numbers suffixes (K, M, G)", values[0] * multiplier)


rule_numbers_suffixes_kmg = Rule(
    name="numbers suffixes (K, M, G)",
    pattern=(dimension_number(), regex(r"([kmg])(?=[\W\$€]|$)")),
    produce=_suffix,
)


# ─── "-" / "menos" negation ──────────────────────────────────────────


def _negate(window: Window) -> Optional[NumericToken]:
    values = _numbers(window, 1)
    if values is None:
        return None
    return _safe("numbers prefix with -, negative or minus", values[0] * -1)


rule_numbers_prefix_with_negative_or_minus = Rule(
    name="numbers prefix with -, negative or minus",
    pattern=(regex("-|menos"), dimension_number()),
    produce=_negate,
)
