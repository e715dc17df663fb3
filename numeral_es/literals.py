"""
Digit-based numerals: plain integers, comma decimals, period-grouped numbers.

Spanish writes the decimal separator as a COMMA and groups thousands with a
PERIOD:
    "42"            → 42
    "3,5"  / ",5"   → 3.5 / 0.5
    "1.234"         → 1234
    "1.234.567,89"  → 1234567.89

Every pattern is conservative: it is better to produce no token than a wrong
one. The grouped-integer pattern refuses to stop in front of ",<digit>",
".<digit>" or another digit, so it never fires on text the grouped-decimal
pattern owns.
"""

from __future__ import annotations

import logging
from typing import Optional

from .exceptions import NumeralError
from .models import Capture, NumericToken
from .numeric import MAX_INTEGER_DIGITS, number, parse_float, parse_integer
from .patterns import Rule, Window, regex

logger = logging.getLogger(__name__)


# ─── Productions ─────────────────────────────────────────────────────


def _literal(window: Window) -> Optional[str]:
    capture = window[0]
    if not isinstance(capture, Capture):
        return None
    return capture.first_group


def _integer_numeric(window: Window) -> Optional[NumericToken]:
    """'123' → 123. Runs longer than MAX_INTEGER_DIGITS never become a token."""
    raw = _literal(window)
    if raw is None:
        return None
    try:
        return number(parse_integer(raw))
    except NumeralError as e:
        logger.debug("Integer literal rejected: %s", e)
        return None


def _decimal_with_thousands(window: Window) -> Optional[NumericToken]:
    """'1.234.567,89' → drop periods, comma becomes the decimal point."""
    raw = _literal(window)
    if raw is None:
        return None
    try:
        return number(parse_float(raw.replace(".", "").replace(",", "."), raw))
    except NumeralError as e:
        logger.debug("Grouped decimal rejected: %s", e)
        return None


def _integer_with_thousands(window: Window) -> Optional[NumericToken]:
    """'1.234' → 1234. A fractional part here means the wrong rule matched."""
    raw = _literal(window)
    if raw is None or "," in raw:
        return None
    try:
        return number(parse_float(raw.replace(".", ""), raw))
    except NumeralError as e:
        logger.debug("Grouped integer rejected: %s", e)
        return None


def _decimal_number(window: Window) -> Optional[NumericToken]:
    """'3,5' → 3.5 and ',5' → 0.5."""
    raw = _literal(window)
    if raw is None:
        return None
    try:
        return number(parse_float(raw.replace(",", "."), raw))
    except NumeralError as e:
        logger.debug("Decimal literal rejected: %s", e)
        return None


# ─── Rules ───────────────────────────────────────────────────────────

rule_integer_numeric = Rule(
    name="integer (numeric)",
    pattern=(regex(rf"(\d{{1,{MAX_INTEGER_DIGITS}}})"),),
    produce=_integer_numeric,
)

rule_decimal_with_thousands_separator = Rule(
    name="decimal with thousands separator",
    pattern=(regex(r"(\d+(\.\d\d\d)+,\d+)"),),
    produce=_decimal_with_thousands,
)

rule_integer_with_thousands_separator = Rule(
    name="integer with thousands separator .",
    pattern=(regex(r"(?<!\d)(?<!\d\.)(\d{1,3}(\.\d\d\d){1,5})(?![.,]?\d)"),),
    produce=_integer_with_thousands,
)

rule_decimal_number = Rule(
    name="decimal number",
    pattern=(regex(r"(\d*,\d+)"),),
    produce=_decimal_number,
)
