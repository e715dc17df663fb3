"""
Spanish number words and the four word-to-value rules.

Supported spellings (case-insensitive):
    "cero" / "zero"                → 0
    "un" / "uno" / "una"           → 1
    "tres" / "trés"                → 3
    "dieciséis" / "diesiseis" ...  → 16
    "veintitrés" / "veintitres"    → 23
    "cien" / "ciento" / "cientos"  → 100
    "mil"                          → 1000

Accented and misspelled variants are SEPARATE KEYS. Diacritics are never
stripped before lookup.

Each rule's regex is generated from its table's keys, so the alternation and
the table cannot drift apart.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import LexiconLookupError, NumeralError
from .models import Capture, NumericToken
from .numeric import number
from .patterns import Rule, Window, regex

logger = logging.getLogger(__name__)

# ─── Word Lookup Tables ──────────────────────────────────────────────

ZERO_TO_FIFTEEN: Mapping[str, int] = MappingProxyType({
    "zero": 0,
    "cero": 0,
    "un": 1,
    "una": 1,
    "uno": 1,
    "dos": 2,
    "trés": 3,
    "tres": 3,
    "cuatro": 4,
    "cinco": 5,
    "seis": 6,
    "séis": 6,
    "siete": 7,
    "ocho": 8,
    "nueve": 9,
    "diez": 10,
    "dies": 10,
    "once": 11,
    "doce": 12,
    "trece": 13,
    "catorce": 14,
    "quince": 15,
})

SIXTEEN_TO_TWENTY_NINE: Mapping[str, int] = MappingProxyType({
    "dieciseis": 16,
    "diesiséis": 16,
    "diesiseis": 16,
    "dieciséis": 16,
    "diecisiete": 17,
    "dieciocho": 18,
    "diecinueve": 19,
    "veintiuno": 21,
    "veintiuna": 21,
    "veintidos": 22,
    "veintitrés": 23,
    "veintitres": 23,
    "veinticuatro": 24,
    "veinticinco": 25,
    "veintiséis": 26,
    "veintiseis": 26,
    "veintisiete": 27,
    "veintiocho": 28,
    "veintinueve": 29,
})

TENS: Mapping[str, int] = MappingProxyType({
    "veinte": 20,
    "treinta": 30,
    "cuarenta": 40,
    "cincuenta": 50,
    "sesenta": 60,
    "setenta": 70,
    "ochenta": 80,
    "noventa": 90,
})

HUNDREDS: Mapping[str, int] = MappingProxyType({
    "cien": 100,
    "cientos": 100,
    "ciento": 100,
    "doscientos": 200,
    "trescientos": 300,
    "cuatrocientos": 400,
    "quinientos": 500,
    "seiscientos": 600,
    "setecientos": 700,
    "ochocientos": 800,
    "novecientos": 900,
    "mil": 1000,
})


# ─── Regex Generation ────────────────────────────────────────────────


def alternation(table: Mapping[str, int]) -> str:
    """Build ``(a|b|...)`` from the table keys, longest first.

    Longest-first ordering makes "cientos" win over "cien" and "uno" over "un"
    when the regex engine tries alternatives left to right.
    """
    keys = sorted(table, key=lambda k: (-len(k), k))
    return "(" + "|".join(re.escape(k) for k in keys) + ")"


def lookup(table: Mapping[str, int], match: str, table_name: str) -> int:
    """Lowercase ``match`` and look it up.

    Raises:
        LexiconLookupError: If the spelling is missing. Given the regex is
            generated from the same keys, this means the module is broken.
    """
    key = match.lower()
    if key not in table:
        raise LexiconLookupError(
            f"Spelling {match!r} matched but is not in table {table_name}",
            {"spelling": match, "table": table_name},
        )
    return table[key]


# ─── Word Rules ──────────────────────────────────────────────────────


def _word_production(table: Mapping[str, int], table_name: str):
    def produce(window: Window) -> Optional[NumericToken]:
        capture = window[0]
        if not isinstance(capture, Capture):
            return None
        try:
            return number(lookup(table, capture.first_group, table_name))
        except LexiconLookupError as e:
            logger.error("Lexicon inconsistency: %s", e)
            return None
        except NumeralError as e:
            logger.debug("Word rule %s rejected %r: %s", table_name, capture.text, e)
            return None

    return produce


def _word_rule(name: str, table: Mapping[str, int], table_name: str) -> Rule:
    return Rule(
        name=name,
        pattern=(regex(alternation(table)),),
        produce=_word_production(table, table_name),
    )


rule_zero_to_fifteen = _word_rule("number (0..15)", ZERO_TO_FIFTEEN, "ZERO_TO_FIFTEEN")

rule_sixteen_to_twenty_nine = _word_rule(
    "number (16..19 21..29)", SIXTEEN_TO_TWENTY_NINE, "SIXTEEN_TO_TWENTY_NINE"
)

rule_tens = _word_rule("number (20..90)", TENS, "TENS")

rule_hundreds = _word_rule("number 100..1000", HUNDREDS, "HUNDREDS")

# (rule, table, table name) triples checked by validators.validate_word_rules
WORD_RULE_TABLES: tuple[tuple[Rule, Mapping[str, int], str], ...] = (
    (rule_zero_to_fifteen, ZERO_TO_FIFTEEN, "ZERO_TO_FIFTEEN"),
    (rule_sixteen_to_twenty_nine, SIXTEEN_TO_TWENTY_NINE, "SIXTEEN_TO_TWENTY_NINE"),
    (rule_tens, TENS, "TENS"),
    (rule_hundreds, HUNDREDS, "HUNDREDS"),
)
