"""
Consistency checks for the lexical tables and the rule registry.

Word rules build their regex from their table's keys, so the two must move in
lock-step. Matches are lowercased before the lookup, hence every key has to be
lowercase and matched in full by the rule's regex. A value outside the table's
declared range is only a warning.

Registry checks catch duplicate rule names. They also flag rules that could
never fire (empty pattern, production that is not callable).

Problems come back as ValidationFinding lists rather than exceptions.
NumeralPipeline refuses to start when any ERROR finding is present.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from .lexicon import WORD_RULE_TABLES
from .models import Severity, ValidationFinding
from .patterns import RegexElement, Rule
from .rules import RULES

# ─── Constants ───────────────────────────────────────────────────────

# Inclusive value range each table is allowed to hold
TABLE_RANGES: Mapping[str, tuple[int, int]] = MappingProxyType({
    "ZERO_TO_FIFTEEN": (0, 15),
    "SIXTEEN_TO_TWENTY_NINE": (16, 29),
    "TENS": (20, 90),
    "HUNDREDS": (100, 1000),
})


# ─── Orchestrator ────────────────────────────────────────────────────


def validate_all(rules: Sequence[Rule] = RULES) -> list[ValidationFinding]:
    """Run ALL validators and collect findings."""
    findings: list[ValidationFinding] = []
    findings.extend(validate_word_rules())
    findings.extend(validate_registry(rules))
    return findings


# ─── Lexicon Validators ──────────────────────────────────────────────


def validate_word_rules(
    word_rules: Sequence[tuple[Rule, Mapping[str, int], str]] = WORD_RULE_TABLES,
) -> list[ValidationFinding]:
    """Every table key must be lowercase, in range, and fully matched by its rule's regex."""
    findings: list[ValidationFinding] = []

    for rule, table, table_name in word_rules:
        element = rule.pattern[0] if rule.pattern else None
        if not isinstance(element, RegexElement):
            findings.append(
                ValidationFinding(
                    severity=Severity.ERROR,
                    code="WORD_RULE_NOT_REGEX",
                    subject=rule.name,
                    message=f"Word rule '{rule.name}' must start with a regex element.",
                )
            )
            continue

        low, high = TABLE_RANGES.get(table_name, (None, None))

        for spelling, value in table.items():
            if spelling != spelling.lower():
                findings.append(
                    ValidationFinding(
                        severity=Severity.ERROR,
                        code="LEXICON_KEY_NOT_LOWERCASE",
                        subject=table_name,
                        message=(
                            f"Key {spelling!r} in {table_name} is not lowercase; "
                            f"lookups lowercase the match and would never find it."
                        ),
                        details={"spelling": spelling},
                    )
                )

            if element.pattern.fullmatch(spelling) is None:
                findings.append(
                    ValidationFinding(
                        severity=Severity.ERROR,
                        code="LEXICON_REGEX_MISMATCH",
                        subject=rule.name,
                        message=(
                            f"Spelling {spelling!r} from {table_name} is not matched "
                            f"by the regex of rule '{rule.name}'."
                        ),
                        details={"spelling": spelling, "regex": element.pattern.pattern},
                    )
                )

            if low is not None and not low <= value <= high:
                findings.append(
                    ValidationFinding(
                        severity=Severity.WARNING,
                        code="LEXICON_VALUE_OUT_OF_RANGE",
                        subject=table_name,
                        message=(
                            f"{spelling!r} maps to {value}, outside {table_name} "
                            f"range [{low}, {high}]."
                        ),
                        details={"spelling": spelling, "value": value, "range": [low, high]},
                    )
                )

    return findings


# ─── Registry Validators ─────────────────────────────────────────────


def validate_registry(rules: Sequence[Rule] = RULES) -> list[ValidationFinding]:
    """Rule names must be unique, patterns non-empty, productions callable."""
    findings: list[ValidationFinding] = []
    seen: set[str] = set()

    for rule in rules:
        if rule.name in seen:
            findings.append(
                ValidationFinding(
                    severity=Severity.ERROR,
                    code="DUPLICATE_RULE_NAME",
                    subject=rule.name,
                    message=f"Rule name '{rule.name}' is registered more than once.",
                )
            )
        seen.add(rule.name)

        if not rule.pattern:
            findings.append(
                ValidationFinding(
                    severity=Severity.ERROR,
                    code="EMPTY_PATTERN",
                    subject=rule.name,
                    message=f"Rule '{rule.name}' has an empty pattern and can never match.",
                )
            )

        if not callable(rule.produce):
            findings.append(
                ValidationFinding(
                    severity=Severity.ERROR,
                    code="PRODUCTION_NOT_CALLABLE",
                    subject=rule.name,
                    message=f"Rule '{rule.name}' has no callable production.",
                )
            )

    return findings
