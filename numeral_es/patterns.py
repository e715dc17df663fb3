"""
Pattern elements and the Rule record.

A rule pattern is an ordered tuple of elements. Each element either matches raw
text (RegexElement, yielding a Capture) or tests a NumericToken already placed on
the text by an earlier rule (NumberPredicate). Rules only describe WHAT they
match; finding spans and ordering rule application is the scheduler's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Union

from .models import NumericToken, Token

Window = Sequence[Token]
Production = Callable[[Window], Optional[NumericToken]]


# ─── Element Types ───────────────────────────────────────────────────


@dataclass(frozen=True)
class RegexElement:
    """Matches text with a case-insensitive compiled regex."""

    pattern: re.Pattern[str]

    def __repr__(self) -> str:
        return f"regex({self.pattern.pattern!r})"


@dataclass(frozen=True)
class NumberPredicate:
    """Matches a prior NumericToken for which ``test`` returns True."""

    description: str
    test: Callable[[NumericToken], bool]

    def __call__(self, token: NumericToken) -> bool:
        return self.test(token)

    def __repr__(self) -> str:
        return self.description


PatternElement = Union[RegexElement, NumberPredicate]


@dataclass(frozen=True)
class Rule:
    """A named pattern plus the pure function that turns a matched window into a token."""

    name: str
    pattern: tuple[PatternElement, ...]
    produce: Production


# ─── Element Builders ────────────────────────────────────────────────


def regex(pattern: str) -> RegexElement:
    return RegexElement(re.compile(pattern, re.IGNORECASE))


def dimension_number() -> NumberPredicate:
    """Any numeric token."""
    return NumberPredicate("number", lambda token: True)


def number_equal(value: float) -> NumberPredicate:
    return NumberPredicate(f"number == {value:g}", lambda token: token.value == value)


def number_between(low: float, high: float) -> NumberPredicate:
    """Half-open range: ``low <= value < high``."""
    return NumberPredicate(
        f"{low:g} <= number < {high:g}",
        lambda token: low <= token.value < high,
    )


def one_of(values: Iterable[float]) -> NumberPredicate:
    allowed = frozenset(values)
    shown = ", ".join(f"{v:g}" for v in sorted(allowed))
    return NumberPredicate(f"number in {{{shown}}}", lambda token: token.value in allowed)


def without_grain() -> NumberPredicate:
    return NumberPredicate("number without grain", lambda token: token.grain is None)
