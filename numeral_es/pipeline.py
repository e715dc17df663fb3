"""
Reference scheduler: runs the rule registry over a text and resolves overlaps.

Flow:
  ┌──────────┐
  │   Text   │
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Saturate │   ← apply every rule, pass after pass, until nothing new appears
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Resolve  │   ← longest span wins, earlier composition breaks ties
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Numerals │   ← ResolvedNumeral list, in text order
  └──────────┘

Matching conventions:
  - A regex that opens a pattern is searched over the whole text; any later
    regex is anchored where the previous element ended.
  - Consecutive pattern elements may be separated by whitespace only.
  - A regex match is discarded if it splits a word or a digit run: at each
    edge, the characters on both sides must not both be letters or both be
    digits. This keeps "seis" out of "dieciseis" and "k" out of "2king".

A production host brings its own scheduler; this one exists so the grammar
can be exercised end to end.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Optional, Sequence

from .compose import rule_numbers_prefix_with_negative_or_minus
from .exceptions import RuleRegistryError
from .models import Capture, NumericToken, ResolvedNumeral, Severity, Token
from .patterns import NumberPredicate, PatternElement, RegexElement, Rule
from .rules import RULES
from .validators import validate_all

logger = logging.getLogger(__name__)

# Upper bound on saturation passes; each pass can only grow spans, so real
# inputs reach a fixed point long before this.
MAX_PASSES = 16


# ─── Internal Structures ────────────────────────────────────────────


@dataclass(frozen=True)
class _Node:
    """A NumericToken placed on the text."""

    start: int
    end: int
    token: NumericToken
    rule_index: int
    head_end: int  # End of the span covered by the first pattern element
    head_rule: Optional[int]  # rule_index of the node in the first slot; None for a regex head
    children: tuple[_Node, ...] = ()  # Nodes filling the number slots, in pattern order


@dataclass(frozen=True)
class _Match:
    start: int
    end: int
    head_end: int
    head_rule: Optional[int]
    window: tuple[Token, ...]
    children: tuple[_Node, ...]


def _char_class(c: str) -> Optional[str]:
    if c.isalpha():
        return "alpha"
    if c.isdigit():
        return "digit"
    return None


def _is_boundary(text: str, i: int) -> bool:
    if i <= 0 or i >= len(text):
        return True
    left, right = _char_class(text[i - 1]), _char_class(text[i])
    return left is None or right is None or left != right


def _valid_range(text: str, start: int, end: int) -> bool:
    return end > start and _is_boundary(text, start) and _is_boundary(text, end)


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


# ─── Pipeline ───────────────────────────────────────────────────────


class NumeralPipeline:
    """Applies a rule set to text and returns the numerals it finds.

    Usage:
        pipeline = NumeralPipeline()
        for numeral in pipeline.run("treinta y siete o -5"):
            print(numeral.text, numeral.value)

    The instance holds only immutable state, so it can be shared across threads.
    """

    def __init__(self, rules: Sequence[Rule] | None = None, max_passes: int = MAX_PASSES):
        self.rules: tuple[Rule, ...] = tuple(RULES if rules is None else rules)
        self.max_passes = max_passes
        self._prefix_rules = frozenset(
            i for i, rule in enumerate(self.rules)
            if rule.name == rule_numbers_prefix_with_negative_or_minus.name
        )

        errors = [f for f in validate_all(self.rules) if f.severity == Severity.ERROR]
        if errors:
            raise RuleRegistryError(
                f"Rule set failed {len(errors)} consistency check(s): "
                + "; ".join(f.message for f in errors),
                {"codes": [f.code for f in errors]},
            )
        logger.info("Numeral pipeline ready with %d rules", len(self.rules))

    def run(self, text: str) -> list[ResolvedNumeral]:
        """Find every numeral in ``text``.

        Args:
            text: Free text, e.g. "cuesta tres cientos veinte euros".

        Returns:
            Non-overlapping ResolvedNumeral objects in text order. Unrecognized
            text is simply absent; this never raises on user input.
        """
        nodes = self._saturate(text)
        return [
            ResolvedNumeral(
                start=node.start,
                end=node.end,
                text=text[node.start:node.end],
                value=node.token.value,
                grain=node.token.grain,
                rule=self.rules[node.rule_index].name,
            )
            for node in self._resolve(nodes)
        ]

    # ─── Saturation ─────────────────────────────────────────────────

    def _saturate(self, text: str) -> list[_Node]:
        nodes: list[_Node] = []
        seen: set[tuple[int, int, float, Optional[int]]] = set()

        for pass_number in range(1, self.max_passes + 1):
            by_start: dict[int, list[_Node]] = defaultdict(list)
            for node in nodes:
                by_start[node.start].append(node)
            snapshot = list(nodes)

            added = 0
            for rule_index, rule in enumerate(self.rules):
                for match in self._match_rule(text, rule.pattern, snapshot, by_start):
                    token = rule.produce(match.window)
                    if token is None:
                        continue
                    key = (match.start, match.end, token.value, token.grain)
                    if key in seen:
                        continue
                    seen.add(key)
                    nodes.append(
                        _Node(
                            match.start, match.end, token, rule_index,
                            match.head_end, match.head_rule, match.children,
                        )
                    )
                    added += 1

            if not added:
                logger.debug("Fixed point after %d pass(es), %d token(s)", pass_number, len(nodes))
                break
        else:
            logger.warning(
                "No fixed point after %d passes on %r; keeping %d token(s)",
                self.max_passes,
                text,
                len(nodes),
            )

        return nodes

    def _match_rule(
        self,
        text: str,
        pattern: Sequence[PatternElement],
        nodes: Sequence[_Node],
        by_start: dict[int, list[_Node]],
    ) -> Iterator[_Match]:
        if not pattern:
            return
        head = pattern[0]

        if isinstance(head, RegexElement):
            for m in head.pattern.finditer(text):
                if not _valid_range(text, m.start(), m.end()):
                    continue
                capture = Capture(text=m.group(0), groups=m.groups())
                for end, window, children in self._extend(text, pattern, 1, m.end(), (capture,), (), by_start):
                    yield _Match(m.start(), end, m.end(), None, window, children)
        elif isinstance(head, NumberPredicate):
            for node in nodes:
                if head(node.token):
                    for end, window, children in self._extend(
                        text, pattern, 1, node.end, (node.token,), (node,), by_start
                    ):
                        yield _Match(node.start, end, node.end, node.rule_index, window, children)

    def _extend(
        self,
        text: str,
        pattern: Sequence[PatternElement],
        index: int,
        pos: int,
        window: tuple[Token, ...],
        children: tuple[_Node, ...],
        by_start: dict[int, list[_Node]],
    ) -> Iterator[tuple[int, tuple[Token, ...], tuple[_Node, ...]]]:
        """Match ``pattern[index:]`` right after ``pos`` (whitespace allowed in between).

        Yields ``(end, window, children)`` for every way the remaining elements fit.
        """
        if index == len(pattern):
            yield pos, window, children
            return

        element = pattern[index]
        at = _skip_whitespace(text, pos)

        if isinstance(element, RegexElement):
            m = element.pattern.match(text, at)
            if m is not None and _valid_range(text, m.start(), m.end()):
                capture = Capture(text=m.group(0), groups=m.groups())
                yield from self._extend(
                    text, pattern, index + 1, m.end(), window + (capture,), children, by_start
                )
        elif isinstance(element, NumberPredicate):
            for node in by_start.get(at, ()):
                if element(node.token):
                    yield from self._extend(
                        text, pattern, index + 1, node.end, window + (node.token,), children + (node,), by_start
                    )

    # ─── Resolution ─────────────────────────────────────────────────

    def _rank(self, node: _Node) -> tuple:
        """Preference among nodes covering the same span; smaller is better.

        In order:
          1. A node built on top of a negation loses, so "menos tres punto
             cinco" reads as -(3.5) and not (-3) + 0.5.
          2. The node whose first pattern element covers more text wins
             (left-to-right composition: "tres punto cinco k" is 3.5 * 1000).
          3. The earlier rule wins.
          4. The children are compared the same way, so the preferences
             above also hold under a negation ("menos tres punto cinco k").
        """
        return (
            node.head_rule in self._prefix_rules,
            -(node.head_end - node.start),
            node.rule_index,
            tuple(self._rank(child) for child in node.children),
        )

    def _resolve(self, nodes: Sequence[_Node]) -> list[_Node]:
        """Greedy longest-span selection, ties settled by ``_rank``."""
        ranked = sorted(nodes, key=lambda n: (-(n.end - n.start), self._rank(n), n.start))
        chosen: list[_Node] = []
        for node in ranked:
            if any(node.start < c.end and c.start < node.end for c in chosen):
                continue
            chosen.append(node)
        return sorted(chosen, key=lambda n: n.start)


# ─── Reference Helpers ──────────────────────────────────────────────
#
# Shortcuts over the reference scheduler for tests and local experiments.
# They are not part of the grammar's interface: a host that owns its own
# scheduler imports the rule registry and ignores everything below.


@lru_cache(maxsize=1)
def default_pipeline() -> NumeralPipeline:
    """A shared reference pipeline over the full Spanish rule registry."""
    return NumeralPipeline()


def parse_numerals(text: str) -> list[ResolvedNumeral]:
    """Reference helper: every Spanish numeral in ``text``, default rule set."""
    return default_pipeline().run(text)


def to_number(text: str) -> float | None:
    """Reference helper: value of ``text`` if the whole (stripped) text is one numeral, else None.

    Example:
        to_number("treinta y siete") → 37.0
        to_number("treinta gatos")   → None
    """
    stripped = text.strip()
    numerals = default_pipeline().run(stripped)
    if len(numerals) == 1 and numerals[0].start == 0 and numerals[0].end == len(stripped):
        return numerals[0].value
    return None
