"""
The rule registry: every Spanish Number rule, in the order the host tries them.

Order never changes what a single rule produces. It only decides which rule a
scheduler tries first when candidate spans overlap.
"""

from __future__ import annotations

from .compose import (
    rule_diez_y_units,
    rule_hundreds_composition,
    rule_number_dot_number,
    rule_numbers_prefix_with_negative_or_minus,
    rule_numbers_suffixes_kmg,
    rule_tens_y_units,
)
from .lexicon import (
    rule_hundreds,
    rule_sixteen_to_twenty_nine,
    rule_tens,
    rule_zero_to_fifteen,
)
from .literals import (
    rule_decimal_number,
    rule_decimal_with_thousands_separator,
    rule_integer_numeric,
    rule_integer_with_thousands_separator,
)
from .patterns import Rule

RULES: tuple[Rule, ...] = (
    rule_decimal_number,
    rule_decimal_with_thousands_separator,
    rule_integer_numeric,
    rule_integer_with_thousands_separator,
    rule_zero_to_fifteen,
    rule_tens,
    rule_diez_y_units,
    rule_tens_y_units,
    rule_sixteen_to_twenty_nine,
    rule_hundreds,
    rule_number_dot_number,
    rule_hundreds_composition,
    rule_numbers_prefix_with_negative_or_minus,
    rule_numbers_suffixes_kmg,
)


def get_rule(name: str) -> Rule:
    """Look up a registered rule by name.

    Raises:
        KeyError: If no rule has that name.
    """
    for rule in RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)
