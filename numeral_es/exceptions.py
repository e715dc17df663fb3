"""
Custom exception hierarchy for numeral parsing.

These are INTERNAL signals. Production functions catch NumeralError and turn it
into "no token"; the host scheduler never sees an exception for bad user text.
The only error that escapes is RuleRegistryError, which means the rule set itself
is broken.
"""

from __future__ import annotations


class NumeralError(Exception):
    """Base exception for all numeral parsing failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class LexiconLookupError(NumeralError):
    """A matched spelling is missing from its table (tables and regex disagree)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("LEXICON_LOOKUP_MISS", message, details)


class NumericFormatError(NumeralError):
    """A literal could not be parsed as a number after normalization."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("NUMERIC_FORMAT_INVALID", message, details)


class NumericOverflowError(NumeralError):
    """A literal is too long, or a computed value is not finite."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("NUMERIC_OVERFLOW", message, details)


class RuleRegistryError(NumeralError):
    """The rule registry failed its consistency checks."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("RULE_REGISTRY_INVALID", message, details)
