"""
numeral_es: Spanish numeral grammar for a rule-based text extraction host.

Architecture: Lexical tables + Literal matchers → Composition rules → Rule registry
Philosophy:  Every rule is a pure function. A failed parse is "no token", never a crash.
"""

__version__ = "1.0.0"
