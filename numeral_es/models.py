"""
Pydantic models for numeral tokens: immutable values passed between rules.

Every token is frozen. A rule never edits a token it receives; it builds a new
one. Tokens are tagged with a ``dimension`` so a production function can tell a
numeric token from a raw regex capture without guessing.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ─── Token Variants ─────────────────────────────────────────────────


class NumericToken(BaseModel):
    """A recognised number: its final value and an optional power-of-ten grain."""

    model_config = ConfigDict(frozen=True)

    dimension: Literal["number"] = "number"
    value: float = Field(allow_inf_nan=False)
    grain: Optional[int] = Field(default=None, ge=0, le=255)


class Capture(BaseModel):
    """Raw text matched by a regex element, with its sub-groups."""

    model_config = ConfigDict(frozen=True)

    dimension: Literal["regex"] = "regex"
    text: str
    groups: tuple[Optional[str], ...] = ()

    @property
    def first_group(self) -> str:
        """The first capture group, or the whole match if the regex has none."""
        if self.groups and self.groups[0] is not None:
            return self.groups[0]
        return self.text


Token = Annotated[Union[NumericToken, Capture], Field(discriminator="dimension")]


# ─── Severity Levels ────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of a consistency finding."""

    ERROR = "ERROR"  # Rule set is broken, refuse to use it
    WARNING = "WARNING"  # Works, but review it


# ─── Consistency Finding ────────────────────────────────────────────


class ValidationFinding(BaseModel):
    """A single finding about the lexical tables or the rule registry."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str  # Machine-readable, e.g. "LEXICON_REGEX_MISMATCH"
    subject: str  # Rule name or table name the finding is about
    message: str
    details: dict = Field(default_factory=dict)


# ─── Scheduler Output ───────────────────────────────────────────────


class ResolvedNumeral(BaseModel):
    """A numeral found in text by the reference scheduler."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    text: str
    value: float
    grain: Optional[int] = None
    rule: str  # Name of the rule that produced the outermost token
