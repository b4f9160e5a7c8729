"""
Cell Type Classifier
======================

Decides, per cell, whether a spreadsheet should see a Number or a String.

LEARNING POINT: Why Not Just Let Excel Decide?
-------------------------------------------------
Spreadsheet applications "helpfully" convert anything that looks like a
number. Two conversions destroy data:

  - Leading zeros:  "00123"            -> 123
  - Long digits:    "4900123456789012" -> 4.90012E+15 (last digits lost,
                                          doubles hold ~15 significant digits)

So we decide ourselves and write the type explicitly.

LEARNING POINT: Two Policies, Both Explicit
----------------------------------------------
There are two reasonable heuristics and neither is "the right one":

  LENGTH_ONLY          numeric and shorter than 15 characters -> Number
  LEADING_ZERO_AWARE   same, but "0..." (except "0" and "0.x") -> String

Serializers take the policy as a constructor argument instead of
hard-coding one, and the default comes from configuration.
"""

import re
from dataclasses import dataclass
from enum import Enum

from sheetexport.core.errors import UnsupportedFormatError

# Doubles carry ~15 significant digits; anything this long stays text
MAX_NUMERIC_LENGTH = 15

_NUMERIC_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class CellKind(str, Enum):
    """Render-time type of a cell."""

    NUMBER = "Number"
    STRING = "String"


class ClassifierPolicy(str, Enum):
    LENGTH_ONLY = "length_only"
    LEADING_ZERO_AWARE = "leading_zero_aware"


DEFAULT_POLICY = ClassifierPolicy.LEADING_ZERO_AWARE


@dataclass(frozen=True)
class ClassifiedCell:
    """A cell's text together with the kind it will be rendered as."""

    text: str
    kind: CellKind

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER


def is_numeric(text: str) -> bool:
    """
    True for a plain decimal literal: "42", "-3.5", ".5", "1e6".

    Stricter than float(): no surrounding whitespace, no "inf"/"nan",
    no "1_000" digit separators, and only ASCII digits.
    """
    return _NUMERIC_RE.fullmatch(text) is not None


def has_leading_zero(text: str) -> bool:
    """True for "0123", "00", "0e5"; False for "0" and "0.5"."""
    return len(text) > 1 and text[0] == "0" and text[1] != "."


def classify(
    text: str,
    policy: ClassifierPolicy = DEFAULT_POLICY,
    max_length: int = MAX_NUMERIC_LENGTH,
) -> CellKind:
    """
    Classify a cell's text as NUMBER or STRING.

    Args:
        text: Raw cell text, exactly as parsed
        policy: Which heuristic to apply
        max_length: Texts this long or longer are never numbers

    Returns:
        CellKind.NUMBER or CellKind.STRING
    """
    if not is_numeric(text) or len(text) >= max_length:
        return CellKind.STRING
    if policy is ClassifierPolicy.LEADING_ZERO_AWARE and has_leading_zero(text):
        return CellKind.STRING
    return CellKind.NUMBER


def classify_cell(
    text: str,
    policy: ClassifierPolicy = DEFAULT_POLICY,
    max_length: int = MAX_NUMERIC_LENGTH,
) -> ClassifiedCell:
    return ClassifiedCell(text, classify(text, policy, max_length))


def parse_policy(value: "str | ClassifierPolicy") -> ClassifierPolicy:
    """
    Turn a config value ("leading_zero_aware", "LENGTH_ONLY", ...) into a policy.

    Raises:
        UnsupportedFormatError: If the name matches no policy
    """
    if isinstance(value, ClassifierPolicy):
        return value
    key = str(value).strip().lower()
    for policy in ClassifierPolicy:
        if key == policy.value:
            return policy
    raise UnsupportedFormatError(f"Unknown classifier policy: {value}")
