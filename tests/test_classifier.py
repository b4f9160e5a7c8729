"""
Tests for the Cell Type Classifier
=====================================
Both policies, the 15-character cutoff and the strict numeric check.
"""

import dataclasses

import pytest

from sheetexport.core.classifier import (
    CellKind,
    ClassifierPolicy,
    classify,
    classify_cell,
    is_numeric,
    parse_policy,
)
from sheetexport.core.errors import UnsupportedFormatError


@pytest.mark.parametrize("text", ["0", "150000", "-3.5", "+2", ".5", "5.", "1e6", "2.5E-3"])
def test_is_numeric_accepts_plain_literals(text):
    assert is_numeric(text)


@pytest.mark.parametrize(
    "text",
    ["", "abc", " 12", "12 ", "1_000", "inf", "nan", "0x1A", "1e", "1,000", "１２", "01-TEST"],
)
def test_is_numeric_rejects_everything_else(text):
    assert not is_numeric(text)


def test_length_cutoff():
    assert classify("12345678901234") is CellKind.NUMBER    # 14 chars
    assert classify("123456789012345") is CellKind.STRING   # 15 chars
    assert classify("4900123456789012") is CellKind.STRING


def test_length_counts_sign_and_point():
    assert classify("-1234567890.123") is CellKind.STRING   # 15 chars


def test_leading_zero_aware_policy():
    policy = ClassifierPolicy.LEADING_ZERO_AWARE
    assert classify("00123", policy) is CellKind.STRING
    assert classify("0123", policy) is CellKind.STRING
    assert classify("0", policy) is CellKind.NUMBER
    assert classify("0.5", policy) is CellKind.NUMBER
    assert classify("100", policy) is CellKind.NUMBER


def test_length_only_policy_ignores_leading_zeros():
    policy = ClassifierPolicy.LENGTH_ONLY
    assert classify("00123", policy) is CellKind.NUMBER
    assert classify("123456789012345", policy) is CellKind.STRING


def test_default_policy_is_leading_zero_aware():
    assert classify("00123") is CellKind.STRING


def test_non_numeric_text_is_string():
    assert classify("PC") is CellKind.STRING
    assert classify("01-TEST") is CellKind.STRING
    assert classify("") is CellKind.STRING


def test_custom_max_length():
    assert classify("12345", max_length=5) is CellKind.STRING
    assert classify("1234", max_length=5) is CellKind.NUMBER


def test_classified_cell_is_immutable():
    cell = classify_cell("150000")
    assert cell.text == "150000"
    assert cell.is_number
    with pytest.raises(dataclasses.FrozenInstanceError):
        cell.kind = CellKind.STRING


def test_parse_policy():
    assert parse_policy("length_only") is ClassifierPolicy.LENGTH_ONLY
    assert parse_policy(" LEADING_ZERO_AWARE ") is ClassifierPolicy.LEADING_ZERO_AWARE
    assert parse_policy(ClassifierPolicy.LENGTH_ONLY) is ClassifierPolicy.LENGTH_ONLY


def test_parse_policy_unknown():
    with pytest.raises(UnsupportedFormatError):
        parse_policy("guess")
    # Also a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        parse_policy("guess")
