"""Tests for amount token resolution and CSV line splitting."""

from __future__ import annotations

import math

import pytest

from flowgraph.numbers import is_valid_amount, looks_numeric, parse_csv_line, parse_number


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("100", 100.0),
        ("1234.56", 1234.56),
        ("1,234", 1234.0),
        ("1,234,567", 1234567.0),
        ("$100", 100.0),
        ("$1,234.56", 1234.56),
        ("€2,500", 2500.0),
        ("  42  ", 42.0),
        ("10k", 10_000.0),
        ("10K", 10_000.0),
        ("5m", 5_000_000.0),
        ("2b", 2_000_000_000.0),
        ("1.5bn", 1_500_000_000.0),
        ("5 million", 5_000_000.0),
        ("2 Billion", 2_000_000_000.0),
        (".5", 0.5),
        ("29.998", 29.998),
    ],
)
def test_parse_number_accepts_common_formats(token: str, expected: float) -> None:
    assert parse_number(token) == pytest.approx(expected)


@pytest.mark.parametrize("token", ["", "   ", "abc", "12abc", "k", "$", "NaN", "1.2.3", "ten", None])
def test_parse_number_returns_nan_sentinel(token) -> None:
    assert math.isnan(parse_number(token))


def test_parse_number_keeps_sign_for_caller_to_reject() -> None:
    value = parse_number("-5")

    assert value == -5.0
    assert not is_valid_amount(value)


def test_is_valid_amount_rejects_zero_nan_and_inf() -> None:
    assert is_valid_amount(0.01)
    assert not is_valid_amount(0.0)
    assert not is_valid_amount(math.nan)
    assert not is_valid_amount(math.inf)


def test_looks_numeric() -> None:
    assert looks_numeric("1,200")
    assert not looks_numeric("Profit")


def test_parse_csv_line_simple() -> None:
    assert parse_csv_line("a,b,c") == ["a", "b", "c"]


def test_parse_csv_line_quoted_commas() -> None:
    assert parse_csv_line('"hello, world",test,value') == ["hello, world", "test", "value"]


def test_parse_csv_line_trims_whitespace() -> None:
    assert parse_csv_line("  a  ,  b  ,  c  ") == ["a", "b", "c"]


def test_parse_csv_line_keeps_empty_fields() -> None:
    assert parse_csv_line("Invalid,,abc") == ["Invalid", "", "abc"]
