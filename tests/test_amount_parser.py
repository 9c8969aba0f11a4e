"""Tests for amount parsing."""

import pytest

from monthbook.utils.amount_parser import format_money, parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", 123.45),
        ("123,45", 123.45),
        ("R$ 1.234,56", 1234.56),
        ("$1,234.56", 1234.56),
        ("  42 ", 42.0),
        ("(10.50)", -10.5),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "   ", "abc", "12a", "inf"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_format_money():
    assert format_money(1234.5) == "1,234.50"
    assert format_money(-3) == "-3.00"
