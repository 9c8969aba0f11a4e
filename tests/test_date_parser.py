"""Tests for date and month parsing."""

from datetime import date, timedelta

import pytest

from monthbook.utils.date_parser import parse_date, parse_month


def test_parse_absolute_dates():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_relative_dates():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date(" Yesterday ") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("04/2024", date(2024, 4, 1)),
        ("2024-04", date(2024, 4, 1)),
        ("2024-04-18", date(2024, 4, 1)),
        ("12/2023", date(2023, 12, 1)),
    ],
)
def test_parse_month(text, expected):
    assert parse_month(text) == expected


def test_parse_relative_months():
    current = date.today().replace(day=1)
    assert parse_month("this month") == current
    assert parse_month("last month") < current
    assert parse_month("next month") > current
    assert parse_month("next month").day == 1


@pytest.mark.parametrize("text", ["13/2024", "2024-13", "soon"])
def test_parse_month_invalid(text):
    with pytest.raises(ValueError):
        parse_month(text)
