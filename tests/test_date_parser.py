"""Tests for date and amount parsing."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from switchbooks.utils.amount_parser import parse_amount, parse_non_negative_amount
from switchbooks.utils.date_parser import get_date_range, parse_date

# A Wednesday
TODAY = date(2024, 3, 13)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today_relative():
    assert parse_date("today") == date.today()
    assert parse_date("Yesterday", today=TODAY) == date(2024, 3, 12)
    assert parse_date("tomorrow", today=TODAY) == date(2024, 3, 14)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("this week", date(2024, 3, 11)),
        ("last week", date(2024, 3, 4)),
        ("next week", date(2024, 3, 18)),
        ("this month", date(2024, 3, 1)),
        ("last month", date(2024, 2, 1)),
        ("next month", date(2024, 4, 1)),
        ("this year", date(2024, 1, 1)),
        ("last year", date(2023, 1, 1)),
        ("next year", date(2025, 1, 1)),
        ("last monday", date(2024, 3, 11)),
        ("last wednesday", date(2024, 3, 6)),
    ],
)
def test_parse_relative_periods(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")
    with pytest.raises(ValueError):
        parse_date("")


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-week", (date(2024, 3, 11), TODAY)),
        ("this-month", (date(2024, 3, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_year_boundary():
    start, end = get_date_range("last-month", today=date(2024, 1, 5))
    assert (start, end) == (date(2023, 12, 1), date(2023, 12, 31))
    assert end + timedelta(days=1) == date(2024, 1, 1)


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-50", Decimal("-50")),
        ("$1,234.56", Decimal("1234.56")),
        ("-$12.00", Decimal("-12.00")),
        ("(99.50)", Decimal("-99.50")),
        (" € 7 ", Decimal("7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "1.2.3", "nan"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_non_negative_amount():
    assert parse_non_negative_amount("") == Decimal("0")
    assert parse_non_negative_amount("12.5") == Decimal("12.5")
    with pytest.raises(ValueError, match="negative"):
        parse_non_negative_amount("-1")
