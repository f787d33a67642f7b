"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from fundtrack.utils.date_parser import parse_date, get_date_range

# A Wednesday
TODAY = date(2024, 3, 13)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_days():
    assert parse_date("today", today=TODAY) == TODAY
    assert parse_date("yesterday", today=TODAY) == date(2024, 3, 12)
    assert parse_date("Tomorrow", today=TODAY) == date(2024, 3, 14)


def test_parse_today_defaults_to_current_date():
    assert parse_date("today") == date.today()


def test_parse_last_month():
    """'last month' is the first day of last month."""
    assert parse_date("last month", today=TODAY) == date(2024, 2, 1)
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_week_starts_on_monday():
    assert parse_date("this week", today=TODAY) == date(2024, 3, 11)
    assert parse_date("last week", today=TODAY) == date(2024, 3, 4)
    assert parse_date("last week", today=TODAY).weekday() == 0


def test_parse_year():
    assert parse_date("this year", today=TODAY) == date(2024, 1, 1)
    assert parse_date("last year", today=TODAY) == date(2023, 1, 1)


def test_parse_invalid_relative():
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_garbage():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date at all")


def test_parse_standard_formats():
    """These go through dateutil."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_get_date_range_current_periods_end_today():
    assert get_date_range("this-month", today=TODAY) == (date(2024, 3, 1), TODAY)
    assert get_date_range("this-year", today=TODAY) == (date(2024, 1, 1), TODAY)
    assert get_date_range("this-week", today=TODAY) == (date(2024, 3, 11), TODAY)


def test_get_date_range_last_month():
    assert get_date_range("last-month", today=TODAY) == (date(2024, 2, 1), date(2024, 2, 29))
    assert get_date_range("last-month", today=date(2024, 1, 1)) == (date(2023, 12, 1), date(2023, 12, 31))


def test_get_date_range_last_year():
    assert get_date_range("last-year", today=TODAY) == (date(2023, 1, 1), date(2023, 12, 31))


def test_get_date_range_last_week():
    start, end = get_date_range("last-week", today=TODAY)
    assert start == date(2024, 3, 4)
    assert end == start + timedelta(days=6)
    assert end.weekday() == 6


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")
