"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from fundtrack.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.50", Decimal("1234.50")),
        ("1234 MXN", Decimal("1234.00")),
        ("  0.5 ", Decimal("0.50")),
        ("10.005", Decimal("10.00")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["0", "-10", "$-3.00"])
def test_parse_amount_rejects_non_positive(text):
    with pytest.raises(ValueError, match="greater than zero"):
        parse_amount(text)


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)
