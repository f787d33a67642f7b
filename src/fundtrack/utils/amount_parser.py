"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥Q]|MXN|USD|GTQ", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a positive money amount into a Decimal rounded to cents.

    Accepts "123.45", "$1,234.50", "1234 MXN" and similar.

    Raises:
        ValueError: If the string is empty, malformed, or not greater than zero
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", amount_str).replace(",", "").strip()
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got '{amount_str}'")
    return amount.quantize(Decimal("0.01"))
