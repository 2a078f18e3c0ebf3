"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS = re.compile(r"[$€£¥\s]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "-$1,234.56", "$-5" and accounting-style negatives
    such as "(123.45)".

    Raises:
        ValueError: If the string is empty or not a number
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValueError("Empty amount string")

    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = CURRENCY_SYMBOLS.sub("", text).replace(",", "")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount


def parse_non_negative_amount(amount_str: str) -> Decimal:
    """Parse a debit or credit amount; blanks count as zero."""
    if not (amount_str or "").strip():
        return Decimal("0")
    amount = parse_amount(amount_str)
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount
