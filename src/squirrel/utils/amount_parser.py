"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def to_ledger_amount(amount_str: str) -> str:
    """Parse a human amount and render it as ledger amount text.

    Digits after the decimal point are kept as written, so "1,234.50"
    becomes "1234.50".
    """
    return format(parse_amount(amount_str), "f")
