"""Amount parsing utilities."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
_THOUSANDS_SEPARATOR = re.compile(r",(?=\d{3}(?:\D|$))")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money amount typed by a user.

    Accepted forms include "123.45", "$1,234.56", "-5" and the accounting
    style "(42.10)" for negatives. Sign handling is left to the caller:
    journal lines reject negative amounts rather than moving them to the
    other column.

    Raises:
        ValueError: If the text is not a finite number
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValueError("Empty amount string")

    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    cleaned = _CURRENCY_SYMBOLS.sub("", text)
    cleaned = _THOUSANDS_SEPARATOR.sub("", cleaned).strip()
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    return -amount if negative else amount


def round_to_cents(amount: Decimal) -> Decimal:
    """Round half up to two decimal places, the precision amounts are stored at."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
