"""Amount parsing and formatting utilities."""

import math
import re
from decimal import Decimal

CURRENCY_SYMBOL = "$"


def to_number(value) -> float:
    """Coerce a loosely typed value into a finite number.

    Numbers pass through unchanged when finite. Strings are parsed after
    stripping surrounding whitespace; an empty string is 0. Anything that
    does not parse, or parses to NaN/Infinity, becomes 0.

    Args:
        value: Number, numeric string, or None

    Returns:
        Finite number (int or float)
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    text = str(value).strip()
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def parse_currency(amount_str) -> float:
    """Parse currency-like text into a number.

    Handles various formats:
    - "12.3"
    - "$1,234.50"
    - "-$5"

    Every character except digits, "." and "-" is discarded before
    conversion. Text that is empty after stripping, or that still does not
    form a finite number, yields 0.

    Args:
        amount_str: Amount string (numbers are accepted as-is)

    Returns:
        Parsed amount
    """
    if isinstance(amount_str, (int, float)) and not isinstance(amount_str, bool):
        return amount_str if math.isfinite(amount_str) else 0

    cleaned = re.sub(r"[^0-9.\-]", "", str(amount_str or ""))
    return to_number(cleaned)


def format_money(amount) -> str:
    """Render an amount as a currency string, e.g. "$1,234.56".

    Non-finite or non-numeric input renders as the zero amount.
    """
    try:
        number = float(amount)
    except (TypeError, ValueError):
        number = 0.0
    if not math.isfinite(number):
        number = 0.0

    rendered = f"{CURRENCY_SYMBOL}{abs(number):,.2f}"
    if number < 0 and round(abs(number), 2) != 0:
        return f"-{rendered}"
    return rendered


def format_plain_number(value) -> str:
    """Render a number without currency formatting or rounding.

    Integral values below 1e21 render as plain digits, so 40.0 becomes "40"
    and 1e20 becomes "100000000000000000000" (shortest digits, zero padded).
    Everything else keeps full floating-point precision.
    """
    number = to_number(value)
    if isinstance(number, int):
        return str(number)
    if number.is_integer() and abs(number) < 1e21:
        if abs(number) < 1e16:
            return str(int(number))
        return format(Decimal(repr(number)), "f")
    return repr(number)
