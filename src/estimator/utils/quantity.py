"""Quantity string normalization."""

import re

from estimator.utils.amount_parser import to_number


def normalize_qty_string(value) -> str:
    """Normalize user-typed quantity text into a decimal string.

    Only digits and dots survive. The first dot wins and later dots are
    dropped. Leading zeros are stripped from the integer part ("045" -> "45",
    but "0" and "0.5" are kept), and a bare fraction gains a leading zero
    (".5" -> "0.5"). A trailing dot is preserved so that in-progress input
    such as "2." is not destroyed. Applying it twice gives the same result.

    Args:
        value: Raw quantity text (None is treated as empty)

    Returns:
        Normalized quantity string, possibly empty
    """
    text = re.sub(r"[^0-9.]", "", "" if value is None else str(value))

    integer_part, dot, decimal_part = text.partition(".")
    decimal_part = decimal_part.replace(".", "")

    integer_part = re.sub(r"^0+(?=\d)", "", integer_part)
    if not dot:
        return integer_part
    if integer_part == "":
        integer_part = "0"
    return f"{integer_part}.{decimal_part}"


def quantity_value(quantity) -> float:
    """Return the numeric value of a stored quantity.

    Stored quantities are strings (or numbers in older records). Anything
    empty or unparseable counts as 0.
    """
    return to_number(quantity)
