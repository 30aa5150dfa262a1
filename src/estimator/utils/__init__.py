"""Utility functions for estimator."""

from estimator.utils.amount_parser import parse_currency, format_money
from estimator.utils.quantity import normalize_qty_string
from estimator.utils.filename import sanitize_filename
from estimator.utils.identifiers import new_identifier

__all__ = [
    "parse_currency",
    "format_money",
    "normalize_qty_string",
    "sanitize_filename",
    "new_identifier",
]
