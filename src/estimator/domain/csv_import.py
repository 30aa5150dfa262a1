"""CSV import of estimate line items."""

import csv
import logging
import re
from typing import Optional

from estimator.domain.csv_export import ITEM_HEADER
from estimator.domain.entities import DEFAULT_CATEGORY, DEFAULT_UNIT, ImportResult, Item, Project
from estimator.domain.project import replace_section_items
from estimator.utils.amount_parser import to_number
from estimator.utils.identifiers import new_identifier

logger = logging.getLogger(__name__)

_TAXABLE_PATTERN = re.compile(r"y(es)?", re.IGNORECASE)


def parse_csv_line(line: str) -> list[str]:
    """Parse a single CSV line (quoted fields, doubled-quote escaping)."""
    try:
        return next(csv.reader([line]), [])
    except csv.Error:
        return []


def _find_header(lines: list[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if tuple(parse_csv_line(line.rstrip("\r\n"))) == ITEM_HEADER:
            return index
    return None


def _item_from_row(row: list[str]) -> Item:
    description, category, quantity, unit, unit_cost, taxable = row[:6]
    return Item(
        id=new_identifier(),
        description=description or "",
        category=(category or DEFAULT_CATEGORY).lower(),
        quantity=quantity,
        unit=unit or DEFAULT_UNIT,
        unit_cost=to_number(unit_cost),
        taxable=bool(_TAXABLE_PATTERN.fullmatch(taxable or "YES")),
    )


def parse_csv_items(text: str) -> ImportResult:
    """Parse the first item table out of an exported estimate.

    The text is scanned for the first item header row. Every following
    record becomes an item until a blank line or a record with fewer than
    seven fields (the section subtotal or totals block) is reached. Text
    without a header yields no items.

    Args:
        text: CSV text, "\\n" or "\\r\\n" line endings

    Returns:
        ImportResult with freshly identified items
    """
    lines = [line + "\n" for line in (text or "").split("\n")]
    header_index = _find_header(lines)
    if header_index is None:
        logger.debug("No item header found in CSV text")
        return ImportResult(items=(), header_found=False)

    items = []
    reader = csv.reader(lines[header_index + 1:])
    try:
        for row in reader:
            if not row:
                break
            # Fewer than seven columns means the totals block was reached.
            if len(row) < len(ITEM_HEADER):
                break
            items.append(_item_from_row(row))
    except csv.Error as e:
        logger.info("Stopped CSV import at malformed record: %s", e)

    logger.info("Parsed %d item(s) from CSV", len(items))
    return ImportResult(items=tuple(items), header_found=True)


def import_csv_into_section(
    project: Project, text: str, section_id: Optional[str] = None
) -> tuple[Project, ImportResult]:
    """Replace one section's items with the items parsed from CSV text.

    Args:
        project: Target project
        text: CSV text from an estimate export
        section_id: Target section (the first section when omitted)

    Returns:
        Tuple of (updated project, import result). Other sections are
        left untouched.
    """
    result = parse_csv_items(text)
    return replace_section_items(project, result.items, section_id), result
