"""CSV export of a project estimate."""

from typing import Iterable, Optional

from estimator.domain.entities import Project, Totals
from estimator.domain.totals import calc_totals, line_total, section_subtotal
from estimator.utils.amount_parser import format_plain_number
from estimator.utils.filename import sanitize_filename

ITEM_HEADER = ("Description", "Category", "Qty", "Unit", "Unit Cost", "Taxable", "Line Total")

_SPECIAL_CHARACTERS = (",", '"', "\n", "\r")


def csv_escape(value) -> str:
    """Quote a field only when it contains a comma, quote or newline.

    Embedded quotes are doubled. None renders as an empty field.
    """
    text = "" if value is None else str(value)
    if any(ch in text for ch in _SPECIAL_CHARACTERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _format_row(row: Iterable) -> str:
    return ",".join(csv_escape(field) for field in row)


def export_rows(project: Project, totals: Optional[Totals] = None) -> list[list[str]]:
    """Build the rows of the estimate export.

    Args:
        project: Project to export
        totals: Precomputed totals (computed from the project when omitted)

    Returns:
        List of rows; each row is a list of unescaped fields
    """
    if totals is None:
        totals = calc_totals(project)

    rows: list[list[str]] = [
        ["Project", project.name],
        ["Estimate Number", project.estimate_number],
        ["Client Name", project.client_name],
        ["Client Phone", project.client_phone],
        ["Client Email", project.client_email],
        ["Estimate Date", project.estimate_date],
        [""],
    ]

    for index, section in enumerate(project.sections, start=1):
        rows.append([f"Section {index}: {section.name}"])
        rows.append(list(ITEM_HEADER))
        for item in section.items:
            rows.append(
                [
                    item.description,
                    item.category,
                    str(item.quantity),
                    item.unit,
                    format_plain_number(item.unit_cost),
                    "YES" if item.taxable else "NO",
                    format_plain_number(line_total(item)),
                ]
            )
        rows.append(["Section Subtotal", format_plain_number(section_subtotal(section))])
        if section.notes and section.notes.strip():
            rows.append(["Section Notes", section.notes])
        rows.append([""])

    rates = project.rates
    rows.extend(
        [
            ["Tax %", format_plain_number(rates.tax_pct)],
            ["Overhead %", format_plain_number(rates.overhead_pct)],
            ["Profit %", format_plain_number(rates.profit_pct)],
            ["Contingency %", format_plain_number(rates.contingency_pct)],
            [""],
            ["Subtotal", format_plain_number(totals.subtotal)],
            ["Sales Tax", format_plain_number(totals.tax)],
            ["Overhead", format_plain_number(totals.overhead)],
            ["Profit", format_plain_number(totals.profit)],
            ["Contingency", format_plain_number(totals.contingency)],
            ["Total", format_plain_number(totals.total)],
        ]
    )
    return rows


def export_csv(project: Project, totals: Optional[Totals] = None) -> str:
    """Serialize a project and its totals to CSV text.

    Rows are comma-separated and each row ends with "\\n".
    """
    return "".join(_format_row(row) + "\n" for row in export_rows(project, totals))


def export_filename(project: Project) -> str:
    """Return the download file name for a project's CSV export."""
    return f"{sanitize_filename(project.name)}_estimate.csv"
