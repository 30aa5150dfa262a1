"""Plain-text estimate preview for printing."""

from datetime import date
from typing import Optional

from estimator.domain.entities import Project, Totals
from estimator.domain.totals import calc_totals, line_total, section_subtotal
from estimator.utils.amount_parser import format_money, format_plain_number

WIDTH = 72
NOT_SPECIFIED = "Not specified"
DEFAULT_ESTIMATE_NUMBER = "#001"

CATEGORY_LABELS = (
    ("materials", "Materials"),
    ("labor", "Labor"),
    ("subcontract", "Subcontract"),
    ("other", "Other"),
)


def _row(label: str, value: str, indent: int = 0) -> str:
    label = " " * indent + label
    return f"{label:<{WIDTH - 20}}{value:>20}"


def render_estimate(project: Project, totals: Optional[Totals] = None) -> list[str]:
    """Render a project as printable lines of text.

    Args:
        project: Project to render
        totals: Precomputed totals (computed from the project when omitted)

    Returns:
        List of lines
    """
    if totals is None:
        totals = calc_totals(project)

    lines = [
        "=" * WIDTH,
        "ESTIMATE".center(WIDTH).rstrip(),
        (project.name or "Untitled Project").center(WIDTH).rstrip(),
        "=" * WIDTH,
        "",
        "Client Information",
        f"  Name:  {project.client_name or NOT_SPECIFIED}",
        f"  Phone: {project.client_phone or NOT_SPECIFIED}",
        f"  Email: {project.client_email or NOT_SPECIFIED}",
        "",
        "Project Information",
        f"  Estimate Number: {project.estimate_number or DEFAULT_ESTIMATE_NUMBER}",
        f"  Date: {project.estimate_date or date.today().isoformat()}",
        "",
        "Scope of Work",
        "-" * WIDTH,
    ]

    for section in project.sections:
        lines.append(section.name)
        for item in section.items:
            lines.append(_row(item.description or "(no description)", format_money(line_total(item)), indent=2))
            lines.append(
                f"    {item.category} | Qty: {item.quantity} {item.unit}"
                f" @ {format_money(item.unit_cost)}"
            )
        lines.append(_row("Section Subtotal", format_money(section_subtotal(section)), indent=2))
        if section.notes:
            lines.append(f"  Notes: {section.notes}")
        lines.append("")

    rates = project.rates
    lines.append("Summary")
    lines.append("-" * WIDTH)
    for key, label in CATEGORY_LABELS:
        lines.append(_row(label, format_money(totals.by_category.get(key, 0)), indent=2))
    for key, amount in totals.by_category.items():
        if key not in dict(CATEGORY_LABELS):
            lines.append(_row(key.title() or "Uncategorized", format_money(amount), indent=2))
    lines.append(_row("SUBTOTAL", format_money(totals.subtotal)))
    lines.append(_row(f"Sales Tax ({format_plain_number(rates.tax_pct)}%)", format_money(totals.tax), indent=2))
    lines.append(_row(f"Overhead ({format_plain_number(rates.overhead_pct)}%)", format_money(totals.overhead), indent=2))
    lines.append(_row(f"Profit ({format_plain_number(rates.profit_pct)}%)", format_money(totals.profit), indent=2))
    lines.append(
        _row(
            f"Contingency ({format_plain_number(rates.contingency_pct)}%)",
            format_money(totals.contingency),
            indent=2,
        )
    )
    lines.append("=" * WIDTH)
    lines.append(_row("TOTAL", format_money(totals.total)))

    if project.notes:
        lines.append("")
        lines.append("Notes")
        lines.append(f"  {project.notes}")

    return lines
