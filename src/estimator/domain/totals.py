"""Totals engine: the markup cascade and category breakdown."""

from collections.abc import Mapping
from typing import Any, Iterable

from estimator.domain.entities import DEFAULT_CATEGORY, Item, Totals
from estimator.utils.amount_parser import to_number
from estimator.utils.quantity import quantity_value

_RATE_KEYS = {
    "tax_pct": "taxPct",
    "overhead_pct": "overheadPct",
    "profit_pct": "profitPct",
    "contingency_pct": "contingencyPct",
}


def _get(obj: Any, attr: str, *keys: str):
    """Read a field from an entity or from a raw record (first present key)."""
    if isinstance(obj, Mapping):
        for key in keys or (attr,):
            if obj.get(key) is not None:
                return obj[key]
        return None
    return getattr(obj, attr, None)


def all_items(project) -> list:
    """Flatten items across sections in order.

    Raw records without sections fall back to a legacy flat ``items`` list.
    """
    sections = _get(project, "sections") or ()
    if sections:
        return [item for section in sections for item in (_get(section, "items") or ())]
    if isinstance(project, Mapping):
        return list(project.get("items") or ())
    return []


def line_total(item: Item | Mapping) -> float:
    """Quantity times unit cost; invalid numbers count as 0."""
    quantity = quantity_value(_get(item, "quantity", "quantity", "qty"))
    unit_cost = to_number(_get(item, "unit_cost", "unitCost"))
    return quantity * unit_cost


def _sum_lines(items: Iterable) -> float:
    return sum((line_total(item) for item in items), 0)


def section_subtotal(section) -> float:
    """Sum of line totals for one section."""
    return _sum_lines(_get(section, "items") or ())


def _rate(rates, attr: str) -> float:
    if rates is None:
        return 0
    return to_number(_get(rates, attr, _RATE_KEYS[attr]))


def calc_totals(project) -> Totals:
    """Compute the estimate totals for a project.

    The cascade runs in a fixed order without intermediate rounding: tax
    applies to taxable items only, overhead to the subtotal, profit to
    subtotal + overhead + tax, and contingency to everything before it.

    Args:
        project: Project entity, or a raw record with ``sections`` (or a
            legacy ``items`` list) and ``rates``

    Returns:
        Totals record; all zeros for an empty project
    """
    items = all_items(project)
    rates = _get(project, "rates")

    subtotal = _sum_lines(items)
    taxable_base = _sum_lines(item for item in items if _get(item, "taxable"))

    tax = _rate(rates, "tax_pct") / 100 * taxable_base
    overhead = _rate(rates, "overhead_pct") / 100 * subtotal
    profit = _rate(rates, "profit_pct") / 100 * (subtotal + overhead + tax)
    contingency = _rate(rates, "contingency_pct") / 100 * (
        subtotal + overhead + tax + profit
    )
    total = subtotal + tax + overhead + profit + contingency

    by_category: dict[str, float] = {}
    for item in items:
        category = _get(item, "category")
        key = DEFAULT_CATEGORY if category is None else str(category)
        by_category[key] = by_category.get(key, 0) + line_total(item)

    return Totals(
        subtotal=subtotal,
        tax=tax,
        overhead=overhead,
        profit=profit,
        contingency=contingency,
        total=total,
        by_category=by_category,
    )
