"""Project record migration and record/entity conversion.

Stored projects are plain JSON-compatible dicts. Over time they have come in
several shapes:

- version 1 (legacy): a flat ``client`` string instead of ``clientName``, a
  flat ``items`` list instead of ``sections``, item fields named ``desc`` and
  ``qty``, numeric quantities, epoch-millisecond timestamps
- version 2 (current): everything below, tagged with ``schemaVersion``

``migrate_record`` coalesces any of these into the current shape. It is pure
and idempotent: running it on an already migrated record returns an equal
record.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, UTC
from typing import Any

from estimator.domain.entities import (
    DEFAULT_CATEGORY,
    DEFAULT_SECTION_NAME,
    DEFAULT_UNIT,
    Item,
    Project,
    Rates,
    Section,
)
from estimator.domain.errors import MalformedRecord
from estimator.utils.amount_parser import format_plain_number, to_number
from estimator.utils.date_parser import parse_timestamp
from estimator.utils.identifiers import new_identifier

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

RATE_FIELDS = ("taxPct", "overheadPct", "profitPct", "contingencyPct")


def _coalesce(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _text(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def _quantity_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_plain_number(value)
    return str(value)


def _timestamp_text(value: Any) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        parsed = datetime.now(UTC)
    return parsed.isoformat()


def default_item_record() -> dict[str, Any]:
    """Return a fresh default item record."""
    return {
        "id": new_identifier(),
        "description": "",
        "category": DEFAULT_CATEGORY,
        "quantity": "1",
        "unit": DEFAULT_UNIT,
        "unitCost": 0,
        "taxable": True,
    }


def migrate_item(raw: Mapping) -> dict[str, Any]:
    """Coalesce an item record into the current shape."""
    item = dict(raw)
    item["id"] = _text(item.get("id")) or new_identifier()
    item["description"] = _text(_coalesce(item.pop("description", None), item.pop("desc", None)))
    item["quantity"] = _quantity_text(_coalesce(item.pop("quantity", None), item.pop("qty", None)))
    item["category"] = _text(item.get("category"), DEFAULT_CATEGORY)
    item["unit"] = _text(item.get("unit"), DEFAULT_UNIT)
    item["unitCost"] = to_number(item.get("unitCost"))
    # Older saves left the flag out entirely; those items were never taxed.
    item["taxable"] = bool(item.get("taxable"))
    return item


def migrate_section(raw: Mapping, position: int = 1) -> dict[str, Any]:
    """Coalesce a section record into the current shape.

    Args:
        raw: Section record
        position: 1-based position, used to name unnamed sections
    """
    section = dict(raw)
    section["id"] = _text(section.get("id")) or new_identifier()
    section["name"] = _text(section.get("name")) or f"Section {position}"
    items = section.get("items")
    section["items"] = [
        migrate_item(item) for item in (items if isinstance(items, list) else [])
        if isinstance(item, Mapping)
    ]
    section["notes"] = _text(section.get("notes"))
    return section


def _migrate_rates(raw: Any, project_id: str) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        logger.info("Project %s has no rates; using zero rates", project_id)
        raw = {}
    rates = dict(raw)
    for key in RATE_FIELDS:
        rates[key] = to_number(rates.get(key))
    return rates


def migrate_record(raw: Any) -> dict[str, Any]:
    """Migrate a stored project record into the current shape.

    Args:
        raw: Project record as loaded from a store or snapshot

    Returns:
        New dict in the current shape; unknown keys are preserved

    Raises:
        MalformedRecord: If the record is not a mapping at all
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"Project record must be an object, got {type(raw).__name__}")

    record = dict(raw)
    record["id"] = _text(record.get("id")) or new_identifier()
    record["name"] = _text(record.get("name"))
    record["clientName"] = _text(_coalesce(record.get("clientName"), record.get("client")))
    record["clientPhone"] = _text(record.get("clientPhone"))
    record["clientEmail"] = _text(record.get("clientEmail"))
    record["estimateNumber"] = _text(record.get("estimateNumber"))
    record["estimateDate"] = _text(record.get("estimateDate"))
    record["notes"] = _text(record.get("notes"))
    record["rates"] = _migrate_rates(record.get("rates"), record["id"])

    legacy_items = record.pop("items", None)
    sections = record.get("sections")
    sections = [s for s in sections if isinstance(s, Mapping)] if isinstance(sections, list) else []
    if not sections:
        items = legacy_items if isinstance(legacy_items, list) and legacy_items else [default_item_record()]
        sections = [{"id": new_identifier(), "name": DEFAULT_SECTION_NAME, "items": items}]
    record["sections"] = [
        migrate_section(section, position) for position, section in enumerate(sections, start=1)
    ]

    record["createdAt"] = _timestamp_text(record.get("createdAt"))
    record["updatedAt"] = _timestamp_text(record.get("updatedAt"))
    record["schemaVersion"] = SCHEMA_VERSION
    return record


def item_from_record(record: Mapping) -> Item:
    """Build an Item entity from a migrated item record."""
    return Item(
        id=record["id"],
        description=record["description"],
        category=record["category"],
        quantity=record["quantity"],
        unit=record["unit"],
        unit_cost=record["unitCost"],
        taxable=record["taxable"],
    )


def item_to_record(item: Item) -> dict[str, Any]:
    """Convert an Item entity into its stored record."""
    return {
        "id": item.id,
        "description": item.description,
        "category": item.category,
        "quantity": item.quantity,
        "unit": item.unit,
        "unitCost": item.unit_cost,
        "taxable": item.taxable,
    }


def record_to_project(raw: Any) -> Project:
    """Migrate a stored record and build a Project entity from it.

    Raises:
        MalformedRecord: If the record is not a mapping
    """
    record = migrate_record(raw)
    rates = record["rates"]
    return Project(
        id=record["id"],
        name=record["name"],
        client_name=record["clientName"],
        client_phone=record["clientPhone"],
        client_email=record["clientEmail"],
        estimate_number=record["estimateNumber"],
        estimate_date=record["estimateDate"],
        sections=tuple(
            Section(
                id=section["id"],
                name=section["name"],
                items=tuple(item_from_record(item) for item in section["items"]),
                notes=section["notes"],
            )
            for section in record["sections"]
        ),
        rates=Rates(
            tax_pct=rates["taxPct"],
            overhead_pct=rates["overheadPct"],
            profit_pct=rates["profitPct"],
            contingency_pct=rates["contingencyPct"],
        ),
        notes=record["notes"],
        created_at=parse_timestamp(record["createdAt"]),
        updated_at=parse_timestamp(record["updatedAt"]),
    )


def project_to_record(project: Project) -> dict[str, Any]:
    """Convert a Project entity into its stored (current-shape) record."""
    return {
        "schemaVersion": SCHEMA_VERSION,
        "id": project.id,
        "name": project.name,
        "clientName": project.client_name,
        "clientPhone": project.client_phone,
        "clientEmail": project.client_email,
        "estimateNumber": project.estimate_number,
        "estimateDate": project.estimate_date,
        "sections": [
            {
                "id": section.id,
                "name": section.name,
                "items": [item_to_record(item) for item in section.items],
                "notes": section.notes,
            }
            for section in project.sections
        ],
        "rates": {
            "taxPct": project.rates.tax_pct,
            "overheadPct": project.rates.overhead_pct,
            "profitPct": project.rates.profit_pct,
            "contingencyPct": project.rates.contingency_pct,
        },
        "notes": project.notes,
        "createdAt": project.created_at.isoformat(),
        "updatedAt": project.updated_at.isoformat(),
    }
