"""Tests for project record migration."""

import copy

import pytest
from estimator.domain import project as ops
from estimator.domain.errors import MalformedRecord
from estimator.domain.migration import (
    SCHEMA_VERSION,
    migrate_item,
    migrate_record,
    project_to_record,
    record_to_project,
)

LEGACY_FLAT = {
    "id": "p1",
    "name": "Old Job",
    "client": "Bob Builder",
    "site": "123 Main St",
    "items": [
        {"id": "i1", "desc": "Concrete", "category": "materials", "qty": 3, "unit": "yd", "unitCost": 120, "taxable": True},
        {"id": "i2", "desc": "Pour", "category": "labor", "qty": "8", "unit": "hr", "unitCost": 65},
    ],
    "rates": {"taxPct": 7, "overheadPct": 10, "profitPct": 10, "contingencyPct": 0},
    "notes": "",
    "createdAt": 1700000000000,
    "updatedAt": 1700000000000,
}

LEGACY_SECTIONS = {
    "id": "p2",
    "name": "Sectioned",
    "client": "",
    "clientName": "Alice",
    "sections": [
        {"id": "s1", "name": "Demo", "items": [{"id": "i3", "desc": "Haul", "qty": 1, "unitCost": 300, "taxable": False}]},
    ],
    "rates": {"taxPct": 0, "overheadPct": 0, "profitPct": 10, "contingencyPct": 0},
}


def test_client_coalesced_from_legacy_field():
    """A flat client string becomes clientName."""
    record = migrate_record(LEGACY_FLAT)
    assert record["clientName"] == "Bob Builder"
    assert record["clientPhone"] == ""
    assert record["clientEmail"] == ""


def test_existing_client_name_wins():
    """clientName is kept when present, even next to a legacy client."""
    assert migrate_record(LEGACY_SECTIONS)["clientName"] == "Alice"


def test_flat_items_wrapped_into_section():
    """Legacy flat items become a single "Section 1"."""
    record = migrate_record(LEGACY_FLAT)

    assert "items" not in record
    assert len(record["sections"]) == 1
    section = record["sections"][0]
    assert section["name"] == "Section 1"
    assert [item["id"] for item in section["items"]] == ["i1", "i2"]
    assert section["notes"] == ""


def test_item_aliases_migrated():
    """desc/qty become description/quantity; numbers become strings."""
    item = migrate_record(LEGACY_FLAT)["sections"][0]["items"][0]

    assert item["description"] == "Concrete"
    assert item["quantity"] == "3"
    assert "desc" not in item
    assert "qty" not in item


def test_missing_taxable_is_not_taxable():
    """Items saved without the flag stay untaxed."""
    item = migrate_record(LEGACY_FLAT)["sections"][0]["items"][1]
    assert item["taxable"] is False


def test_empty_record_gets_default_section():
    """A record without sections or items gets one default item."""
    record = migrate_record({"name": "Blank"})

    assert len(record["sections"]) == 1
    assert record["sections"][0]["name"] == "Section 1"
    assert len(record["sections"][0]["items"]) == 1
    assert record["sections"][0]["items"][0]["unit"] == "ea"


def test_missing_rates_synthesized():
    """A record without rates gets zero rates instead of being rejected."""
    record = migrate_record({"name": "No rates", "sections": []})
    assert record["rates"] == {"taxPct": 0, "overheadPct": 0, "profitPct": 0, "contingencyPct": 0}


def test_non_mapping_rejected():
    """Records that are not objects cannot be migrated."""
    with pytest.raises(MalformedRecord):
        migrate_record(["not", "a", "project"])


@pytest.mark.parametrize("raw", [LEGACY_FLAT, LEGACY_SECTIONS, {}, {"sections": [], "items": []}])
def test_idempotent(raw):
    """Migrating a migrated record is a no-op."""
    once = migrate_record(raw)
    twice = migrate_record(copy.deepcopy(once))
    assert twice == once


def test_already_sectioned_not_rewrapped():
    """Existing sections are kept as they are."""
    record = migrate_record(LEGACY_SECTIONS)

    assert [s["id"] for s in record["sections"]] == ["s1"]
    assert record["sections"][0]["name"] == "Demo"


def test_migration_is_pure():
    """The input record is not modified."""
    raw = copy.deepcopy(LEGACY_FLAT)
    migrate_record(raw)
    assert raw == LEGACY_FLAT


def test_unknown_keys_preserved():
    """Keys the current schema does not know are carried along."""
    record = migrate_record(LEGACY_FLAT)
    assert record["site"] == "123 Main St"
    assert record["schemaVersion"] == SCHEMA_VERSION


def test_epoch_millisecond_timestamps():
    """Old epoch-millisecond timestamps become ISO strings."""
    project = record_to_project(LEGACY_FLAT)
    assert project.created_at.year == 2023


def test_record_to_project_entities():
    """Migrated records build full entities."""
    project = record_to_project(LEGACY_FLAT)

    assert project.client_name == "Bob Builder"
    assert project.rates.tax_pct == 7
    item = project.sections[0].items[0]
    assert item.description == "Concrete"
    assert item.quantity == "3"
    assert item.unit_cost == 120


def test_project_record_round_trip():
    """A project survives conversion to a record and back."""
    project = ops.new_project("Round Trip")
    assert record_to_project(project_to_record(project)) == project


def test_project_to_record_is_current():
    """Records written from entities are already migrated."""
    record = project_to_record(ops.new_project("Current"))
    assert migrate_record(record) == record


def test_migrate_item_coerces_unit_cost():
    """Non-numeric unit costs become 0."""
    assert migrate_item({"unitCost": "abc"})["unitCost"] == 0
    assert migrate_item({"unitCost": float("nan")})["unitCost"] == 0
