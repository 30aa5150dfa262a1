"""Tests for CSV export."""

import pytest
from dataclasses import replace

from estimator.domain.csv_export import ITEM_HEADER, csv_escape, export_csv, export_filename, export_rows


@pytest.fixture
def export_project(make_project):
    """Single-section project with a quoted description and notes."""
    project = make_project(
        sections=[
            ("Framing", [
                {"description": "2x4, 8ft", "category": "materials", "quantity": "8", "unit": "ea", "unit_cost": 5.0, "taxable": True},
                {"description": "Labor", "category": "labor", "quantity": "4", "unit": "hr", "unit_cost": 50.0, "taxable": False},
            ])
        ],
        name="Deck",
        tax_pct=10,
    )
    section = replace(project.sections[0], notes='Use "pressure treated"')
    return replace(
        project,
        sections=(section,),
        estimate_number="#7",
        client_name="Jane",
        estimate_date="2024-05-01",
    )


def test_export_csv_text(export_project):
    """The export lays out details, sections, rates and totals."""
    expected = (
        "Project,Deck\n"
        "Estimate Number,#7\n"
        "Client Name,Jane\n"
        "Client Phone,\n"
        "Client Email,\n"
        "Estimate Date,2024-05-01\n"
        "\n"
        "Section 1: Framing\n"
        "Description,Category,Qty,Unit,Unit Cost,Taxable,Line Total\n"
        '"2x4, 8ft",materials,8,ea,5,YES,40\n'
        "Labor,labor,4,hr,50,NO,200\n"
        "Section Subtotal,240\n"
        'Section Notes,"Use ""pressure treated"""\n'
        "\n"
        "Tax %,10\n"
        "Overhead %,0\n"
        "Profit %,0\n"
        "Contingency %,0\n"
        "\n"
        "Subtotal,240\n"
        "Sales Tax,4\n"
        "Overhead,0\n"
        "Profit,0\n"
        "Contingency,0\n"
        "Total,244\n"
    )
    assert export_csv(export_project) == expected


def test_every_section_gets_a_block(sample_project):
    """Each section is numbered and has its own item header."""
    rows = export_rows(sample_project)

    assert ["Section 1: Framing"] in rows
    assert ["Section 2: Labor"] in rows
    assert sum(1 for row in rows if tuple(row) == ITEM_HEADER) == 2


def test_blank_notes_are_omitted(sample_project):
    """Whitespace-only notes do not produce a notes row."""
    project = replace(sample_project, sections=(replace(sample_project.sections[0], notes="   "),))
    assert not any(row[0] == "Section Notes" for row in export_rows(project))


def test_fractional_values(make_project):
    """Non-integral numbers keep their decimals."""
    project = make_project(sections=[("Main", [{"quantity": "1.5", "unit_cost": 2.25}])])
    rows = export_rows(project)
    item_row = rows[rows.index(list(ITEM_HEADER)) + 1]

    assert item_row[2] == "1.5"
    assert item_row[4] == "2.25"
    assert item_row[6] == "3.375"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("plain", "plain"),
        ("a,b", '"a,b"'),
        ('say "hi"', '"say ""hi"""'),
        ("two\nlines", '"two\nlines"'),
        ("", ""),
        (None, ""),
        (12, "12"),
    ],
)
def test_csv_escape(value, expected):
    """Only fields with special characters are quoted."""
    assert csv_escape(value) == expected


def test_export_filename(sample_project):
    """File names are sanitized project names."""
    assert export_filename(sample_project) == "Deck_estimate.csv"
    assert export_filename(replace(sample_project, name="Smith / Kitchen #2")) == "Smith_Kitchen_2_estimate.csv"
