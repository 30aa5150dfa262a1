"""Domain layer for estimator application."""

from estimator.domain.totals import calc_totals, section_subtotal, all_items
from estimator.domain.migration import migrate_record, record_to_project, project_to_record
from estimator.domain.csv_export import export_csv, export_filename
from estimator.domain.csv_import import parse_csv_items, import_csv_into_section

__all__ = [
    "calc_totals",
    "section_subtotal",
    "all_items",
    "migrate_record",
    "record_to_project",
    "project_to_record",
    "export_csv",
    "export_filename",
    "parse_csv_items",
    "import_csv_into_section",
]
