#!/usr/bin/env python3
"""Migration script to move a local snapshot into the project store.

Older versions of the estimator kept every project in a single JSON
snapshot, in one of several record shapes:
- a single project object instead of a list
- a flat "client" string instead of "clientName"
- a flat "items" list instead of "sections"
- items with "desc"/"qty" instead of "description"/"quantity"

This migration reads the snapshot, migrates every record to the current
shape, saves each project to the store, and rewrites the snapshot in the
current shape. Records that are already current are saved unchanged, so the
script can be run repeatedly.

Usage:
    python migrations/migrate_local_snapshot.py [--db-path PATH] [--snapshot-path PATH] [--user USER]
"""

import argparse
import sys
from pathlib import Path

# Add src to path so we can import estimator modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from estimator.domain.errors import MalformedRecord, StoreUnavailable
from estimator.domain.migration import SCHEMA_VERSION, record_to_project
from estimator.store.base import DEFAULT_USER_ID
from estimator.store.factories import create_local_snapshot, create_sqlite_store


def migrate_snapshot(
    database_path: str | None = None,
    snapshot_path: str | None = None,
    user_id: str = DEFAULT_USER_ID,
) -> dict[str, int]:
    """Migrate snapshot records into the store.

    Args:
        database_path: Path to database file. If None, uses default location.
        snapshot_path: Path to snapshot file. If None, uses default location.
        user_id: User the migrated projects belong to

    Returns:
        Dict with counts: migrated, already_current, skipped

    Raises:
        StoreUnavailable: If the store cannot be opened or written
    """
    snapshot = create_local_snapshot(snapshot_path)
    store = create_sqlite_store(database_path=database_path)
    store.connect()

    counts = {"migrated": 0, "already_current": 0, "skipped": 0}
    projects = []
    try:
        for record in snapshot.read_records(user_id):
            try:
                project = record_to_project(record)
            except MalformedRecord as e:
                print(f"  Skipping record: {e}")
                counts["skipped"] += 1
                continue

            if isinstance(record, dict) and record.get("schemaVersion") == SCHEMA_VERSION:
                counts["already_current"] += 1
            else:
                counts["migrated"] += 1

            store.save(project, user_id)
            projects.append(project)
            print(f"  Saved project '{project.name}' ({project.id})")

        snapshot.write_projects(projects, user_id)
    finally:
        store.disconnect()

    return counts


def main():
    """Main entry point for migration script."""
    parser = argparse.ArgumentParser(description="Move a local estimator snapshot into the project store")
    parser.add_argument("--db-path", type=str, help="Path to database file (overrides ESTIMATOR_DB_PATH environment variable)")
    parser.add_argument("--snapshot-path", type=str, help="Path to snapshot file (overrides ESTIMATOR_SNAPSHOT_PATH environment variable)")
    parser.add_argument("--user", type=str, default=DEFAULT_USER_ID, help="User the projects belong to")
    args = parser.parse_args()

    try:
        counts = migrate_snapshot(args.db_path, args.snapshot_path, args.user)
    except StoreUnavailable as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        return 1

    print("\nMigration completed successfully!")
    print(f"  Migrated: {counts['migrated']}")
    print(f"  Already current: {counts['already_current']}")
    print(f"  Skipped: {counts['skipped']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
