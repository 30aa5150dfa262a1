"""Factory functions for creating stores and snapshots."""

import os
from pathlib import Path
from typing import Optional

from estimator.store.snapshot import LocalSnapshot
from estimator.store.sqlalchemy_store import SQLAlchemyProjectStore


def _default_dir() -> Path:
    directory = Path.home() / ".estimator"
    directory.mkdir(exist_ok=True)
    return directory


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyProjectStore:
    """Create a SQLite-backed project store.

    Args:
        database_path: Path to SQLite database file. If None, checks ESTIMATOR_DB_PATH
            environment variable, then defaults to ~/.estimator/estimator.db

    Returns:
        SQLAlchemyProjectStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("ESTIMATOR_DB_PATH")

    if database_path is None:
        database_path = str(_default_dir() / "estimator.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyProjectStore(database_url)


def create_local_snapshot(snapshot_path: Optional[str] = None) -> LocalSnapshot:
    """Create the local fallback snapshot.

    Args:
        snapshot_path: JSON file path. If None, checks ESTIMATOR_SNAPSHOT_PATH
            environment variable, then defaults to ~/.estimator/snapshot.json
    """
    if snapshot_path is None:
        snapshot_path = os.environ.get("ESTIMATOR_SNAPSHOT_PATH")

    if snapshot_path is None:
        snapshot_path = str(_default_dir() / "snapshot.json")

    return LocalSnapshot(snapshot_path)
