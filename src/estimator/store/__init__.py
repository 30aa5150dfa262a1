"""Persistence layer for estimator application."""

from estimator.store.base import ProjectStore
from estimator.store.factories import create_sqlite_store, create_local_snapshot
from estimator.store.snapshot import LocalSnapshot

__all__ = ["ProjectStore", "LocalSnapshot", "create_sqlite_store", "create_local_snapshot"]
