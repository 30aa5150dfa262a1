"""Shared pytest fixtures for estimator tests."""

import tempfile
import os
from dataclasses import replace
import pytest

from estimator.domain import project as ops
from estimator.domain.entities import Item, Rates, Section
from estimator.domain.repository import ProjectRepository
from estimator.store.factories import create_sqlite_store
from estimator.store.snapshot import LocalSnapshot


@pytest.fixture
def temp_store():
    """Create a temporary SQLite-backed project store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def snapshot(tmp_path):
    """Create a local snapshot backed by a temporary file."""
    return LocalSnapshot(tmp_path / "snapshot.json")


@pytest.fixture
def repository(temp_store, snapshot):
    """Create a ProjectRepository over the temporary store and snapshot."""
    return ProjectRepository(temp_store, snapshot, user_id="tester")


@pytest.fixture
def make_project():
    """Factory building projects from (name, items) section specs.

    Items are dicts of Item fields; rates are keyword percentages.
    """

    def _make(sections=(), name="Test Project", **rates):
        project = ops.new_project(name)
        built = tuple(
            Section(
                id=f"section-{index}",
                name=section_name,
                items=tuple(
                    Item(id=f"item-{index}-{position}", **fields)
                    for position, fields in enumerate(items)
                ),
            )
            for index, (section_name, items) in enumerate(sections)
        )
        return replace(project, sections=built, rates=Rates(**rates))

    return _make


@pytest.fixture
def sample_project(make_project):
    """Two-section project used across tests."""
    return make_project(
        sections=[
            ("Framing", [{"quantity": "2", "unit_cost": 5.0, "taxable": True, "category": "materials"}]),
            ("Labor", [{"quantity": "3", "unit_cost": 10.0, "taxable": False, "category": "labor"}]),
        ],
        name="Deck",
        tax_pct=10,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(tmp_path):
    """Global CLI options pointing at temporary storage."""
    return [
        "--db-path",
        str(tmp_path / "estimator.db"),
        "--snapshot-path",
        str(tmp_path / "snapshot.json"),
    ]
