"""Tests for ProjectRepository load and save orchestration."""

import json

import pytest
from estimator.domain import project as ops
from estimator.domain.errors import OwnershipConflict, StoreUnavailable
from estimator.domain.repository import ProjectRepository
from estimator.store.base import ProjectStore
from estimator.store.snapshot import STORAGE_KEY


class MemoryStore(ProjectStore):
    """In-memory store that can fail for selected projects."""

    def __init__(self, fail_ids=(), unavailable=False):
        self.projects = {}
        self.fail_ids = set(fail_ids)
        self.unavailable = unavailable

    def connect(self):
        pass

    def disconnect(self):
        pass

    def load_all(self, user_id):
        if self.unavailable:
            raise StoreUnavailable("offline")
        return [p for uid, p in self.projects.values() if uid == user_id]

    def save(self, project, user_id="local"):
        if self.unavailable or project.id in self.fail_ids:
            raise StoreUnavailable("offline")
        if self.projects.get(project.id, (user_id,))[0] != user_id:
            raise OwnershipConflict("taken")
        self.projects[project.id] = (user_id, project)
        return project.id

    def delete(self, project_id, user_id="local"):
        if self.unavailable:
            raise StoreUnavailable("offline")
        if self.projects.get(project_id, (None,))[0] == user_id:
            del self.projects[project_id]


def test_load_prefers_store(snapshot):
    """Projects from the store win over the snapshot."""
    store = MemoryStore()
    stored = ops.new_project("Stored")
    store.save(stored, "tester")
    snapshot.write_projects([ops.new_project("Local")], "tester")

    repository = ProjectRepository(store, snapshot, user_id="tester")
    assert [p.name for p in repository.load_projects()] == ["Stored"]


def test_load_falls_back_to_snapshot_when_store_empty(snapshot):
    """An empty store falls back to the snapshot."""
    snapshot.write_projects([ops.new_project("Local")], "tester")
    repository = ProjectRepository(MemoryStore(), snapshot, user_id="tester")

    assert [p.name for p in repository.load_projects()] == ["Local"]


def test_load_falls_back_when_store_unavailable(snapshot):
    """An unreachable store falls back to the snapshot."""
    snapshot.write_projects([ops.new_project("Local")])
    repository = ProjectRepository(MemoryStore(unavailable=True), snapshot)

    assert [p.name for p in repository.load_projects()] == ["Local"]


def test_load_without_store(snapshot):
    """A repository without a store reads the snapshot."""
    snapshot.write_projects([ops.new_project("Local")])
    assert [p.name for p in ProjectRepository(None, snapshot).load_projects()] == ["Local"]


def test_load_state_synthesizes_sample(snapshot):
    """With nothing stored anywhere a sample project is created and saved."""
    store = MemoryStore()
    state = ProjectRepository(store, snapshot).load_state()

    assert [p.name for p in state.projects] == ["Sample Project"]
    assert state.active_id == state.projects[0].id
    assert set(store.projects) == {state.projects[0].id}
    assert snapshot.read_records()[0]["id"] == state.projects[0].id


def test_sample_project_stable_across_loads(snapshot):
    """The synthesized sample keeps its ID on the next load."""
    store = MemoryStore()
    first = ProjectRepository(store, snapshot).load_state()
    second = ProjectRepository(store, snapshot).load_state()

    assert [p.id for p in second.projects] == [p.id for p in first.projects]


def test_sample_project_stable_without_store(snapshot):
    """Without a store the sample is kept in the snapshot."""
    first = ProjectRepository(None, snapshot).load_state()
    second = ProjectRepository(None, snapshot).load_state()

    assert second.projects[0].id == first.projects[0].id


def test_snapshot_fallback_scoped_by_user(snapshot):
    """A user with nothing stored never falls back to another user's snapshot."""
    store = MemoryStore(unavailable=True)
    ProjectRepository(store, snapshot, user_id="alice").save_projects([ops.new_project("Alice Job")])

    bob = ProjectRepository(store, snapshot, user_id="bob")
    assert bob.load_projects() == []
    assert [r["name"] for r in snapshot.read_records("alice")] == ["Alice Job"]


def test_foreign_project_not_taken_over(snapshot):
    """Saving another user's project ID fails for that project only."""
    store = MemoryStore()
    alice_job = ops.new_project("Alice Job")
    store.save(alice_job, "alice")
    bob_job = ops.new_project("Bob Job")

    report = ProjectRepository(store, snapshot, user_id="bob").save_projects([alice_job, bob_job])

    assert report.failed == (alice_job.id,)
    assert report.saved == (bob_job.id,)
    assert store.projects[alice_job.id][0] == "alice"


def test_snapshot_records_migrated(snapshot):
    """Legacy snapshot records are migrated on load; bad ones skipped."""
    snapshot.path.write_text(
        json.dumps({STORAGE_KEY: [{"name": "Legacy", "client": "Bob", "items": []}, "garbage"]}),
        encoding="utf-8",
    )
    projects = ProjectRepository(None, snapshot).load_projects()

    assert len(projects) == 1
    assert projects[0].client_name == "Bob"
    assert projects[0].sections[0].name == "Section 1"


def test_save_writes_store_and_snapshot(snapshot):
    """Saving sends every project to the store and the snapshot."""
    store = MemoryStore()
    projects = [ops.new_project("A"), ops.new_project("B")]
    report = ProjectRepository(store, snapshot, user_id="tester").save_projects(projects)

    assert set(report.saved) == {p.id for p in projects}
    assert report.failed == ()
    assert report.snapshot_written is True
    assert len(snapshot.read_records()) == 2
    assert set(store.projects) == {p.id for p in projects}


def test_save_failure_is_per_project(snapshot):
    """One failing project does not stop the others."""
    first, second, third = (ops.new_project(n) for n in ("A", "B", "C"))
    store = MemoryStore(fail_ids={second.id})
    report = ProjectRepository(store, snapshot).save_projects([first, second, third])

    assert report.saved == (first.id, third.id)
    assert report.failed == (second.id,)
    assert {r["name"] for r in snapshot.read_records()} == {"A", "B", "C"}


def test_save_only_selected(snapshot):
    """Only the selected projects reach the store; the snapshot gets all."""
    first, second = ops.new_project("A"), ops.new_project("B")
    store = MemoryStore()
    report = ProjectRepository(store, snapshot).save_projects([first, second], only=[second.id])

    assert report.saved == (second.id,)
    assert set(store.projects) == {second.id}
    assert len(snapshot.read_records()) == 2


def test_save_without_store(snapshot):
    """Without a store every project is reported failed but snapshotted."""
    project = ops.new_project("A")
    report = ProjectRepository(None, snapshot).save_projects([project])

    assert report.failed == (project.id,)
    assert report.snapshot_written is True
    assert snapshot.read_records()[0]["id"] == project.id


def test_save_snapshot_failure_reported(tmp_path):
    """An unwritable snapshot is reported, not raised."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    from estimator.store.snapshot import LocalSnapshot

    snapshot = LocalSnapshot(blocker / "snapshot.json")
    report = ProjectRepository(MemoryStore(), snapshot).save_projects([ops.new_project("A")])

    assert report.snapshot_written is False
    assert len(report.saved) == 1


def test_save_state(snapshot):
    """Saving a state saves its projects."""
    state = ops.initial_state([])
    report = ProjectRepository(MemoryStore(), snapshot).save_state(state)
    assert report.saved == (state.projects[0].id,)


@pytest.mark.parametrize("store,expected", [(MemoryStore(), True), (MemoryStore(unavailable=True), False), (None, False)])
def test_delete_project(snapshot, store, expected):
    """Delete reports whether the store confirmed it."""
    assert ProjectRepository(store, snapshot).delete_project("any") is expected


def test_round_trip_through_sqlite(repository, sample_project):
    """Projects saved through the repository load back from SQLite."""
    repository.save_projects([sample_project])
    assert repository.load_projects() == [sample_project]
