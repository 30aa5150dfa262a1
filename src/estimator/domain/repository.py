"""Project persistence orchestration."""

import logging
from typing import Iterable, Optional

from estimator.domain.entities import EstimatorState, Project, SaveReport
from estimator.domain.errors import MalformedRecord, StoreUnavailable
from estimator.domain.migration import record_to_project
from estimator.domain.project import initial_state
from estimator.store.base import DEFAULT_USER_ID, ProjectStore
from estimator.store.snapshot import LocalSnapshot

logger = logging.getLogger(__name__)


class ProjectRepository:
    """Loads and saves projects through a store, with a local fallback.

    Saves are independent per project: a failure saving one project is
    logged and does not prevent the others from being saved. The local
    snapshot always receives the user's full project list, so it is
    current whenever the store is not. Nothing is shared between users:
    store rows and snapshot keys are both scoped by ``user_id``.
    """

    def __init__(
        self,
        store: Optional[ProjectStore],
        snapshot: LocalSnapshot,
        user_id: str = DEFAULT_USER_ID,
    ):
        """Initialize project repository.

        Args:
            store: Primary project store, or None when it could not be opened
            snapshot: Local fallback snapshot
            user_id: User whose projects are loaded and saved
        """
        self.store = store
        self.snapshot = snapshot
        self.user_id = user_id

    def load_snapshot(self) -> list[Project]:
        """Load and migrate the projects held in the local snapshot."""
        projects = []
        for record in self.snapshot.read_records(self.user_id):
            try:
                projects.append(record_to_project(record))
            except MalformedRecord as e:
                logger.warning("Skipping snapshot record: %s", e)
        return projects

    def load_projects(self) -> list[Project]:
        """Load the user's project list.

        Prefers the store when it returns projects, then the user's part of
        the local snapshot.

        Returns:
            Projects, possibly empty
        """
        projects: list[Project] = []
        if self.store is not None:
            try:
                projects = self.store.load_all(self.user_id)
            except StoreUnavailable as e:
                logger.warning("Project store unavailable, using local snapshot: %s", e)
        if projects:
            return projects
        return self.load_snapshot()

    def load_state(self) -> EstimatorState:
        """Load the application state.

        When nothing is stored anywhere a sample project is synthesized and
        saved right away, so its ID is stable across invocations.
        """
        projects = self.load_projects()
        state = initial_state(projects)
        if not projects:
            logger.info("No projects stored for user '%s'; saving a sample project", self.user_id)
            self.save_state(state)
        return state

    def save_projects(
        self, projects: Iterable[Project], only: Optional[Iterable[str]] = None
    ) -> SaveReport:
        """Save projects one by one, then write the snapshot.

        Args:
            projects: Full project list (the snapshot receives all of them)
            only: Optional project IDs to send to the store; all when omitted

        Returns:
            SaveReport listing saved and failed project IDs
        """
        projects = list(projects)
        wanted = None if only is None else set(only)

        saved, failed = [], []
        for project in projects:
            if wanted is not None and project.id not in wanted:
                continue
            if self.store is None:
                failed.append(project.id)
                continue
            try:
                saved.append(self.store.save(project, self.user_id))
            except StoreUnavailable as e:
                logger.warning("Could not save project %s: %s", project.id, e)
                failed.append(project.id)

        snapshot_written = True
        try:
            self.snapshot.write_projects(projects, self.user_id)
        except OSError as e:
            logger.warning("Could not write local snapshot %s: %s", self.snapshot.path, e)
            snapshot_written = False

        return SaveReport(
            saved=tuple(saved), failed=tuple(failed), snapshot_written=snapshot_written
        )

    def save_state(self, state: EstimatorState, only: Optional[Iterable[str]] = None) -> SaveReport:
        """Persist the projects of a state."""
        return self.save_projects(state.projects, only=only)

    def delete_project(self, project_id: str) -> bool:
        """Delete a project from the store.

        Returns:
            True if the store confirmed the delete, False if it was unavailable
        """
        if self.store is None:
            return False
        try:
            self.store.delete(project_id, self.user_id)
        except StoreUnavailable as e:
            logger.warning("Could not delete project %s: %s", project_id, e)
            return False
        return True
