"""Abstract project store interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from estimator.domain.entities import Project

DEFAULT_USER_ID = "local"


class ProjectStore(ABC):
    """Abstract persistence collaborator for projects.

    Implementations raise ``StoreUnavailable`` when the backend cannot be
    reached; callers decide whether to fall back to a local snapshot.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def load_all(self, user_id: str) -> list[Project]:
        """Load every project belonging to a user, most recently updated first."""
        pass

    @abstractmethod
    def save(self, project: Project, user_id: str = DEFAULT_USER_ID) -> str:
        """Create or update a project. Returns the project ID.

        A project with an empty ID is assigned a new one. Saving a project
        whose ID is stored for another user raises OwnershipConflict.
        """
        pass

    @abstractmethod
    def delete(self, project_id: str, user_id: str = DEFAULT_USER_ID) -> None:
        """Delete one of a user's projects. Deleting an unknown ID is a no-op."""
        pass
