"""Local JSON snapshot used when the primary store is unreachable."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from estimator.domain.entities import Project
from estimator.domain.migration import project_to_record
from estimator.store.base import DEFAULT_USER_ID

logger = logging.getLogger(__name__)

STORAGE_KEY = "contractor_estimator_v1"


class LocalSnapshot:
    """A JSON file holding values under fixed keys.

    Each user's project list lives under its own key: ``STORAGE_KEY`` for
    the default user (the key older single-user snapshots used) and
    ``"<STORAGE_KEY>:<user_id>"`` for everyone else. Older snapshots stored a
    single project record instead of a list; both shapes are read.
    """

    def __init__(self, path: str | Path, key: str = STORAGE_KEY):
        """Initialize snapshot.

        Args:
            path: JSON file path (created on first write)
            key: Base key the project lists are stored under
        """
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring snapshot %s: expected a JSON object", self.path)
            return {}
        return data

    def key_for(self, user_id: str = DEFAULT_USER_ID) -> str:
        """Return the key holding a user's project list."""
        if user_id == DEFAULT_USER_ID:
            return self.key
        return f"{self.key}:{user_id}"

    def read_records(self, user_id: str = DEFAULT_USER_ID) -> list[Any]:
        """Return the raw project records stored for a user.

        Returns:
            List of records as stored (not yet migrated); empty when the
            snapshot is missing or unreadable
        """
        value = self._read_all().get(self.key_for(user_id))
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    def write_records(
        self, records: Iterable[dict[str, Any]], user_id: str = DEFAULT_USER_ID
    ) -> None:
        """Replace a user's stored project list; other keys are kept.

        Raises:
            OSError: If the file cannot be written
        """
        data = self._read_all()
        data[self.key_for(user_id)] = list(records)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def write_projects(self, projects: Iterable[Project], user_id: str = DEFAULT_USER_ID) -> None:
        """Store a user's full project list."""
        self.write_records((project_to_record(project) for project in projects), user_id)
