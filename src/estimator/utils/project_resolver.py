"""Utility for resolving project, section and item references."""

from estimator.domain.entities import EstimatorState, Item, Project, Section
from estimator.domain.errors import NotFoundError, item_not_found, project_not_found, section_not_found


def _position(reference: str, count: int) -> int | None:
    """Return a 0-based index for a 1-based numeric reference, if in range."""
    try:
        position = int(reference)
    except (ValueError, TypeError):
        return None
    if 1 <= position <= count:
        return position - 1
    return None


def resolve_project(state: EstimatorState, project: str) -> Project:
    """Resolve a project ID or exact name.

    Args:
        state: Application state
        project: Project ID or name

    Returns:
        Project

    Raises:
        NotFoundError: If no project matches
    """
    found = state.get(project)
    if found is not None:
        return found

    for candidate in state.projects:
        if candidate.name == project:
            return candidate

    raise NotFoundError(project_not_found(project))


def resolve_section(project: Project, section: str) -> Section:
    """Resolve a section by 1-based position, ID or exact name.

    Raises:
        NotFoundError: If no section matches
    """
    index = _position(section, len(project.sections))
    if index is not None:
        return project.sections[index]

    for candidate in project.sections:
        if candidate.id == section or candidate.name == section:
            return candidate

    raise NotFoundError(section_not_found(section, project.name))


def resolve_item(section: Section, item: str) -> Item:
    """Resolve an item by 1-based position or ID.

    Raises:
        NotFoundError: If no item matches
    """
    index = _position(item, len(section.items))
    if index is not None:
        return section.items[index]

    for candidate in section.items:
        if candidate.id == item:
            return candidate

    raise NotFoundError(item_not_found(item, section.name))
