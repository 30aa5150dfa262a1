"""Data model operations.

Every function here is a pure transition: it takes a Project (or the whole
EstimatorState) plus arguments and returns a new snapshot. Nothing is
mutated in place and nothing is persisted; the caller decides when to hand
the result to a ProjectRepository.
"""

from dataclasses import replace
from datetime import date, datetime, UTC
from typing import Any, Callable, Optional

from estimator.domain.entities import (
    DEFAULT_SECTION_NAME,
    EstimatorState,
    Item,
    Project,
    Rates,
    Section,
)
from estimator.utils.identifiers import new_identifier

DEFAULT_PROJECT_NAME = "New Project"
SAMPLE_PROJECT_NAME = "Sample Project"
DEFAULT_RATES = Rates(tax_pct=0, overhead_pct=0, profit_pct=10, contingency_pct=0)
COPY_SUFFIX = " (copy)"


def _now() -> datetime:
    return datetime.now(UTC)


# Constructors


def new_item(**fields: Any) -> Item:
    """Create an item with a fresh ID and default values."""
    fields.pop("id", None)
    return Item(id=new_identifier(), **fields)


def new_section(name: str = DEFAULT_SECTION_NAME) -> Section:
    """Create a section holding one default item."""
    return Section(id=new_identifier(), name=name, items=(new_item(),), notes="")


def new_project(name: str = DEFAULT_PROJECT_NAME) -> Project:
    """Create a project with one default section and default rates."""
    now = _now()
    return Project(
        id=new_identifier(),
        name=name,
        sections=(new_section(),),
        rates=DEFAULT_RATES,
        estimate_date=date.today().isoformat(),
        created_at=now,
        updated_at=now,
    )


# Project-level operations


def patch_project(project: Project, **changes: Any) -> Project:
    """Shallow-merge changes into a project, refreshing ``updated_at``."""
    changes.pop("id", None)
    changes["updated_at"] = _now()
    return replace(project, **changes)


def set_rates(project: Project, **rates: float) -> Project:
    """Update one or more markup percentages."""
    return patch_project(project, rates=replace(project.rates, **rates))


def _copy_section(section: Section, name: Optional[str] = None) -> Section:
    return replace(
        section,
        id=new_identifier(),
        name=section.name if name is None else name,
        items=tuple(replace(item, id=new_identifier()) for item in section.items),
    )


def duplicate_project(project: Project) -> Project:
    """Deep-copy a project with fresh IDs for it and everything it owns."""
    now = _now()
    return replace(
        project,
        id=new_identifier(),
        name=f"{project.name}{COPY_SUFFIX}",
        sections=tuple(_copy_section(section) for section in project.sections),
        created_at=now,
        updated_at=now,
    )


# Section operations


def _update_sections(
    project: Project, section_id: str, update: Callable[[Section], Section]
) -> Project:
    sections = tuple(
        update(section) if section.id == section_id else section
        for section in project.sections
    )
    return patch_project(project, sections=sections)


def add_section(project: Project, name: Optional[str] = None) -> Project:
    """Append a new section (named "Section <n+1>" unless a name is given)."""
    section = new_section(name or f"Section {len(project.sections) + 1}")
    return patch_project(project, sections=project.sections + (section,))


def update_section(project: Project, section_id: str, **changes: Any) -> Project:
    """Shallow-merge changes into one section."""
    changes.pop("id", None)
    return _update_sections(project, section_id, lambda s: replace(s, **changes))


def rename_section(project: Project, section_id: str, name: str) -> Project:
    """Rename a section; an empty name leaves the project unchanged."""
    if not name:
        return project
    return update_section(project, section_id, name=name)


def duplicate_section(project: Project, section_id: str) -> Project:
    """Append a copy of a section with fresh IDs."""
    for section in project.sections:
        if section.id == section_id:
            copy = _copy_section(section, name=f"{section.name}{COPY_SUFFIX}")
            return patch_project(project, sections=project.sections + (copy,))
    return project


def remove_section(project: Project, section_id: str) -> Project:
    """Remove a section together with its items."""
    return patch_project(
        project,
        sections=tuple(s for s in project.sections if s.id != section_id),
    )


def move_section(project: Project, section_id: str, target_id: str) -> Project:
    """Move a section to the position currently held by another section."""
    sections = list(project.sections)
    ids = [s.id for s in sections]
    if section_id not in ids or target_id not in ids:
        return project
    moved = sections.pop(ids.index(section_id))
    sections.insert(ids.index(target_id), moved)
    return patch_project(project, sections=tuple(sections))


# Item operations


def add_item(project: Project, section_id: str, **fields: Any) -> Project:
    """Append a new item to a section."""
    item = new_item(**fields)
    return _update_sections(
        project, section_id, lambda s: replace(s, items=s.items + (item,))
    )


def update_item(project: Project, section_id: str, item_id: str, **changes: Any) -> Project:
    """Shallow-merge changes into one item."""
    changes.pop("id", None)
    return _update_sections(
        project,
        section_id,
        lambda s: replace(
            s,
            items=tuple(
                replace(item, **changes) if item.id == item_id else item
                for item in s.items
            ),
        ),
    )


def remove_item(project: Project, section_id: str, item_id: str) -> Project:
    """Remove one item from a section."""
    return _update_sections(
        project,
        section_id,
        lambda s: replace(s, items=tuple(i for i in s.items if i.id != item_id)),
    )


def replace_section_items(
    project: Project, items: tuple[Item, ...], section_id: Optional[str] = None
) -> Project:
    """Replace the items of one section, by default the first.

    A project without sections gets a default section holding the items.
    """
    if not project.sections:
        section = replace(new_section(), items=tuple(items))
        return patch_project(project, sections=(section,))
    target = section_id or project.sections[0].id
    return update_section(project, target, items=tuple(items))


# State-level operations


def initial_state(projects: tuple[Project, ...] | list[Project] = ()) -> EstimatorState:
    """Build the state for a loaded project list.

    An empty list is replaced by a single sample project.
    """
    projects = tuple(projects) or (new_project(SAMPLE_PROJECT_NAME),)
    return EstimatorState(projects=projects, active_id=projects[0].id)


def select_project(state: EstimatorState, project_id: str) -> EstimatorState:
    """Make a project active."""
    return replace(state, active_id=project_id)


def add_project(state: EstimatorState, project: Optional[Project] = None) -> EstimatorState:
    """Append a project (a new "Project <n+1>" by default) and activate it."""
    if project is None:
        project = new_project(f"Project {len(state.projects) + 1}")
    return EstimatorState(projects=state.projects + (project,), active_id=project.id)


def replace_project(state: EstimatorState, project: Project) -> EstimatorState:
    """Swap in a new snapshot of an existing project."""
    return replace(
        state,
        projects=tuple(project if p.id == project.id else p for p in state.projects),
    )


def apply_to_project(
    state: EstimatorState,
    project_id: str,
    operation: Callable[..., Project],
    *args: Any,
    **kwargs: Any,
) -> EstimatorState:
    """Run a project operation against one project of the state."""
    project = state.get(project_id)
    if project is None:
        return state
    return replace_project(state, operation(project, *args, **kwargs))


def duplicate_in_state(state: EstimatorState, project_id: str) -> EstimatorState:
    """Append a duplicate of a project and activate it."""
    project = state.get(project_id)
    if project is None:
        return state
    return add_project(state, duplicate_project(project))


def delete_project(state: EstimatorState, project_id: str) -> EstimatorState:
    """Delete a project; the previous project in order becomes active."""
    ids = [p.id for p in state.projects]
    if project_id not in ids:
        return state
    index = ids.index(project_id)
    remaining = tuple(p for p in state.projects if p.id != project_id)
    if not remaining:
        return EstimatorState(projects=(), active_id=None)
    if state.active_id == project_id or state.get(state.active_id or "") is None:
        active_id = remaining[max(0, index - 1)].id
    else:
        active_id = state.active_id
    return EstimatorState(projects=remaining, active_id=active_id)
