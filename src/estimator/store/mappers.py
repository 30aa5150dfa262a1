"""Mapper functions to convert between domain projects and SQLAlchemy rows.

The row keeps the project as a stored record; migration happens here, at
the boundary, so the domain only ever sees current-shape Projects.
"""

from estimator.domain.entities import Project
from estimator.domain.migration import project_to_record, record_to_project
from estimator.store.models import Estimate as ORMEstimate


def estimate_to_domain(orm_estimate: ORMEstimate) -> Project:
    """Convert an Estimate row to a domain Project (migrating legacy shapes)."""
    document = dict(orm_estimate.document or {})
    document["id"] = orm_estimate.id
    return record_to_project(document)


def apply_project(orm_estimate: ORMEstimate, project: Project, user_id: str) -> ORMEstimate:
    """Copy a domain Project onto an Estimate row."""
    orm_estimate.id = project.id
    orm_estimate.user_id = user_id
    orm_estimate.name = project.name
    orm_estimate.document = project_to_record(project)
    orm_estimate.created_at = project.created_at
    orm_estimate.updated_at = project.updated_at
    return orm_estimate
