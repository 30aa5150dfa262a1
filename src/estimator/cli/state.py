"""CLI helpers for loading, resolving and committing application state."""

from __future__ import annotations

import click

from estimator.cli.error_handling import handle_domain_error
from estimator.domain.entities import EstimatorState, Item, Project, Section
from estimator.domain.errors import DomainError
from estimator.domain.repository import ProjectRepository
from estimator.utils.project_resolver import resolve_item, resolve_project, resolve_section


def get_state(ctx: click.Context) -> EstimatorState:
    """Return the state loaded for this invocation."""
    return ctx.obj["state"]


def get_repository(ctx: click.Context) -> ProjectRepository:
    """Return the repository configured for this invocation."""
    return ctx.obj["repository"]


def commit(ctx: click.Context, state: EstimatorState) -> EstimatorState:
    """Persist a new state and make it current for this invocation.

    Store failures are logged by the repository and reported here as a
    warning; they never fail the command.
    """
    ctx.obj["state"] = state
    report = get_repository(ctx).save_state(state)
    if report.failed:
        click.echo(
            f"Warning: {len(report.failed)} project(s) saved to the local snapshot only",
            err=True,
        )
    return state


def resolve_project_or_exit(ctx: click.Context, project: str) -> Project:
    """Resolve a project reference, or exit with a CLI error."""
    try:
        return resolve_project(get_state(ctx), project)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_section_or_exit(ctx: click.Context, project: Project, section: str) -> Section:
    """Resolve a section reference, or exit with a CLI error."""
    try:
        return resolve_section(project, section)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_item_or_exit(ctx: click.Context, section: Section, item: str) -> Item:
    """Resolve an item reference, or exit with a CLI error."""
    try:
        return resolve_item(section, item)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
