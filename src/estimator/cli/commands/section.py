"""Section management commands."""

import click
from estimator.cli.error_handling import handle_domain_error
from estimator.cli.state import commit, get_state, resolve_project_or_exit, resolve_section_or_exit
from estimator.domain import project as ops
from estimator.domain.errors import ValidationError
from estimator.domain.totals import section_subtotal
from estimator.utils.amount_parser import format_money


@click.group()
def section_group():
    """Manage sections of a project.

    SECTION can be a 1-based position, a section ID or an exact name.
    """
    pass


@section_group.command("list")
@click.argument("project", metavar="PROJECT")
@click.pass_context
def list_sections(ctx, project: str):
    """List the sections of a project."""
    found = resolve_project_or_exit(ctx, project)

    click.echo(f"\nSections of '{found.name}':")
    click.echo("-" * 80)
    for position, s in enumerate(found.sections, start=1):
        subtotal = format_money(section_subtotal(s))
        click.echo(f"{position:3d}. {s.name:30s} | {len(s.items):3d} item(s) | {subtotal:>14}")


@section_group.command("add")
@click.argument("project", metavar="PROJECT")
@click.option("--name", help="Section name (defaults to 'Section <n>')")
@click.pass_context
def add_section(ctx, project: str, name: str | None):
    """Append a section with one empty item."""
    found = resolve_project_or_exit(ctx, project)
    state = commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.add_section, name))
    section = state.get(found.id).sections[-1]
    click.echo(f"Added section '{section.name}' to '{found.name}'")


@section_group.command("rename")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.argument("name", metavar="NEW_NAME")
@click.pass_context
def rename_section(ctx, project: str, section: str, name: str):
    """Rename a section."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    if not name.strip():
        handle_domain_error(ctx, ValidationError("Section name cannot be empty"))
    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.rename_section, target.id, name))
    click.echo(f"Renamed section '{target.name}' to '{name}'")


@section_group.command("duplicate")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.pass_context
def duplicate_section(ctx, project: str, section: str):
    """Append a copy of a section."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.duplicate_section, target.id))
    click.echo(f"Duplicated section '{target.name}'")


@section_group.command("remove")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_section(ctx, project: str, section: str, yes: bool):
    """Remove a section and its items."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    if not yes:
        click.confirm(f"Delete section '{target.name}'? Its items will be removed.", abort=True)
    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.remove_section, target.id))
    click.echo(f"Removed section '{target.name}' ({len(target.items)} item(s))")


@section_group.command("move")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.argument("target", metavar="TARGET")
@click.pass_context
def move_section(ctx, project: str, section: str, target: str):
    """Move SECTION to the position of TARGET."""
    found = resolve_project_or_exit(ctx, project)
    moved = resolve_section_or_exit(ctx, found, section)
    destination = resolve_section_or_exit(ctx, found, target)
    commit(
        ctx,
        ops.apply_to_project(get_state(ctx), found.id, ops.move_section, moved.id, destination.id),
    )
    click.echo(f"Moved section '{moved.name}'")


@section_group.command("notes")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.argument("text", metavar="TEXT")
@click.pass_context
def section_notes(ctx, project: str, section: str, text: str):
    """Set the notes of a section (use "" to clear)."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.update_section, target.id, notes=text))
    click.echo(f"Updated notes for section '{target.name}'")


def register_commands(cli):
    """Register section commands with main CLI."""
    cli.add_command(section_group, name="section")
