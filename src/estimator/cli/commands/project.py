"""Project management commands."""

import click
from estimator.cli.error_handling import handle_domain_error
from estimator.cli.preview import render_estimate
from estimator.cli.state import commit, get_repository, get_state, resolve_project_or_exit
from estimator.domain import project as ops
from estimator.domain.errors import ValidationError
from estimator.domain.totals import calc_totals
from estimator.utils.amount_parser import format_money, format_plain_number, parse_currency
from estimator.utils.date_parser import parse_estimate_date


@click.group()
def project_group():
    """Manage projects."""
    pass


@project_group.command("new")
@click.argument("name", required=False)
@click.pass_context
def new_project(ctx, name: str | None):
    """Create a new project.

    If NAME is omitted the project is named "Project <n>".

    Examples:
        estimator project new "Kitchen Remodel"
        estimator project new
    """
    state = get_state(ctx)
    project = ops.new_project(name) if name else None
    state = commit(ctx, ops.add_project(state, project))
    created = state.active
    click.echo(f"Created project '{created.name}' (ID: {created.id})")


@project_group.command("list")
@click.pass_context
def list_projects(ctx):
    """List all projects with their totals."""
    state = get_state(ctx)

    click.echo("\nProjects:")
    click.echo("-" * 80)
    for p in state.projects:
        total = format_money(calc_totals(p).total)
        click.echo(f"{p.name:30s} | {len(p.sections):2d} section(s) | {total:>14} | ID: {p.id}")


@project_group.command("show")
@click.argument("project", metavar="PROJECT")
@click.pass_context
def show_project(ctx, project: str):
    """Show a printable estimate preview.

    PROJECT can be a project name or ID.
    """
    found = resolve_project_or_exit(ctx, project)
    for line in render_estimate(found):
        click.echo(line)


@project_group.command("rename")
@click.argument("project", metavar="PROJECT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_project(ctx, project: str, new_name: str):
    """Rename a project.

    Examples:
        estimator project rename "Project 2" "Garage"
    """
    found = resolve_project_or_exit(ctx, project)
    if not new_name.strip():
        handle_domain_error(ctx, ValidationError("Project name cannot be empty"))
    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.patch_project, name=new_name))
    click.echo(f"Renamed project '{found.name}' to '{new_name}'")


@project_group.command("duplicate")
@click.argument("project", metavar="PROJECT")
@click.pass_context
def duplicate_project(ctx, project: str):
    """Duplicate a project with all its sections and items."""
    found = resolve_project_or_exit(ctx, project)
    state = commit(ctx, ops.duplicate_in_state(get_state(ctx), found.id))
    copy = state.active
    click.echo(f"Created project '{copy.name}' (ID: {copy.id})")


@project_group.command("delete")
@click.argument("project", metavar="PROJECT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_project(ctx, project: str, yes: bool):
    """Delete a project and everything in it."""
    found = resolve_project_or_exit(ctx, project)
    if not yes:
        click.confirm(f"Delete project '{found.name}'? This cannot be undone.", abort=True)

    get_repository(ctx).delete_project(found.id)
    commit(ctx, ops.delete_project(get_state(ctx), found.id))
    click.echo(f"Deleted project '{found.name}'")


@project_group.command("set")
@click.argument("project", metavar="PROJECT")
@click.option("--client-name", help="Client name")
@click.option("--client-phone", help="Client phone number")
@click.option("--client-email", help="Client email")
@click.option("--estimate-number", help="Estimate number (e.g., '#042')")
@click.option("--date", "estimate_date", help="Estimate date (YYYY-MM-DD or 'today')")
@click.option("--notes", help="Notes printed on the estimate")
@click.pass_context
def set_details(
    ctx,
    project: str,
    client_name: str | None,
    client_phone: str | None,
    client_email: str | None,
    estimate_number: str | None,
    estimate_date: str | None,
    notes: str | None,
):
    """Update client and estimate details.

    Examples:
        estimator project set "Kitchen" --client-name "Jane Doe" --date today
    """
    found = resolve_project_or_exit(ctx, project)

    changes = {
        "client_name": client_name,
        "client_phone": client_phone,
        "client_email": client_email,
        "estimate_number": estimate_number,
        "notes": notes,
    }
    if estimate_date is not None:
        try:
            changes["estimate_date"] = parse_estimate_date(estimate_date).isoformat()
        except ValueError as e:
            handle_domain_error(ctx, e)
    changes = {key: value for key, value in changes.items() if value is not None}

    if not changes:
        click.echo("Nothing to update.")
        return

    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.patch_project, **changes))
    click.echo(f"Updated project '{found.name}'")


@project_group.command("rates")
@click.argument("project", metavar="PROJECT")
@click.option("--tax", help="Sales tax % (taxable items only)")
@click.option("--overhead", help="Overhead % (on the subtotal)")
@click.option("--profit", help="Profit % (after overhead and tax)")
@click.option("--contingency", help="Contingency % (after profit)")
@click.pass_context
def set_rates(
    ctx,
    project: str,
    tax: str | None,
    overhead: str | None,
    profit: str | None,
    contingency: str | None,
):
    """Set markup percentages.

    Examples:
        estimator project rates "Kitchen" --tax 8.25 --overhead 10 --profit 15
    """
    found = resolve_project_or_exit(ctx, project)

    rates = {
        "tax_pct": tax,
        "overhead_pct": overhead,
        "profit_pct": profit,
        "contingency_pct": contingency,
    }
    rates = {key: parse_currency(value) for key, value in rates.items() if value is not None}

    if rates:
        state = commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.set_rates, **rates))
        found = state.get(found.id)

    r = found.rates
    click.echo(f"Rates for '{found.name}':")
    click.echo(f"  Sales Tax:   {format_plain_number(r.tax_pct)}%")
    click.echo(f"  Overhead:    {format_plain_number(r.overhead_pct)}%")
    click.echo(f"  Profit:      {format_plain_number(r.profit_pct)}%")
    click.echo(f"  Contingency: {format_plain_number(r.contingency_pct)}%")


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
