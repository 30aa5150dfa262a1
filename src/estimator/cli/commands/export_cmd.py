"""CSV export command."""

from pathlib import Path

import click
from estimator.cli.error_handling import fail
from estimator.cli.state import resolve_project_or_exit
from estimator.domain.csv_export import export_csv, export_filename
from estimator.domain.totals import calc_totals
from estimator.utils.amount_parser import format_money


@click.command("export")
@click.argument("project", metavar="PROJECT")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file (defaults to '<project-name>_estimate.csv')",
)
@click.pass_context
def export_project(ctx, project: str, output: str | None):
    """Export a project estimate to CSV."""
    found = resolve_project_or_exit(ctx, project)
    totals = calc_totals(found)

    path = Path(output) if output else Path(export_filename(found))
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(export_csv(found, totals))
    except OSError as e:
        fail(ctx, f"Could not write {path}: {e}")

    click.echo(f"Exported '{found.name}' to {path}")
    click.echo(f"  Total: {format_money(totals.total)}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_project)
