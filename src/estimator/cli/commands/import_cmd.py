"""CSV import command."""

from pathlib import Path

import click
from estimator.cli.error_handling import fail
from estimator.cli.state import commit, get_state, resolve_project_or_exit, resolve_section_or_exit
from estimator.domain import project as ops
from estimator.domain.csv_import import import_csv_into_section


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--project", required=True, help="Project name or ID")
@click.option("--section", help="Target section (defaults to the first section)")
@click.pass_context
def import_csv(ctx, csv_file: str, project: str, section: str | None):
    """Import line items from an exported estimate CSV.

    The items replace those of the target section; other sections are not
    touched.
    """
    found = resolve_project_or_exit(ctx, project)
    section_id = None
    if section is not None:
        section_id = resolve_section_or_exit(ctx, found, section).id

    try:
        text = Path(csv_file).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        fail(ctx, f"Could not read {csv_file}: {e}")

    updated, result = import_csv_into_section(found, text, section_id)
    commit(ctx, ops.replace_project(get_state(ctx), updated))

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {len(result.items)} item(s)")
    if not result.header_found:
        click.echo("  No item table found in file", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
