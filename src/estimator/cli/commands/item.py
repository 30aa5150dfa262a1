"""Line item commands."""

import click
from estimator.cli.state import (
    commit,
    get_state,
    resolve_item_or_exit,
    resolve_project_or_exit,
    resolve_section_or_exit,
)
from estimator.domain import project as ops
from estimator.domain.entities import ITEM_CATEGORIES
from estimator.domain.totals import line_total
from estimator.utils.amount_parser import format_money, parse_currency
from estimator.utils.quantity import normalize_qty_string


def item_options(func):
    """Attach the editable item fields as options."""
    options = [
        click.option("--description", help="Item description"),
        click.option(
            "--category",
            type=click.Choice(ITEM_CATEGORIES, case_sensitive=False),
            help="Item category",
        ),
        click.option("--qty", help="Quantity (e.g., 2, 1.5)"),
        click.option("--unit", help="Unit (e.g., ea, sqft, hr)"),
        click.option("--unit-cost", help="Unit cost (e.g., 12.50 or $1,200)"),
        click.option("--taxable/--not-taxable", default=None, help="Whether sales tax applies"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def collect_item_fields(description, category, qty, unit, unit_cost, taxable) -> dict:
    """Convert CLI option values into item fields, skipping unset ones."""
    fields = {}
    if description is not None:
        fields["description"] = description
    if category is not None:
        fields["category"] = category.lower()
    if qty is not None:
        fields["quantity"] = normalize_qty_string(qty)
    if unit is not None:
        fields["unit"] = unit
    if unit_cost is not None:
        fields["unit_cost"] = parse_currency(unit_cost)
    if taxable is not None:
        fields["taxable"] = taxable
    return fields


@click.group()
def item_group():
    """Manage line items of a section.

    ITEM can be a 1-based position or an item ID.
    """
    pass


@item_group.command("list")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.pass_context
def list_items(ctx, project: str, section: str):
    """List the items of a section."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)

    if not target.items:
        click.echo("No items found.")
        return

    click.echo(f"\nItems in '{target.name}':")
    click.echo("-" * 100)
    click.echo(
        f"{'#':<4} {'Description':<30} {'Category':<12} {'Qty':>8} {'Unit':<6} "
        f"{'Unit Cost':>12} {'Tax':<4} {'Line Total':>14}"
    )
    click.echo("-" * 100)
    for position, it in enumerate(target.items, start=1):
        click.echo(
            f"{position:<4} {it.description[:30]:<30} {it.category:<12} {it.quantity:>8} "
            f"{it.unit:<6} {format_money(it.unit_cost):>12} {'YES' if it.taxable else 'NO':<4} "
            f"{format_money(line_total(it)):>14}"
        )


@item_group.command("add")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@item_options
@click.pass_context
def add_item(ctx, project: str, section: str, **options):
    """Add an item to a section.

    Examples:
        estimator item add "Kitchen" 1 --description "Drywall" --qty 12 --unit sheet --unit-cost 14.50
        estimator item add "Kitchen" Demo --description "Labor" --category labor --not-taxable
    """
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    fields = collect_item_fields(**options)

    state = commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.add_item, target.id, **fields))
    section_after = next(s for s in state.get(found.id).sections if s.id == target.id)
    item = section_after.items[-1]
    click.echo(f"Added item {len(section_after.items)} to '{target.name}' (ID: {item.id})")
    click.echo(f"  Line Total: {format_money(line_total(item))}")


@item_group.command("update")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.argument("item", metavar="ITEM")
@item_options
@click.pass_context
def update_item(ctx, project: str, section: str, item: str, **options):
    """Update fields of an item."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    existing = resolve_item_or_exit(ctx, target, item)
    fields = collect_item_fields(**options)

    if not fields:
        click.echo("Nothing to update.")
        return

    commit(
        ctx,
        ops.apply_to_project(get_state(ctx), found.id, ops.update_item, target.id, existing.id, **fields),
    )
    click.echo(f"Updated item {item} in '{target.name}'")


@item_group.command("remove")
@click.argument("project", metavar="PROJECT")
@click.argument("section", metavar="SECTION")
@click.argument("item", metavar="ITEM")
@click.pass_context
def remove_item(ctx, project: str, section: str, item: str):
    """Remove an item from a section."""
    found = resolve_project_or_exit(ctx, project)
    target = resolve_section_or_exit(ctx, found, section)
    existing = resolve_item_or_exit(ctx, target, item)

    commit(ctx, ops.apply_to_project(get_state(ctx), found.id, ops.remove_item, target.id, existing.id))
    click.echo(f"Removed item {item} from '{target.name}'")


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
