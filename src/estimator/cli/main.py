"""Main CLI entry point."""

import logging

import click
from estimator.domain.errors import StoreUnavailable
from estimator.domain.repository import ProjectRepository
from estimator.store.base import DEFAULT_USER_ID
from estimator.store.factories import create_local_snapshot, create_sqlite_store

# Import and register all commands at module level
from estimator.cli.commands import (
    project,
    section,
    item,
    export_cmd,
    import_cmd,
)

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; debug level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides ESTIMATOR_DB_PATH environment variable)",
    envvar="ESTIMATOR_DB_PATH",
)
@click.option(
    "--snapshot-path",
    type=click.Path(),
    help="Path to local snapshot file (overrides ESTIMATOR_SNAPSHOT_PATH environment variable)",
    envvar="ESTIMATOR_SNAPSHOT_PATH",
)
@click.option(
    "--user",
    default=DEFAULT_USER_ID,
    show_default=True,
    envvar="ESTIMATOR_USER",
    help="User whose projects are loaded and saved",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, snapshot_path: str | None, user: str, verbose: bool):
    """Estimator - Contractor project cost estimates.

    Build estimates from sectioned line items, apply tax, overhead, profit
    and contingency markups, and exchange them as CSV.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Load projects only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            store = create_sqlite_store(database_path=db_path)
            store.connect()
            ctx.call_on_close(store.disconnect)
        except StoreUnavailable as e:
            logger.warning("Working from local snapshot only: %s", e)
            store = None

        repository = ProjectRepository(store, create_local_snapshot(snapshot_path), user_id=user)
        ctx.obj["repository"] = repository
        ctx.obj["state"] = repository.load_state()


# Register all commands
project.register_commands(cli)
section.register_commands(cli)
item.register_commands(cli)
export_cmd.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
