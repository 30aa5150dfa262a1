"""CLI error reporting."""

import click

from estimator.domain.errors import DomainError

EXIT_FAILURE = 1


def fail(ctx: click.Context, message: str) -> None:
    """Print an error message to stderr and exit with failure."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(EXIT_FAILURE)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Report a domain error (unknown reference, bad input) and exit."""
    fail(ctx, str(error))
