"""CLI error handling helpers."""

import click

from ledgerbook.domain.errors import DomainError, StorageError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_storage_error(ctx: click.Context, error: StorageError) -> None:
    """Render a persistence failure and exit with failure."""
    click.echo(f"Storage error: {error}", err=True)
    if error.unsaved:
        click.echo("Nothing was saved. Run the command again once storage is available.", err=True)
    ctx.exit(1)
