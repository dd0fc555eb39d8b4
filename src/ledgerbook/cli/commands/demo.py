"""Demo data and reset commands."""

import click
from ledgerbook.cli.error_handling import handle_storage_error
from ledgerbook.domain.demo import DemoDataService
from ledgerbook.domain.errors import StorageError


@click.group()
def demo_group():
    """Load demo data or clear the ledger."""
    pass


@demo_group.command("load")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def load_demo(ctx, yes: bool):
    """Replace the ledger with a demo restaurant's books.

    Loads a 27-account restaurant chart of accounts and 20 balanced journal
    entries from January and February 2024.
    """
    ledger = ctx.obj["ledger"]
    if (ledger.accounts or ledger.entries) and not yes:
        if not click.confirm("This replaces all existing accounts and entries. Continue?"):
            click.echo("Cancelled.")
            return

    try:
        account_count, entry_count = DemoDataService(ledger).load_demo_data()
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Loaded demo data: {account_count} accounts, {entry_count} journal entries")


@demo_group.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_data(ctx, yes: bool):
    """Delete every account and journal entry and reset numbering."""
    ledger = ctx.obj["ledger"]
    if not ledger.accounts and not ledger.entries:
        click.echo("Ledger is already empty.")
        return

    if not yes and not click.confirm("Delete ALL accounts and journal entries?"):
        click.echo("Cancelled.")
        return

    try:
        account_count, entry_count = DemoDataService(ledger).clear_all_data()
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Cleared {account_count} accounts and {entry_count} journal entries")


def register_commands(cli):
    """Register demo commands with main CLI."""
    cli.add_command(demo_group, name="demo")
