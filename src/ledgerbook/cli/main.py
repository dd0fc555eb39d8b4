"""Main CLI entry point."""

import click
from ledgerbook.database.factories import BACKENDS, create_database
from ledgerbook.domain.errors import StorageError
from ledgerbook.domain.ledger import Ledger
from ledgerbook.logging_config import configure_logging
from ledgerbook.cli.error_handling import handle_storage_error

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    entry,
    report,
    dashboard,
    demo,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS, case_sensitive=False),
    help="Storage backend: sqlite (default) or json",
    envvar="LEDGERBOOK_BACKEND",
)
@click.option(
    "--ledger",
    "ledger_name",
    help="Ledger name, one isolated set of books per name (default: 'default')",
    envvar="LEDGERBOOK_LEDGER",
)
@click.option(
    "--allow-unbalanced",
    is_flag=True,
    envvar="LEDGERBOOK_ALLOW_UNBALANCED",
    help="Save journal entries whose debits and credits differ (warn instead of fail)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    backend: str | None,
    ledger_name: str | None,
    allow_unbalanced: bool,
    verbose: bool,
):
    """Ledgerbook - double-entry bookkeeping for small businesses.

    Keep a chart of accounts, record balanced journal entries and produce a
    trial balance, balance sheet and income statement.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose)

    # Open the ledger only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_database(backend=backend, path=db_path, ledger_name=ledger_name)
            db.connect()
            db.initialize_schema()
            ledger = Ledger(db).load()
        except StorageError as e:
            handle_storage_error(ctx, e)
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["ledger"] = ledger
        ctx.obj["enforce_balance"] = not allow_unbalanced


# Register all commands
account.register_commands(cli)
entry.register_commands(cli)
report.register_commands(cli)
dashboard.register_commands(cli)
demo.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
