"""Account management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerbook.cli.formatting import format_currency
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import ACCOUNT_TYPE_ORDER
from ledgerbook.domain.errors import DomainError, StorageError
from ledgerbook.domain.reports import ReportService

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in ACCOUNT_TYPE_ORDER], case_sensitive=False)


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("number", metavar="NUMBER")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, required=True, help="Account type")
@click.option("--description", default="", help="Optional description")
@click.pass_context
def create_account(ctx, number: str, name: str, account_type: str, description: str):
    """Create a new account.

    NUMBER may be 'auto' to use the next free number (1000, 1100, ...).

    Examples:
        ledgerbook account create 1000 "Cash" --type Asset
        ledgerbook account create auto "Rent Expense" --type Expense
    """
    service = AccountService(ctx.obj["ledger"])

    if number.lower() == "auto":
        number = service.next_account_number()

    try:
        account = service.create_account(
            number=number, name=name, account_type=account_type, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Created account {account.number} '{account.name}' ({account.type}) (ID: {account.id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List accounts grouped by type."""
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    if not service.list_accounts():
        click.echo("No accounts found.")
        return

    balances = ReportService(ledger).balances()
    for account_type, accounts in service.list_by_type():
        click.echo(f"\n{account_type.value.upper()}")
        click.echo("-" * 72)
        if not accounts:
            click.echo("  (none)")
            continue
        for acc in accounts:
            balance = format_currency(balances.get(acc.id, 0))
            click.echo(f"ID: {acc.id:3d} | {acc.number:<8s} | {acc.name:30s} | {balance:>14s}")
            if acc.description:
                click.echo(f"{'':21s}{acc.description}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--number", help="New account number")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="New account type")
@click.option("--description", help="New description")
@click.pass_context
def update_account(
    ctx,
    account: str,
    number: str | None,
    name: str | None,
    account_type: str | None,
    description: str | None,
) -> None:
    """Update an account.

    ACCOUNT can be an account number, ID or name.

    Examples:
        ledgerbook account update 1000 --name "Cash on Hand"
        ledgerbook account update "Cash" --number 1010
    """
    service = AccountService(ctx.obj["ledger"])
    account_id = resolve_account_or_exit(ctx, service, account)

    if number is None and name is None and account_type is None and description is None:
        click.echo("Error: Nothing to update. Use --number, --name, --type or --description.", err=True)
        ctx.exit(1)

    try:
        updated = service.update_account(
            account_id,
            number=number,
            name=name,
            account_type=account_type,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Updated account {updated.number} '{updated.name}' ({updated.type})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account and every journal entry that uses it.

    ACCOUNT can be an account number, ID or name.

    Whole journal entries are removed, not just their lines for this
    account, so the remaining journal stays balanced.

    Examples:
        ledgerbook account delete 1000
        ledgerbook account delete "Cash" --yes
    """
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    entry_count = sum(1 for e in ledger.entries if e.references_account(account_id))
    if not yes:
        message = f"Are you sure you want to delete account {account_obj.number} '{account_obj.name}'?"
        if entry_count:
            message += (
                f" This will also delete {entry_count} journal "
                f"entr{'y' if entry_count == 1 else 'ies'}."
            )
        if not click.confirm(message):
            click.echo("Deletion cancelled.")
            return

    try:
        removed = service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Deleted account {account_obj.number} '{account_obj.name}'")
    if removed:
        click.echo(f"Deleted {removed} related journal entr{'y' if removed == 1 else 'ies'}")


@account_group.command("next-number")
@click.pass_context
def next_number(ctx) -> None:
    """Show the next free account number."""
    click.echo(AccountService(ctx.obj["ledger"]).next_account_number())


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str) -> None:
    """Show the debit-minus-credit balance of an account."""
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.get_account(account_id)
    balance = ReportService(ledger).account_balance(account_id)
    click.echo(f"{acc.number} {acc.name}: {format_currency(balance)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
