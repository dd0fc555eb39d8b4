"""Journal entry commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerbook.cli.formatting import format_currency
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import JournalEntry
from ledgerbook.domain.errors import DomainError, StorageError
from ledgerbook.domain.journal import JournalService


def _journal_service(ctx) -> JournalService:
    return JournalService(ctx.obj["ledger"], enforce_balance=ctx.obj["enforce_balance"])


def _collect_lines(ctx, account_service: AccountService, debits, credits) -> list[dict]:
    """Turn --debit/--credit (ACCOUNT, AMOUNT) pairs into line mappings."""
    lines = []
    for account, amount in debits:
        account_id = resolve_account_or_exit(ctx, account_service, account)
        lines.append({"account_id": account_id, "debit": amount, "credit": None})
    for account, amount in credits:
        account_id = resolve_account_or_exit(ctx, account_service, account)
        lines.append({"account_id": account_id, "debit": None, "credit": amount})
    return lines


def _account_label(account_service: AccountService, account_id: int) -> str:
    account = account_service.get_account(account_id)
    if account is None:
        return f"(unknown account {account_id})"
    return f"{account.number} {account.name}"


def _echo_entry(account_service: AccountService, entry: JournalEntry) -> None:
    click.echo(f"Entry ID: {entry.id}")
    click.echo(f"Date: {entry.date.isoformat()}")
    if entry.reference:
        click.echo(f"Reference: {entry.reference}")
    click.echo(f"Description: {entry.description}")
    click.echo(f"Created: {entry.created_at.isoformat(timespec='seconds')}")
    if entry.updated_at is not None:
        click.echo(f"Updated: {entry.updated_at.isoformat(timespec='seconds')}")
    click.echo()
    click.echo(f"  {'Account':40s} {'Debit':>14s} {'Credit':>14s}")
    click.echo("  " + "-" * 70)
    for line in entry.transactions:
        debit = format_currency(line.debit) if line.debit else ""
        credit = format_currency(line.credit) if line.credit else ""
        label = _account_label(account_service, line.account_id)
        click.echo(f"  {label[:40]:40s} {debit:>14s} {credit:>14s}")
    click.echo("  " + "-" * 70)
    click.echo(
        f"  {'Total':40s} {format_currency(entry.total_debits):>14s} "
        f"{format_currency(entry.total_credits):>14s}"
    )
    if not entry.is_balanced:
        click.echo("  Warning: this entry is not balanced")


@click.group()
def entry_group():
    """Record and manage journal entries."""
    pass


@entry_group.command("add")
@click.option("--date", "entry_date", default="today", help="Entry date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--description", required=True, help="Entry description")
@click.option("--reference", default="", help="Optional reference code (invoice, receipt, ...)")
@click.option(
    "--debit",
    "debits",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Debit line; may be repeated",
)
@click.option(
    "--credit",
    "credits",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Credit line; may be repeated",
)
@click.pass_context
def add_entry(ctx, entry_date: str, description: str, reference: str, debits, credits):
    """Record a journal entry.

    ACCOUNT can be an account number, ID or name. Total debits must equal
    total credits.

    Examples:
        ledgerbook entry add --description "Owner investment" \\
            --debit 1000 5000 --credit 3000 5000
        ledgerbook entry add --date 2024-01-15 --description "Supplies" \\
            --debit "Office Supplies" 120.50 --credit Cash 120.50
    """
    account_service = AccountService(ctx.obj["ledger"])
    lines = _collect_lines(ctx, account_service, debits, credits)

    try:
        entry = _journal_service(ctx).create_entry(
            date=entry_date,
            description=description,
            transactions=lines,
            reference=reference,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(
        f"Recorded entry {entry.id} on {entry.date.isoformat()}: {entry.description} "
        f"({format_currency(entry.total_debits)})"
    )


@entry_group.command("list")
@click.option("--account", help="Only entries posting to this account (number, ID or name)")
@click.option("--limit", type=int, help="Show at most this many entries")
@click.pass_context
def list_entries(ctx, account: str | None, limit: int | None):
    """List journal entries, most recent first."""
    ledger = ctx.obj["ledger"]
    account_service = AccountService(ledger)
    service = _journal_service(ctx)

    if account:
        account_id = resolve_account_or_exit(ctx, account_service, account)
        entries = service.entries_for_account(account_id)
    else:
        entries = service.list_entries()

    if limit is not None:
        entries = entries[:limit]

    if not entries:
        click.echo("No journal entries found.")
        return

    for entry in entries:
        ref = f" [{entry.reference}]" if entry.reference else ""
        click.echo(
            f"ID: {entry.id:4d} | {entry.date.isoformat()} | "
            f"{(entry.description + ref)[:40]:40s} | {format_currency(entry.total_debits):>14s}"
        )


@entry_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx, entry_id: int):
    """Show a journal entry with its lines."""
    ledger = ctx.obj["ledger"]
    entry = _journal_service(ctx).get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Journal entry {entry_id} not found", err=True)
        ctx.exit(1)
    _echo_entry(AccountService(ledger), entry)


@entry_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", help="New entry date")
@click.option("--description", help="New description")
@click.option("--reference", help="New reference code")
@click.option(
    "--debit",
    "debits",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Replacement debit line; may be repeated",
)
@click.option(
    "--credit",
    "credits",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Replacement credit line; may be repeated",
)
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    entry_date: str | None,
    description: str | None,
    reference: str | None,
    debits,
    credits,
):
    """Update a journal entry.

    Giving any --debit or --credit replaces all of the entry's lines.

    Examples:
        ledgerbook entry update 3 --description "Corrected description"
        ledgerbook entry update 3 --debit 5100 250 --credit 1000 250
    """
    account_service = AccountService(ctx.obj["ledger"])
    lines = _collect_lines(ctx, account_service, debits, credits) if (debits or credits) else None

    if entry_date is None and description is None and reference is None and lines is None:
        click.echo(
            "Error: Nothing to update. Use --date, --description, --reference, --debit or --credit.",
            err=True,
        )
        ctx.exit(1)

    try:
        entry = _journal_service(ctx).update_entry(
            entry_id,
            date=entry_date,
            description=description,
            transactions=lines,
            reference=reference,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Updated entry {entry.id}")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool):
    """Delete a journal entry."""
    service = _journal_service(ctx)
    entry = service.get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Journal entry {entry_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete entry {entry.id} '{entry.description}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Deleted entry {entry_id}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
