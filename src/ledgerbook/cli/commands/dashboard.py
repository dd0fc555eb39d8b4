"""Dashboard command."""

import click
from ledgerbook.cli.formatting import echo_amount_line, echo_rule, echo_section, echo_title, format_currency
from ledgerbook.domain.journal import JournalService
from ledgerbook.domain.reports import ReportService

RECENT_ENTRY_COUNT = 5


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show headline totals, alerts and the most recent entries."""
    ledger = ctx.obj["ledger"]
    summary = ReportService(ledger).dashboard()

    echo_title("DASHBOARD")
    echo_amount_line("Total Assets", summary.total_assets)
    echo_amount_line("Total Liabilities", summary.total_liabilities)
    echo_amount_line("Total Equity", summary.total_equity)
    echo_amount_line("Total Revenue", summary.total_revenue)
    echo_amount_line("Total Expenses", summary.total_expenses)
    echo_rule()
    echo_amount_line("Net Income", summary.net_income)

    if summary.alerts:
        echo_section("Alerts")
        for alert in summary.alerts:
            click.echo(f"  [{alert.level.upper()}] {alert.message}")

    echo_section("Recent entries")
    recent = JournalService(ledger).recent_entries(limit=RECENT_ENTRY_COUNT)
    if not recent:
        click.echo("  No journal entries yet.")
    for entry in recent:
        click.echo(
            f"  {entry.date.isoformat()}  {entry.description[:36]:36s} "
            f"{format_currency(entry.total_debits):>14s}"
        )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
