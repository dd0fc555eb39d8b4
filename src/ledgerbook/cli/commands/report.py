"""Financial report commands."""

import click
from ledgerbook.cli.formatting import (
    AMOUNT_WIDTH,
    REPORT_WIDTH,
    echo_amount_line,
    echo_rule,
    echo_section,
    echo_title,
    format_currency,
)
from ledgerbook.domain.reports import ReportService


@click.group()
def report_group():
    """Produce financial reports."""
    pass


@report_group.command("trial-balance")
@click.pass_context
def trial_balance(ctx):
    """Show the trial balance.

    Every account with a nonzero balance appears in the debit or credit
    column. The totals are equal when the books balance.
    """
    report = ReportService(ctx.obj["ledger"]).trial_balance()

    echo_title("TRIAL BALANCE")
    label_width = REPORT_WIDTH - 2 * AMOUNT_WIDTH
    click.echo(f"{'Account':<{label_width}}{'Debit':>{AMOUNT_WIDTH}}{'Credit':>{AMOUNT_WIDTH}}")
    echo_rule()
    if not report.rows:
        click.echo("No account balances.")
    for row in report.rows:
        label = f"{row.account.number} {row.account.name}"[: label_width - 1]
        debit = format_currency(row.debit_balance) if row.debit_balance else ""
        credit = format_currency(row.credit_balance) if row.credit_balance else ""
        click.echo(f"{label:<{label_width}}{debit:>{AMOUNT_WIDTH}}{credit:>{AMOUNT_WIDTH}}")
    echo_rule()
    click.echo(
        f"{'TOTAL':<{label_width}}"
        f"{format_currency(report.total_debits):>{AMOUNT_WIDTH}}"
        f"{format_currency(report.total_credits):>{AMOUNT_WIDTH}}"
    )

    if report.is_balanced:
        click.echo("\nTrial balance is balanced.")
    else:
        click.echo(f"\nTrial balance is OUT OF BALANCE by {format_currency(abs(report.difference))}")


@report_group.command("balance-sheet")
@click.pass_context
def balance_sheet(ctx):
    """Show the balance sheet (Assets = Liabilities + Equity)."""
    report = ReportService(ctx.obj["ledger"]).balance_sheet()

    echo_title("BALANCE SHEET")

    echo_section("Assets")
    for line in report.assets:
        echo_amount_line(line.name, line.amount)
    echo_amount_line("Total Assets", report.total_assets, indent=0)

    echo_section("Liabilities")
    for line in report.liabilities:
        echo_amount_line(line.name, line.amount)
    echo_amount_line("Total Liabilities", report.total_liabilities, indent=0)

    echo_section("Equity")
    for line in report.equity:
        echo_amount_line(line.name, line.amount)
    echo_amount_line("Total Equity", report.total_equity, indent=0)

    echo_rule()
    echo_amount_line("Total Liabilities & Equity", report.total_liabilities_and_equity, indent=0)
    if not report.is_balanced:
        click.echo("\nWarning: assets do not equal liabilities plus equity")


@report_group.command("income-statement")
@click.pass_context
def income_statement(ctx):
    """Show the income statement (Revenue - Expenses)."""
    report = ReportService(ctx.obj["ledger"]).income_statement()

    echo_title("INCOME STATEMENT")

    echo_section("Revenue")
    for line in report.revenue:
        echo_amount_line(line.name, line.amount)
    echo_amount_line("Total Revenue", report.total_revenue, indent=0)

    echo_section("Expenses")
    for line in report.expenses:
        echo_amount_line(line.name, line.amount)
    echo_amount_line("Total Expenses", report.total_expenses, indent=0)

    echo_rule()
    label = "Net Income" if report.net_income >= 0 else "Net Loss"
    echo_amount_line(label, report.net_income, indent=0)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
