"""Plain-text formatting helpers for report output."""

from decimal import Decimal

import click

REPORT_WIDTH = 60
AMOUNT_WIDTH = 16


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars, e.g. -$1,234.50."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def echo_title(title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("=" * REPORT_WIDTH)


def echo_section(title: str) -> None:
    click.echo(f"\n{title.upper()}")


def echo_amount_line(label: str, amount: Decimal, indent: int = 2) -> None:
    """Print a label left-aligned and an amount right-aligned."""
    label_width = REPORT_WIDTH - AMOUNT_WIDTH - indent
    click.echo(f"{' ' * indent}{label:<{label_width}}{format_currency(amount):>{AMOUNT_WIDTH}}")


def echo_rule() -> None:
    click.echo("-" * REPORT_WIDTH)
