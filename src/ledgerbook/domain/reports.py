"""Financial report generators.

Each report is a pure function of a chart of accounts and a journal. The
ReportService wrapper runs them against a ledger's current snapshot.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ledgerbook.domain.balances import compute_balances, get_account_balance
from ledgerbook.domain.entities import (
    ZERO,
    BALANCE_TOLERANCE,
    Account,
    AccountType,
    BalanceSheet,
    DashboardSummary,
    IncomeStatement,
    JournalEntry,
    LedgerAlert,
    ReportLine,
    TrialBalance,
    TrialBalanceRow,
)
from ledgerbook.domain.ledger import Ledger

logger = logging.getLogger(__name__)

NET_INCOME_LABEL = "Net Income"


def _accounts_of_type(accounts: Sequence[Account], account_type: AccountType) -> list[Account]:
    return [account for account in accounts if account.type == account_type]


def _report_lines(
    accounts: Sequence[Account],
    balances: dict[int, Decimal],
    account_type: AccountType,
    flip_sign: bool,
) -> tuple[ReportLine, ...]:
    """Build nonzero report lines for one account type.

    flip_sign shows credit-normal accounts (liabilities, equity, revenue)
    as positive amounts.
    """
    lines = []
    for account in _accounts_of_type(accounts, account_type):
        balance = balances.get(account.id, ZERO)
        amount = abs(balance) if flip_sign else balance
        if amount != ZERO:
            lines.append(ReportLine(name=account.name, amount=amount, account=account))
    return tuple(lines)


def trial_balance(accounts: Sequence[Account], entries: Sequence[JournalEntry]) -> TrialBalance:
    """Build the trial balance.

    Positive balances go to the debit column and negative balances to the
    credit column. Accounts with a zero balance are omitted.

    Balances posted to account ids missing from the chart are left out and
    logged, so the totals can disagree.
    """
    balances = compute_balances(accounts, entries)
    rows = []
    total_debits = ZERO
    total_credits = ZERO
    for account in accounts:
        balance = balances.get(account.id, ZERO)
        debit_balance = balance if balance > ZERO else ZERO
        credit_balance = abs(balance) if balance < ZERO else ZERO
        total_debits += debit_balance
        total_credits += credit_balance
        if debit_balance > ZERO or credit_balance > ZERO:
            rows.append(
                TrialBalanceRow(
                    account=account,
                    debit_balance=debit_balance,
                    credit_balance=credit_balance,
                )
            )
    known = {account.id for account in accounts}
    omitted = {account_id: balance for account_id, balance in balances.items()
               if account_id not in known and balance != ZERO}
    if omitted:
        logger.warning(
            "Trial balance omits %s posted to unknown account ids %s",
            sum(omitted.values(), ZERO),
            ", ".join(str(account_id) for account_id in sorted(omitted)),
        )
    return TrialBalance(rows=tuple(rows), total_debits=total_debits, total_credits=total_credits)


def income_statement(
    accounts: Sequence[Account], entries: Sequence[JournalEntry]
) -> IncomeStatement:
    """Build the income statement over the whole entry history."""
    balances = compute_balances(accounts, entries)
    revenue = _report_lines(accounts, balances, AccountType.REVENUE, flip_sign=True)
    expenses = _report_lines(accounts, balances, AccountType.EXPENSE, flip_sign=False)
    return IncomeStatement(
        revenue=revenue,
        expenses=expenses,
        total_revenue=sum((line.amount for line in revenue), ZERO),
        total_expenses=sum((line.amount for line in expenses), ZERO),
    )


def net_income(accounts: Sequence[Account], entries: Sequence[JournalEntry]) -> Decimal:
    """Return total revenue minus total expenses."""
    return income_statement(accounts, entries).net_income


def balance_sheet(accounts: Sequence[Account], entries: Sequence[JournalEntry]) -> BalanceSheet:
    """Build the balance sheet.

    Net income not yet closed into an equity account is shown as a synthetic
    "Net Income" equity line, so Assets = Liabilities + Equity holds for a
    balanced ledger.
    """
    balances = compute_balances(accounts, entries)
    assets = _report_lines(accounts, balances, AccountType.ASSET, flip_sign=False)
    liabilities = _report_lines(accounts, balances, AccountType.LIABILITY, flip_sign=True)
    equity = _report_lines(accounts, balances, AccountType.EQUITY, flip_sign=True)

    income = net_income(accounts, entries)
    if income != ZERO:
        equity = equity + (ReportLine(name=NET_INCOME_LABEL, amount=income),)

    return BalanceSheet(
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=sum((line.amount for line in assets), ZERO),
        total_liabilities=sum((line.amount for line in liabilities), ZERO),
        total_equity=sum((line.amount for line in equity), ZERO),
        net_income=income,
    )


def _find_cash_account(accounts: Sequence[Account]) -> Optional[Account]:
    for account in accounts:
        if "cash" in account.name.lower():
            return account
    return None


def dashboard_summary(
    accounts: Sequence[Account], entries: Sequence[JournalEntry]
) -> DashboardSummary:
    """Build the dashboard totals and health alerts."""
    balances = compute_balances(accounts, entries)
    totals = {account_type: ZERO for account_type in AccountType}
    for account in accounts:
        balance = balances.get(account.id, ZERO)
        if account.type in (AccountType.ASSET, AccountType.EXPENSE):
            totals[account.type] += balance
        else:
            totals[account.type] += abs(balance)

    alerts = []
    trial = trial_balance(accounts, entries)
    if abs(trial.difference) >= BALANCE_TOLERANCE:
        alerts.append(LedgerAlert(level="danger", message="Trial balance is out of balance!"))

    cash_account = _find_cash_account(accounts)
    if cash_account is not None and balances.get(cash_account.id, ZERO) < ZERO:
        alerts.append(LedgerAlert(level="warning", message="Cash account has negative balance"))

    return DashboardSummary(
        total_assets=totals[AccountType.ASSET],
        total_liabilities=totals[AccountType.LIABILITY],
        total_equity=totals[AccountType.EQUITY],
        total_revenue=totals[AccountType.REVENUE],
        total_expenses=totals[AccountType.EXPENSE],
        alerts=tuple(alerts),
    )


class ReportService:
    """Service running the report generators on a ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize report service.

        Args:
            ledger: Loaded ledger
        """
        self.ledger = ledger

    def balances(self) -> dict[int, Decimal]:
        """Return current balances for every account."""
        return compute_balances(self.ledger.accounts, self.ledger.entries)

    def account_balance(self, account_id: int) -> Decimal:
        """Return the current balance of one account, zero if unknown."""
        return get_account_balance(self.ledger.accounts, self.ledger.entries, account_id)

    def trial_balance(self) -> TrialBalance:
        return trial_balance(self.ledger.accounts, self.ledger.entries)

    def balance_sheet(self) -> BalanceSheet:
        return balance_sheet(self.ledger.accounts, self.ledger.entries)

    def income_statement(self) -> IncomeStatement:
        return income_statement(self.ledger.accounts, self.ledger.entries)

    def dashboard(self) -> DashboardSummary:
        return dashboard_summary(self.ledger.accounts, self.ledger.entries)
