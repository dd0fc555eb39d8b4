"""Tests for the balance engine and financial reports."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerbook.domain.balances import compute_balances, get_account_balance, total_balance
from ledgerbook.domain.entities import Account, AccountType, JournalEntry, TransactionLine
from ledgerbook.domain.reports import (
    NET_INCOME_LABEL,
    balance_sheet,
    dashboard_summary,
    income_statement,
    net_income,
    trial_balance,
)


def _account(account_id, number, name, account_type):
    return Account(id=account_id, number=number, name=name, type=account_type)


def _entry(entry_id, *lines):
    return JournalEntry(
        id=entry_id,
        date=date(2024, 1, entry_id),
        description=f"Entry {entry_id}",
        transactions=tuple(
            TransactionLine(account_id=account_id, debit=Decimal(debit), credit=Decimal(credit))
            for account_id, debit, credit in lines
        ),
        created_at=datetime(2024, 1, entry_id, tzinfo=UTC),
    )


CASH = _account(1, "1000", "Cash", AccountType.ASSET)
PAYABLE = _account(2, "2000", "Accounts Payable", AccountType.LIABILITY)
EQUITY = _account(3, "3000", "Owner's Equity", AccountType.EQUITY)
SALES = _account(4, "4000", "Sales", AccountType.REVENUE)
RENT = _account(5, "5000", "Rent Expense", AccountType.EXPENSE)
ACCOUNTS = [CASH, PAYABLE, EQUITY, SALES, RENT]

ENTRIES = [
    _entry(1, (1, "1000", "0"), (3, "0", "1000")),
    _entry(2, (1, "700", "0"), (4, "0", "700")),
    _entry(3, (5, "300", "0"), (1, "0", "300")),
    _entry(4, (5, "150", "0"), (2, "0", "150")),
]


class TestBalances:
    """Tests for compute_balances."""

    def test_balances(self):
        balances = compute_balances(ACCOUNTS, ENTRIES)
        assert balances == {
            1: Decimal("1400"),
            2: Decimal("-150"),
            3: Decimal("-1000"),
            4: Decimal("-700"),
            5: Decimal("450"),
        }

    def test_balanced_journal_sums_to_zero(self):
        assert total_balance(compute_balances(ACCOUNTS, ENTRIES)) == Decimal("0")

    def test_every_account_present(self):
        balances = compute_balances(ACCOUNTS, [])
        assert set(balances) == {acc.id for acc in ACCOUNTS}
        assert all(value == Decimal("0") for value in balances.values())

    def test_entry_order_irrelevant(self):
        assert compute_balances(ACCOUNTS, ENTRIES) == compute_balances(ACCOUNTS, ENTRIES[::-1])

    def test_dangling_account_tolerated(self):
        dangling = _entry(9, (1, "10", "0"), (42, "0", "10"))
        balances = compute_balances(ACCOUNTS, [dangling])
        assert balances[1] == Decimal("10")
        assert balances[42] == Decimal("-10")

    def test_get_account_balance(self):
        assert get_account_balance(ACCOUNTS, ENTRIES, 1) == Decimal("1400")
        assert get_account_balance(ACCOUNTS, ENTRIES, 99) == Decimal("0")


class TestTrialBalance:
    """Tests for trial_balance."""

    def test_columns(self):
        report = trial_balance(ACCOUNTS, ENTRIES)
        rows = {row.account.name: (row.debit_balance, row.credit_balance) for row in report.rows}
        assert rows["Cash"] == (Decimal("1400"), Decimal("0"))
        assert rows["Rent Expense"] == (Decimal("450"), Decimal("0"))
        assert rows["Owner's Equity"] == (Decimal("0"), Decimal("1000"))
        assert rows["Sales"] == (Decimal("0"), Decimal("700"))
        assert rows["Accounts Payable"] == (Decimal("0"), Decimal("150"))
        assert report.total_debits == Decimal("1850")
        assert report.total_credits == Decimal("1850")
        assert report.is_balanced

    def test_zero_balance_accounts_omitted(self):
        entries = [_entry(1, (1, "50", "0"), (3, "0", "50")), _entry(2, (3, "50", "0"), (1, "0", "50"))]
        report = trial_balance(ACCOUNTS, entries)
        assert report.rows == ()
        assert report.total_debits == report.total_credits == Decimal("0")

    def test_unbalanced_entry_shows_difference(self):
        lopsided = _entry(1, (1, "100", "0"), (3, "0", "90"))
        report = trial_balance(ACCOUNTS, [lopsided])
        assert report.difference == Decimal("10")
        assert not report.is_balanced

    def test_idempotent(self):
        assert trial_balance(ACCOUNTS, ENTRIES) == trial_balance(ACCOUNTS, ENTRIES)

    def test_unknown_account_balance_logged(self, caplog):
        dangling = _entry(1, (1, "40", "0"), (99, "0", "40"))
        report = trial_balance(ACCOUNTS, [dangling])
        assert [row.account.name for row in report.rows] == ["Cash"]
        assert not report.is_balanced
        assert "Trial balance omits -40 posted to unknown account ids 99" in caplog.text


class TestIncomeStatement:
    """Tests for income_statement."""

    def test_income_statement(self):
        report = income_statement(ACCOUNTS, ENTRIES)
        assert [(line.name, line.amount) for line in report.revenue] == [("Sales", Decimal("700"))]
        assert [(line.name, line.amount) for line in report.expenses] == [
            ("Rent Expense", Decimal("450"))
        ]
        assert report.total_revenue == Decimal("700")
        assert report.total_expenses == Decimal("450")
        assert report.net_income == Decimal("250")
        assert net_income(ACCOUNTS, ENTRIES) == Decimal("250")

    def test_empty(self):
        report = income_statement([], [])
        assert report.revenue == ()
        assert report.expenses == ()
        assert report.net_income == Decimal("0")


class TestBalanceSheet:
    """Tests for balance_sheet."""

    def test_balance_sheet_balances(self):
        report = balance_sheet(ACCOUNTS, ENTRIES)
        assert report.total_assets == Decimal("1400")
        assert report.total_liabilities == Decimal("150")
        assert report.total_equity == Decimal("1250")
        assert report.net_income == Decimal("250")
        assert report.is_balanced

    def test_net_income_line(self):
        report = balance_sheet(ACCOUNTS, ENTRIES)
        net_line = report.equity[-1]
        assert net_line.name == NET_INCOME_LABEL
        assert net_line.amount == Decimal("250")
        assert net_line.account is None

    def test_no_net_income_line_when_zero(self):
        report = balance_sheet(ACCOUNTS, ENTRIES[:1])
        assert [line.name for line in report.equity] == ["Owner's Equity"]

    def test_owner_investment_scenario(self):
        report = balance_sheet(ACCOUNTS, ENTRIES[:1])
        assert report.total_assets == Decimal("1000")
        assert report.total_liabilities_and_equity == Decimal("1000")

    def test_empty(self):
        report = balance_sheet([], [])
        assert report.assets == report.liabilities == report.equity == ()
        assert report.is_balanced


class TestDashboard:
    """Tests for dashboard_summary."""

    def test_totals(self):
        summary = dashboard_summary(ACCOUNTS, ENTRIES)
        assert summary.total_assets == Decimal("1400")
        assert summary.total_liabilities == Decimal("150")
        assert summary.total_equity == Decimal("1000")
        assert summary.total_revenue == Decimal("700")
        assert summary.total_expenses == Decimal("450")
        assert summary.net_income == Decimal("250")
        assert summary.alerts == ()

    def test_out_of_balance_alert(self):
        lopsided = _entry(1, (1, "100", "0"), (3, "0", "90"))
        summary = dashboard_summary(ACCOUNTS, [lopsided])
        assert [(a.level, a.message) for a in summary.alerts] == [
            ("danger", "Trial balance is out of balance!")
        ]

    def test_negative_cash_alert(self):
        overdrawn = _entry(1, (5, "80", "0"), (1, "0", "80"))
        summary = dashboard_summary(ACCOUNTS, [overdrawn])
        assert [(a.level, a.message) for a in summary.alerts] == [
            ("warning", "Cash account has negative balance")
        ]


class TestReportService:
    """Tests for ReportService against a live ledger."""

    def test_end_to_end(self, journal_service, report_service, sample_accounts):
        cash = sample_accounts["Cash"]
        equity = sample_accounts["Owner's Equity"]
        journal_service.create_entry(
            "2024-01-01", "Investment", [(cash.id, "5000", None), (equity.id, None, "5000")]
        )

        assert report_service.account_balance(cash.id) == Decimal("5000")
        assert report_service.account_balance(equity.id) == Decimal("-5000")
        trial = report_service.trial_balance()
        assert trial.total_debits == trial.total_credits == Decimal("5000")
        sheet = report_service.balance_sheet()
        assert sheet.total_assets == Decimal("5000")
        assert sheet.total_equity == Decimal("5000")
        assert report_service.income_statement().net_income == Decimal("0")

    def test_reports_follow_changes(self, journal_service, report_service, sample_accounts):
        cash = sample_accounts["Cash"]
        sales = sample_accounts["Sales"]
        entry = journal_service.create_entry(
            "2024-01-01", "Sale", [(cash.id, "80", None), (sales.id, None, "80")]
        )
        assert report_service.income_statement().net_income == Decimal("80")
        journal_service.delete_entry(entry.id)
        assert report_service.income_statement().net_income == Decimal("0")
        assert report_service.balances()[cash.id] == Decimal("0")

    @pytest.mark.parametrize("report", ["trial_balance", "balance_sheet", "income_statement"])
    def test_empty_ledger(self, report_service, report):
        assert getattr(report_service, report)() is not None
