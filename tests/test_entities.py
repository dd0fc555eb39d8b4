"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerbook.domain.entities import (
    Account,
    AccountType,
    BalanceSheet,
    IncomeStatement,
    JournalEntry,
    TransactionLine,
    TrialBalance,
)
from ledgerbook.domain.errors import ValidationError


class TestAccountType:
    """Tests for AccountType parsing."""

    @pytest.mark.parametrize("value", ["Asset", "asset", "ASSET", " Asset "])
    def test_parse_case_insensitive(self, value):
        assert AccountType.parse(value) is AccountType.ASSET

    def test_parse_member(self):
        assert AccountType.parse(AccountType.EXPENSE) is AccountType.EXPENSE

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Unknown account type"):
            AccountType.parse("Gains")

    def test_parse_empty(self):
        with pytest.raises(ValidationError, match="required"):
            AccountType.parse("")

    def test_str_is_value(self):
        assert str(AccountType.LIABILITY) == "Liability"


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(id=1, number="1000", name="Cash", type=AccountType.ASSET)
        with pytest.raises(FrozenInstanceError):
            account.name = "New Name"

    def test_default_description(self):
        account = Account(id=1, number="1000", name="Cash", type=AccountType.ASSET)
        assert account.description == ""


class TestJournalEntry:
    """Tests for JournalEntry entity."""

    def _entry(self, lines):
        return JournalEntry(
            id=1,
            date=date(2024, 1, 1),
            description="Test",
            transactions=tuple(lines),
            created_at=datetime.now(UTC),
        )

    def test_totals(self):
        entry = self._entry(
            [
                TransactionLine(account_id=1, debit=Decimal("100.00")),
                TransactionLine(account_id=2, credit=Decimal("60.00")),
                TransactionLine(account_id=3, credit=Decimal("40.00")),
            ]
        )
        assert entry.total_debits == Decimal("100.00")
        assert entry.total_credits == Decimal("100.00")
        assert entry.is_balanced

    def test_one_cent_off_is_unbalanced(self):
        entry = self._entry(
            [
                TransactionLine(account_id=1, debit=Decimal("100.00")),
                TransactionLine(account_id=2, credit=Decimal("99.99")),
            ]
        )
        assert not entry.is_balanced

    def test_sub_cent_difference_is_balanced(self):
        entry = self._entry(
            [
                TransactionLine(account_id=1, debit=Decimal("100.000")),
                TransactionLine(account_id=2, credit=Decimal("99.995")),
            ]
        )
        assert entry.is_balanced

    def test_references_account(self):
        entry = self._entry(
            [
                TransactionLine(account_id=1, debit=Decimal("5")),
                TransactionLine(account_id=2, credit=Decimal("5")),
            ]
        )
        assert entry.references_account(1)
        assert entry.references_account(2)
        assert not entry.references_account(3)

    def test_line_amount_is_debit_minus_credit(self):
        assert TransactionLine(account_id=1, debit=Decimal("10")).amount == Decimal("10")
        assert TransactionLine(account_id=1, credit=Decimal("10")).amount == Decimal("-10")


class TestReports:
    """Tests for report value objects."""

    def test_empty_trial_balance_is_balanced(self):
        report = TrialBalance()
        assert report.difference == Decimal("0")
        assert report.is_balanced

    def test_balance_sheet_totals(self):
        report = BalanceSheet(
            total_assets=Decimal("500"),
            total_liabilities=Decimal("200"),
            total_equity=Decimal("300"),
        )
        assert report.total_liabilities_and_equity == Decimal("500")
        assert report.is_balanced

    def test_income_statement_net_income(self):
        report = IncomeStatement(total_revenue=Decimal("100"), total_expenses=Decimal("130"))
        assert report.net_income == Decimal("-30")
