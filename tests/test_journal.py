"""Tests for the journal store."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerbook.domain.balances import compute_balances, total_balance
from ledgerbook.domain.entities import TransactionLine
from ledgerbook.domain.errors import NotFoundError, UnbalancedEntryError, ValidationError
from ledgerbook.domain.journal import JournalService
from ledgerbook.domain.ledger import Ledger


@pytest.fixture
def cash(sample_accounts):
    return sample_accounts["Cash"]


@pytest.fixture
def equity(sample_accounts):
    return sample_accounts["Owner's Equity"]


@pytest.fixture
def rent(sample_accounts):
    return sample_accounts["Rent Expense"]


class TestCreateEntry:
    """Tests for JournalService.create_entry."""

    def test_create_balanced_entry(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            date="2024-01-15",
            description="Owner investment",
            reference="INV001",
            transactions=[
                {"account_id": cash.id, "debit": "5000", "credit": None},
                {"account_id": equity.id, "debit": None, "credit": "5000"},
            ],
        )
        assert entry.id == 1
        assert entry.date == date(2024, 1, 15)
        assert entry.reference == "INV001"
        assert entry.total_debits == Decimal("5000")
        assert entry.total_credits == Decimal("5000")
        assert entry.created_at.tzinfo is not None
        assert entry.updated_at is None

    def test_accepts_line_objects_and_camel_case(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            date(2024, 1, 1),
            "Mixed inputs",
            [
                TransactionLine(account_id=cash.id, debit=Decimal("10")),
                {"accountId": equity.id, "credit": 10},
            ],
        )
        assert [line.account_id for line in entry.transactions] == [cash.id, equity.id]

    def test_ids_increase(self, journal_service, cash, equity):
        lines = [(cash.id, "1", None), (equity.id, None, "1")]
        first = journal_service.create_entry("2024-01-01", "One", lines)
        second = journal_service.create_entry("2024-01-02", "Two", lines)
        assert second.id == first.id + 1

    def test_unbalanced_rejected(self, journal_service, cash, equity):
        with pytest.raises(UnbalancedEntryError) as exc_info:
            journal_service.create_entry(
                "2024-01-01", "Bad", [(cash.id, "100", None), (equity.id, None, "90")]
            )
        assert exc_info.value.total_debits == Decimal("100")
        assert exc_info.value.total_credits == Decimal("90")
        assert journal_service.list_entries() == []

    def test_one_cent_off_rejected(self, journal_service, cash, equity):
        with pytest.raises(UnbalancedEntryError):
            journal_service.create_entry(
                "2024-01-01", "Rounding", [(cash.id, "100.00", None), (equity.id, None, "99.99")]
            )
        assert journal_service.list_entries() == []

    def test_sub_cent_inputs_round_before_balancing(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            "2024-01-01", "Rounded", [(cash.id, "10.004", None), (equity.id, None, "10.00")]
        )
        assert entry.total_debits == entry.total_credits == Decimal("10.00")

    def test_accepted_entries_sum_to_zero(self, ledger, journal_service, cash, equity, rent):
        for _ in range(3):
            with pytest.raises(UnbalancedEntryError):
                journal_service.create_entry(
                    "2024-01-01", "Off by a cent", [(cash.id, "100.00", None), (equity.id, None, "99.99")]
                )
        journal_service.create_entry(
            "2024-01-02", "Investment", [(cash.id, "100.01", None), (equity.id, None, "100.01")]
        )
        journal_service.create_entry(
            "2024-01-03", "Rent", [(rent.id, "33.33", None), (cash.id, None, "33.33")]
        )
        assert total_balance(compute_balances(ledger.accounts, ledger.entries)) == Decimal("0")

    def test_unbalanced_allowed_when_not_enforced(self, ledger, cash, equity, caplog):
        service = JournalService(ledger, enforce_balance=False)
        entry = service.create_entry(
            "2024-01-01", "Lopsided", [(cash.id, "100", None), (equity.id, None, "90")]
        )
        assert not entry.is_balanced
        assert service.get_entry(entry.id) == entry
        assert "Saving unbalanced entry" in caplog.text

    def test_blank_lines_dropped(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            "2024-01-01",
            "With blanks",
            [
                (cash.id, "25", None),
                (None, "", ""),
                (equity.id, "0", "0"),
                (equity.id, None, "25"),
            ],
        )
        assert len(entry.transactions) == 2

    def test_too_few_lines(self, journal_service, cash):
        with pytest.raises(ValidationError, match="At least two"):
            journal_service.create_entry("2024-01-01", "One line", [(cash.id, "10", None)])

    def test_debit_and_credit_on_one_line(self, journal_service, cash, equity):
        with pytest.raises(ValidationError, match="both a debit and a credit"):
            journal_service.create_entry(
                "2024-01-01", "Both", [(cash.id, "10", "10"), (equity.id, None, "10")]
            )

    def test_negative_amount(self, journal_service, cash, equity):
        with pytest.raises(ValidationError, match="negative"):
            journal_service.create_entry(
                "2024-01-01", "Negative", [(cash.id, "-10", None), (equity.id, None, "-10")]
            )

    def test_malformed_amount(self, journal_service, cash, equity):
        with pytest.raises(ValidationError, match="Invalid debit amount"):
            journal_service.create_entry(
                "2024-01-01", "Garbage", [(cash.id, "ten", None), (equity.id, None, "10")]
            )

    def test_unknown_account(self, journal_service, cash):
        with pytest.raises(ValidationError, match="not found"):
            journal_service.create_entry(
                "2024-01-01", "Dangling", [(cash.id, "10", None), (999, None, "10")]
            )

    @pytest.mark.parametrize("bad_id", [True, 1.9, "one"])
    def test_invalid_account_id(self, journal_service, cash, equity, bad_id):
        with pytest.raises(ValidationError, match="Invalid account id"):
            journal_service.create_entry(
                "2024-01-01", "Bad id", [(bad_id, "10", None), (equity.id, None, "10")]
            )

    def test_integral_float_account_id(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            "2024-01-01", "Float id", [(float(cash.id), "10", None), (equity.id, None, "10")]
        )
        assert entry.transactions[0].account_id == cash.id

    @pytest.mark.parametrize("bad_date", [None, "", "not a date"])
    def test_bad_date(self, journal_service, cash, equity, bad_date):
        with pytest.raises(ValidationError):
            journal_service.create_entry(
                bad_date, "Dated", [(cash.id, "10", None), (equity.id, None, "10")]
            )

    def test_missing_description(self, journal_service, cash, equity):
        with pytest.raises(ValidationError, match="description"):
            journal_service.create_entry(
                "2024-01-01", "  ", [(cash.id, "10", None), (equity.id, None, "10")]
            )

    def test_persisted(self, temp_db, journal_service, cash, equity):
        journal_service.create_entry(
            "2024-01-01", "Saved", [(cash.id, "12.34", None), (equity.id, None, "12.34")]
        )
        reloaded = Ledger(temp_db).load()
        assert len(reloaded.entries) == 1
        stored = reloaded.entries[0]
        assert stored.description == "Saved"
        assert stored.transactions[0].debit == Decimal("12.34")
        assert reloaded.next_entry_id == 2


class TestQueries:
    """Tests for listing and lookups."""

    def test_list_newest_first(self, journal_service, cash, equity, rent):
        journal_service.create_entry("2024-01-01", "First", [(cash.id, "1", None), (equity.id, None, "1")])
        journal_service.create_entry("2024-01-02", "Second", [(rent.id, "1", None), (cash.id, None, "1")])
        assert [e.description for e in journal_service.list_entries()] == ["Second", "First"]

    def test_recent_entries(self, journal_service, cash, equity):
        for day in range(1, 8):
            journal_service.create_entry(
                f"2024-01-0{day}", f"Entry {day}", [(cash.id, "1", None), (equity.id, None, "1")]
            )
        recent = journal_service.recent_entries()
        assert [e.description for e in recent] == [f"Entry {d}" for d in (7, 6, 5, 4, 3)]

    def test_entries_for_account(self, journal_service, cash, equity, rent):
        journal_service.create_entry("2024-01-01", "Investment", [(cash.id, "9", None), (equity.id, None, "9")])
        journal_service.create_entry("2024-01-02", "Rent", [(rent.id, "3", None), (cash.id, None, "3")])
        assert [e.description for e in journal_service.entries_for_account(rent.id)] == ["Rent"]
        assert len(journal_service.entries_for_account(cash.id)) == 2

    def test_get_entry_missing(self, journal_service):
        assert journal_service.get_entry(1) is None


class TestUpdateEntry:
    """Tests for JournalService.update_entry."""

    def test_update_keeps_id_and_created_at(self, journal_service, cash, equity, rent):
        entry = journal_service.create_entry(
            "2024-01-01", "Original", [(cash.id, "10", None), (equity.id, None, "10")]
        )
        updated = journal_service.update_entry(
            entry.id,
            description="Corrected",
            transactions=[(rent.id, "20", None), (cash.id, None, "20")],
        )
        assert updated.id == entry.id
        assert updated.created_at == entry.created_at
        assert updated.updated_at is not None
        assert updated.date == entry.date
        assert updated.description == "Corrected"
        assert updated.total_debits == Decimal("20")
        assert journal_service.get_entry(entry.id) == updated

    def test_update_unbalanced_rejected(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            "2024-01-01", "Original", [(cash.id, "10", None), (equity.id, None, "10")]
        )
        with pytest.raises(UnbalancedEntryError):
            journal_service.update_entry(
                entry.id, transactions=[(cash.id, "10", None), (equity.id, None, "5")]
            )
        assert journal_service.get_entry(entry.id) == entry

    def test_update_missing(self, journal_service):
        with pytest.raises(NotFoundError):
            journal_service.update_entry(5, description="Nope")


class TestDeleteEntry:
    """Tests for entry deletion."""

    def test_delete_entry(self, journal_service, cash, equity):
        entry = journal_service.create_entry(
            "2024-01-01", "Doomed", [(cash.id, "10", None), (equity.id, None, "10")]
        )
        journal_service.delete_entry(entry.id)
        assert journal_service.get_entry(entry.id) is None

    def test_delete_missing(self, journal_service):
        with pytest.raises(NotFoundError):
            journal_service.delete_entry(3)

    def test_delete_by_account(self, journal_service, cash, equity, rent):
        journal_service.create_entry("2024-01-01", "Investment", [(cash.id, "9", None), (equity.id, None, "9")])
        journal_service.create_entry("2024-01-02", "Rent", [(rent.id, "3", None), (cash.id, None, "3")])
        assert journal_service.delete_by_account(rent.id) == 1
        assert [e.description for e in journal_service.list_entries()] == ["Investment"]

    def test_ids_not_reused_after_delete(self, journal_service, cash, equity):
        lines = [(cash.id, "1", None), (equity.id, None, "1")]
        first = journal_service.create_entry("2024-01-01", "One", lines)
        journal_service.delete_entry(first.id)
        second = journal_service.create_entry("2024-01-02", "Two", lines)
        assert second.id == first.id + 1


def test_created_at_is_utc(journal_service, cash, equity):
    before = datetime.now(UTC)
    entry = journal_service.create_entry(
        "today", "Now", [(cash.id, "1", None), (equity.id, None, "1")]
    )
    assert entry.created_at >= before
    assert entry.date == date.today()
