"""Journal entry domain service."""

import logging
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Union

from ledgerbook.domain.entities import (
    ZERO,
    BALANCE_TOLERANCE,
    JournalEntry,
    TransactionLine,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
    account_not_found,
    entry_not_found,
    too_few_lines,
)
from ledgerbook.domain.ledger import Ledger
from ledgerbook.utils.amount_parser import parse_amount, round_to_cents
from ledgerbook.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

MIN_LINES = 2

LineInput = Union[TransactionLine, Mapping[str, Any], tuple]


def _to_amount(value: Any, field_name: str) -> Decimal:
    """Convert a line amount to Decimal. Blank means zero."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name} amount: {value!r}")
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    else:
        try:
            amount = parse_amount(str(value))
        except ValueError as e:
            raise ValidationError(f"Invalid {field_name} amount: {e}") from e
    try:
        is_negative = amount < ZERO
    except InvalidOperation as e:
        raise ValidationError(f"Invalid {field_name} amount: {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field_name} amount: {value!r}")
    if is_negative:
        raise ValidationError(f"{field_name.capitalize()} amount cannot be negative: {amount}")
    return round_to_cents(amount)


def _to_account_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid account id: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid account id: {value!r}") from e


def _to_date(value: Union[date, datetime, str, None]) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Entry date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid entry date: {e}") from e


def _to_description(value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationError("Entry description is required")
    return value.strip()


def _raw_line(line: LineInput) -> tuple[Any, Any, Any]:
    """Unpack a line given as TransactionLine, mapping or tuple."""
    if isinstance(line, TransactionLine):
        return line.account_id, line.debit, line.credit
    if isinstance(line, Mapping):
        account_id = line.get("account_id", line.get("accountId"))
        return account_id, line.get("debit"), line.get("credit")
    if isinstance(line, (tuple, list)) and len(line) == 3:
        return line[0], line[1], line[2]
    raise ValidationError(f"Invalid transaction line: {line!r}")


class JournalService:
    """Service for recording and maintaining journal entries."""

    def __init__(self, ledger: Ledger, enforce_balance: bool = True):
        """Initialize journal service.

        Args:
            ledger: Loaded ledger
            enforce_balance: If True, entries whose debits and credits differ
                by a cent or more are rejected. If False they are saved with a
                logged warning.
        """
        self.ledger = ledger
        self.enforce_balance = enforce_balance

    def build_lines(self, transactions: Iterable[LineInput]) -> tuple[TransactionLine, ...]:
        """Validate and normalize transaction lines.

        Lines without an account, or with neither a debit nor a credit, are
        dropped as blank form rows.

        Raises:
            ValidationError: If an amount is negative or malformed, a line has
                both a debit and a credit, a line references an unknown
                account, or fewer than two lines remain
        """
        known_ids = {account.id for account in self.ledger.accounts}
        lines = []
        skipped = 0
        for raw in transactions:
            account_id, debit, credit = _raw_line(raw)
            account_id = _to_account_id(account_id)
            debit = _to_amount(debit, "debit")
            credit = _to_amount(credit, "credit")

            if account_id is None or (debit == ZERO and credit == ZERO):
                skipped += 1
                continue
            if debit != ZERO and credit != ZERO:
                raise ValidationError(
                    f"Line for account {account_id} has both a debit and a credit; "
                    "split it into two lines"
                )
            if account_id not in known_ids:
                raise ValidationError(account_not_found(account_id))
            lines.append(TransactionLine(account_id=account_id, debit=debit, credit=credit))

        if skipped:
            logger.debug("Skipped %d blank transaction line(s)", skipped)
        if len(lines) < MIN_LINES:
            raise ValidationError(too_few_lines(len(lines)))
        return tuple(lines)

    def check_balance(self, lines: tuple[TransactionLine, ...]) -> None:
        """Reject (or warn about) lines whose debits and credits differ.

        Raises:
            UnbalancedEntryError: If enforce_balance is set and the lines do
                not balance to the cent
        """
        total_debits = sum((line.debit for line in lines), ZERO)
        total_credits = sum((line.credit for line in lines), ZERO)
        if abs(total_debits - total_credits) < BALANCE_TOLERANCE:
            return
        if self.enforce_balance:
            raise UnbalancedEntryError(total_debits, total_credits)
        logger.warning(
            "Saving unbalanced entry: debits %s, credits %s", total_debits, total_credits
        )

    def create_entry(
        self,
        date: Union[date, datetime, str, None],
        description: Optional[str],
        transactions: Iterable[LineInput],
        reference: Optional[str] = None,
    ) -> JournalEntry:
        """Record a new journal entry.

        Args:
            date: Entry date (date or ISO / relative date string)
            description: Entry description
            transactions: Debit/credit lines
            reference: Optional external reference code

        Returns:
            The created entry

        Raises:
            ValidationError: If a field or line is invalid
            UnbalancedEntryError: If debits do not equal credits
            StorageError: If the change could not be saved
        """
        entry_date = _to_date(date)
        entry_description = _to_description(description)
        lines = self.build_lines(transactions)
        self.check_balance(lines)

        with self.ledger.mutate("journal entry") as ledger:
            entry = JournalEntry(
                id=ledger.allocate_entry_id(),
                date=entry_date,
                reference=(reference or "").strip(),
                description=entry_description,
                transactions=lines,
                created_at=datetime.now(UTC),
            )
            ledger.replace_entries([*ledger.entries, entry])

        logger.info(
            "Recorded journal entry %d (%s, %s) with %d lines",
            entry.id,
            entry.date.isoformat(),
            entry.description,
            len(lines),
        )
        return entry

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        for entry in self.ledger.entries:
            if entry.id == entry_id:
                return entry
        return None

    def list_entries(self) -> list[JournalEntry]:
        """List journal entries, most recently added first."""
        return list(reversed(self.ledger.entries))

    def recent_entries(self, limit: int = 5) -> list[JournalEntry]:
        """Return the last entries added, newest first."""
        return self.list_entries()[:limit]

    def entries_for_account(self, account_id: int) -> list[JournalEntry]:
        """List entries with a line posting to the account, newest first."""
        return [entry for entry in self.list_entries() if entry.references_account(account_id)]

    def update_entry(
        self,
        entry_id: int,
        date: Union[date, datetime, str, None] = None,
        description: Optional[str] = None,
        transactions: Optional[Iterable[LineInput]] = None,
        reference: Optional[str] = None,
    ) -> JournalEntry:
        """Update a journal entry. Fields left as None are unchanged.

        The id and creation time are preserved; updated_at is stamped.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If a new field or line is invalid
            UnbalancedEntryError: If the new lines do not balance
            StorageError: If the change could not be saved
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))

        lines = entry.transactions if transactions is None else self.build_lines(transactions)
        self.check_balance(lines)
        updated = replace(
            entry,
            date=entry.date if date is None else _to_date(date),
            description=entry.description if description is None else _to_description(description),
            reference=entry.reference if reference is None else reference.strip(),
            transactions=lines,
            updated_at=datetime.now(UTC),
        )

        with self.ledger.mutate(f"journal entry {entry_id}") as ledger:
            ledger.replace_entries([updated if e.id == entry_id else e for e in ledger.entries])

        logger.info("Updated journal entry %d", entry_id)
        return updated

    def delete_entry(self, entry_id: int) -> None:
        """Delete a journal entry.

        Raises:
            NotFoundError: If the entry does not exist
            StorageError: If the change could not be saved
        """
        if self.get_entry(entry_id) is None:
            raise NotFoundError(entry_not_found(entry_id))

        with self.ledger.mutate(f"deletion of journal entry {entry_id}") as ledger:
            ledger.replace_entries([e for e in ledger.entries if e.id != entry_id])

        logger.info("Deleted journal entry %d", entry_id)

    def delete_by_account(self, account_id: int) -> int:
        """Delete every entry with a line posting to the account.

        Returns:
            Number of entries removed
        """
        with self.ledger.mutate(f"entries of account {account_id}"):
            removed = self.remove_entries_for_account(account_id)
        return removed

    def remove_entries_for_account(self, account_id: int) -> int:
        """Remove entries posting to the account from the in-memory ledger.

        Must run inside Ledger.mutate(); the caller's mutation persists it.
        """
        entries = self.ledger.entries
        kept = [entry for entry in entries if not entry.references_account(account_id)]
        removed = len(entries) - len(kept)
        if removed:
            self.ledger.replace_entries(kept)
            logger.debug("Removed %d entries posting to account %d", removed, account_id)
        return removed
