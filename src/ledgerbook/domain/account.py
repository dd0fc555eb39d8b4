"""Account domain service (chart of accounts)."""

import logging
from dataclasses import replace
from typing import Optional

from ledgerbook.domain.entities import ACCOUNT_TYPE_ORDER, Account, AccountType
from ledgerbook.domain.errors import (
    DuplicateAccountNumberError,
    NotFoundError,
    ValidationError,
    account_not_found,
)
from ledgerbook.domain.journal import JournalService
from ledgerbook.domain.ledger import Ledger

logger = logging.getLogger(__name__)

FIRST_ACCOUNT_NUMBER = 1000
ACCOUNT_NUMBER_STEP = 100


def _sorted_by_number(accounts: list[Account]) -> list[Account]:
    return sorted(accounts, key=lambda acc: acc.number)


def _required(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Account {field_name} is required")
    return str(value).strip()


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, ledger: Ledger):
        """Initialize account service.

        Args:
            ledger: Loaded ledger
        """
        self.ledger = ledger

    def create_account(
        self,
        number: str,
        name: str,
        account_type: AccountType | str,
        description: Optional[str] = None,
    ) -> Account:
        """Create a new account.

        Args:
            number: Account number, unique in the ledger
            name: Account name
            account_type: AccountType or its name (e.g. "Asset")
            description: Optional description

        Returns:
            The created account

        Raises:
            ValidationError: If number, name or type is missing or invalid
            DuplicateAccountNumberError: If the number is already used
            StorageError: If the change could not be saved
        """
        number = _required(number, "number")
        name = _required(name, "name")
        parsed_type = AccountType.parse(account_type)

        if self.get_account_by_number(number) is not None:
            raise DuplicateAccountNumberError(number)

        with self.ledger.mutate(f"account {number}") as ledger:
            account = Account(
                id=ledger.allocate_account_id(),
                number=number,
                name=name,
                type=parsed_type,
                description=(description or "").strip(),
            )
            ledger.replace_accounts(_sorted_by_number([*ledger.accounts, account]))

        logger.info("Created account %s %s (%s)", account.number, account.name, account.type)
        return account

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        for account in self.ledger.accounts:
            if account.id == account_id:
                return account
        return None

    def get_account_by_number(self, number: str) -> Optional[Account]:
        """Get account by its account number."""
        for account in self.ledger.accounts:
            if account.number == number:
                return account
        return None

    def list_accounts(self) -> list[Account]:
        """List all accounts sorted by number."""
        return list(self.ledger.accounts)

    def list_by_type(self) -> list[tuple[AccountType, list[Account]]]:
        """Group accounts by type.

        Returns:
            One (type, accounts) pair per account type in the order Asset,
            Liability, Equity, Revenue, Expense. Groups may be empty.
        """
        accounts = self.ledger.accounts
        return [
            (account_type, [acc for acc in accounts if acc.type == account_type])
            for account_type in ACCOUNT_TYPE_ORDER
        ]

    def update_account(
        self,
        account_id: int,
        number: Optional[str] = None,
        name: Optional[str] = None,
        account_type: AccountType | str | None = None,
        description: Optional[str] = None,
    ) -> Account:
        """Update an account. Fields left as None are unchanged.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If a new number or name is blank, or the type is unknown
            DuplicateAccountNumberError: If the new number belongs to another account
            StorageError: If the change could not be saved
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        changes: dict = {}
        if number is not None:
            changes["number"] = _required(number, "number")
            other = self.get_account_by_number(changes["number"])
            if other is not None and other.id != account_id:
                raise DuplicateAccountNumberError(changes["number"])
        if name is not None:
            changes["name"] = _required(name, "name")
        if account_type is not None:
            changes["type"] = AccountType.parse(account_type)
        if description is not None:
            changes["description"] = description.strip()

        updated = replace(account, **changes)
        with self.ledger.mutate(f"account {updated.number}") as ledger:
            accounts = [updated if acc.id == account_id else acc for acc in ledger.accounts]
            ledger.replace_accounts(_sorted_by_number(accounts))

        logger.info("Updated account %d: %s", account_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def delete_account(self, account_id: int) -> int:
        """Delete an account and every journal entry that posts to it.

        Args:
            account_id: Account ID to delete

        Returns:
            Number of journal entries removed with the account

        Raises:
            NotFoundError: If the account does not exist
            StorageError: If the change could not be saved; neither the account
                nor its entries are removed in memory
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        with self.ledger.mutate(f"deletion of account {account.number}") as ledger:
            ledger.replace_accounts([acc for acc in ledger.accounts if acc.id != account_id])
            removed = JournalService(ledger).remove_entries_for_account(account_id)

        logger.info(
            "Deleted account %s %s and %d journal entr%s",
            account.number,
            account.name,
            removed,
            "y" if removed == 1 else "ies",
        )
        return removed

    def next_account_number(self) -> str:
        """Suggest the next free account number.

        Scans from 1000 in steps of 100 and returns the first number not
        used by an existing (numeric) account number.
        """
        used = set()
        for account in self.ledger.accounts:
            try:
                used.add(int(account.number))
            except ValueError:
                continue

        candidate = FIRST_ACCOUNT_NUMBER
        while candidate in used:
            candidate += ACCOUNT_NUMBER_STEP
        return str(candidate)
