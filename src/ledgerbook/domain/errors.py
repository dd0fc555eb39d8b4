"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account or journal entry does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateAccountNumberError(ConflictError):
    """Account number is already used by another account."""

    def __init__(self, number: str):
        super().__init__(duplicate_account_number(number))
        self.number = number


class UnbalancedEntryError(ValidationError):
    """Journal entry debits do not equal its credits."""

    def __init__(self, total_debits: Decimal, total_credits: Decimal):
        super().__init__(unbalanced_entry(total_debits, total_credits))
        self.total_debits = total_debits
        self.total_credits = total_credits


class StorageError(Exception):
    """Persistence failure.

    Not a DomainError: callers must be able to tell "the input was wrong"
    apart from "the change could not be saved".
    """

    def __init__(self, message: str, unsaved: bool = False):
        super().__init__(message)
        self.unsaved = unsaved


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def duplicate_account_number(number: str) -> str:
    """Return message for an account number collision."""
    return f"Account number '{number}' already exists"


def unknown_account_type(value: object) -> str:
    """Return message for an unrecognized account type."""
    return (
        f"Unknown account type '{value}'. "
        "Expected one of: Asset, Liability, Equity, Revenue, Expense"
    )


def unbalanced_entry(total_debits: Decimal, total_credits: Decimal) -> str:
    """Return message when entry debits and credits differ."""
    return (
        f"Debits must equal credits (debits {total_debits:.2f}, "
        f"credits {total_credits:.2f})"
    )


def too_few_lines(line_count: int) -> str:
    """Return message when an entry has fewer than two usable lines."""
    return (
        f"At least two transaction lines are required (got {line_count}). "
        "Each line needs an account and a nonzero debit or credit."
    )


def unsaved_change(action: str, error: Exception) -> str:
    """Return message for a mutation that could not be persisted."""
    return (
        f"Could not save {action}: {error}. The change was not applied; "
        "reload the ledger to resynchronize."
    )
