"""Mapper functions to convert between domain models and stored forms.

Two stored forms exist: SQLAlchemy rows and JSON documents. Keeping the
conversion here leaves the domain layer unaware of either.
"""

from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ledgerbook.domain import entities as domain
from ledgerbook.domain.errors import StorageError
from ledgerbook.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
    TransactionLine as ORMTransactionLine,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity.

    Raises:
        StorageError: If the stored row holds an unknown account type
    """
    try:
        account_type = domain.AccountType.parse(orm_account.type)
    except ValueError as e:
        raise StorageError(f"Malformed account row {orm_account.account_id}: {e}") from e
    return domain.Account(
        id=orm_account.account_id,
        number=orm_account.number,
        name=orm_account.name,
        type=account_type,
        description=orm_account.description or "",
    )


def account_to_orm(account: domain.Account, ledger: str, position: int) -> ORMAccount:
    """Convert domain Account entity to a new SQLAlchemy Account row."""
    return ORMAccount(
        ledger=ledger,
        account_id=account.id,
        position=position,
        number=account.number,
        name=account.name,
        type=account.type.value,
        description=account.description,
    )


def transaction_line_to_domain(orm_line: ORMTransactionLine) -> domain.TransactionLine:
    """Convert SQLAlchemy TransactionLine model to domain TransactionLine."""
    return domain.TransactionLine(
        account_id=orm_line.account_id,
        debit=Decimal(orm_line.debit),
        credit=Decimal(orm_line.credit),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.entry_id,
        date=orm_entry.date,
        reference=orm_entry.reference or "",
        description=orm_entry.description,
        transactions=tuple(transaction_line_to_domain(line) for line in orm_entry.lines),
        created_at=_as_utc(orm_entry.created_at),
        updated_at=_as_utc(orm_entry.updated_at),
    )


def journal_entry_to_orm(entry: domain.JournalEntry, ledger: str, position: int) -> ORMJournalEntry:
    """Convert domain JournalEntry entity to a new SQLAlchemy row with its lines."""
    return ORMJournalEntry(
        ledger=ledger,
        entry_id=entry.id,
        position=position,
        date=entry.date,
        reference=entry.reference,
        description=entry.description,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        lines=[
            ORMTransactionLine(
                position=index,
                account_id=line.account_id,
                debit=line.debit,
                credit=line.credit,
            )
            for index, line in enumerate(entry.transactions)
        ],
    )


# JSON documents use camelCase field names (accountId, createdAt) as in localStorage dumps.


def account_to_document(account: domain.Account) -> dict[str, Any]:
    """Convert domain Account entity to a JSON-ready dict."""
    return {
        "id": account.id,
        "number": account.number,
        "name": account.name,
        "type": account.type.value,
        "description": account.description,
    }


def account_from_document(record: Mapping[str, Any]) -> domain.Account:
    """Convert a stored account dict to a domain Account entity.

    Raises:
        StorageError: If the record is malformed
    """
    try:
        return domain.Account(
            id=int(record["id"]),
            number=str(record["number"]),
            name=str(record["name"]),
            type=domain.AccountType.parse(record["type"]),
            description=str(record.get("description") or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise StorageError(f"Malformed account record {dict(record)!r}: {e}") from e


def journal_entry_to_document(entry: domain.JournalEntry) -> dict[str, Any]:
    """Convert domain JournalEntry entity to a JSON-ready dict."""
    document: dict[str, Any] = {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "reference": entry.reference,
        "description": entry.description,
        "transactions": [
            {
                "accountId": line.account_id,
                "debit": str(line.debit),
                "credit": str(line.credit),
            }
            for line in entry.transactions
        ],
        "createdAt": entry.created_at.isoformat(),
    }
    if entry.updated_at is not None:
        document["updatedAt"] = entry.updated_at.isoformat()
    return document


def journal_entry_from_document(record: Mapping[str, Any]) -> domain.JournalEntry:
    """Convert a stored journal entry dict to a domain JournalEntry entity.

    Raises:
        StorageError: If the record is malformed
    """
    try:
        updated_at = record.get("updatedAt")
        return domain.JournalEntry(
            id=int(record["id"]),
            date=date.fromisoformat(str(record["date"])[:10]),
            reference=str(record.get("reference") or ""),
            description=str(record["description"]),
            transactions=tuple(
                domain.TransactionLine(
                    account_id=int(line["accountId"]),
                    debit=Decimal(str(line.get("debit") or 0)),
                    credit=Decimal(str(line.get("credit") or 0)),
                )
                for line in record["transactions"]
            ),
            created_at=_as_utc(datetime.fromisoformat(_strip_zulu(record["createdAt"]))),
            updated_at=_as_utc(datetime.fromisoformat(_strip_zulu(updated_at))) if updated_at else None,
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise StorageError(f"Malformed journal entry record: {e}") from e


def _strip_zulu(timestamp: str) -> str:
    """Accept JavaScript ISO timestamps such as 2024-01-01T09:00:00.000Z."""
    if timestamp.endswith("Z"):
        return timestamp[:-1] + "+00:00"
    return timestamp
