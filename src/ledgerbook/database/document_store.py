"""JSON key/value document store.

Mirrors browser local storage: one flat mapping of string keys to JSON
values, kept in a single file (or only in memory when no path is given).
Ledgers other than the default one get their keys prefixed with
``user_<ledger>_``.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

from ledgerbook.database.base import ACCOUNT_COUNTER, ENTRY_COUNTER, Database
from ledgerbook.database.mappers import (
    account_from_document,
    account_to_document,
    journal_entry_from_document,
    journal_entry_to_document,
)
from ledgerbook.domain.entities import Account, JournalEntry
from ledgerbook.domain.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_LEDGER = "default"

ACCOUNTS_KEY = "gl_accounts"
ENTRIES_KEY = "gl_journal_entries"
COUNTER_KEYS = {
    ACCOUNT_COUNTER: "gl_next_account_id",
    ENTRY_COUNTER: "gl_next_entry_id",
}


class DocumentDatabase(Database):
    """Document-store implementation of Database interface."""

    def __init__(self, path: Optional[str] = None, ledger_name: str = DEFAULT_LEDGER):
        """Initialize document database.

        Args:
            path: JSON file holding the document. If None, the document only
                lives in memory for the lifetime of this object.
            ledger_name: Namespace isolating this ledger's keys
        """
        self.path = Path(path) if path is not None else None
        self.ledger_name = ledger_name
        self._document: dict[str, Any] = {}
        self._listeners: list[Callable[[], None]] = []

    def _key(self, key: str) -> str:
        if self.ledger_name == DEFAULT_LEDGER:
            return key
        return f"user_{self.ledger_name}_{key}"

    def connect(self) -> None:
        """Read the document file into memory."""
        if self.path is None or not self.path.exists():
            return
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Could not read {self.path}: expected a JSON object")
        self._document = document

    def disconnect(self) -> None:
        """Nothing to release; writes are flushed on every save."""
        pass

    def initialize_schema(self) -> None:
        """Create the parent directory of the document file."""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create {self.path.parent}: {e}") from e

    # Accounts
    def load_accounts(self) -> list[Account]:
        """Load the chart of accounts."""
        records = self._document.get(self._key(ACCOUNTS_KEY)) or []
        if not isinstance(records, list):
            raise StorageError(f"Stored '{ACCOUNTS_KEY}' is not a list")
        return [account_from_document(record) for record in records]

    def save_accounts(self, accounts: Sequence[Account]) -> None:
        """Replace the stored chart of accounts."""
        self.save_ledger(accounts=accounts)

    # Journal entries
    def load_entries(self) -> list[JournalEntry]:
        """Load journal entries in insertion order."""
        records = self._document.get(self._key(ENTRIES_KEY)) or []
        if not isinstance(records, list):
            raise StorageError(f"Stored '{ENTRIES_KEY}' is not a list")
        return [journal_entry_from_document(record) for record in records]

    def save_entries(self, entries: Sequence[JournalEntry]) -> None:
        """Replace the stored journal."""
        self.save_ledger(entries=entries)

    # Counters
    def load_counter(self, name: str) -> int:
        """Load an id counter. Unknown counters load as 1."""
        value = self._document.get(self._key(COUNTER_KEYS.get(name, name)))
        if value in (None, ""):
            return 1
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Stored counter '{name}' is not an integer: {value!r}") from e

    def save_counter(self, name: str, value: int) -> None:
        """Store an id counter."""
        self.save_ledger(counters={name: value})

    def save_ledger(
        self,
        accounts: Sequence[Account] | None = None,
        entries: Sequence[JournalEntry] | None = None,
        counters: Mapping[str, int] | None = None,
    ) -> None:
        """Apply all changes to a copy of the document and write it once."""
        document = dict(self._document)
        if accounts is not None:
            document[self._key(ACCOUNTS_KEY)] = [account_to_document(acc) for acc in accounts]
        if entries is not None:
            document[self._key(ENTRIES_KEY)] = [
                journal_entry_to_document(entry) for entry in entries
            ]
        for name, value in (counters or {}).items():
            document[self._key(COUNTER_KEYS.get(name, name))] = int(value)

        self._write(document)
        self._document = document
        self._notify()

    def subscribe(self, on_change: Callable[[], None]) -> bool:
        """Register a callback fired after every successful save."""
        self._listeners.append(on_change)
        return True

    def _write(self, document: dict[str, Any]) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Writing %s failed: %s", self.path, e)
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                # The write already succeeded; report the listener and keep going
                logger.exception("Change listener %r failed", listener)
