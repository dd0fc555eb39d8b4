"""In-memory ledger session backed by a persistence adapter.

A Ledger holds one user's chart of accounts, journal and id counters. Domain
services read its snapshots and change it only inside ``mutate()``, which
persists the changed collections and rolls the in-memory state back if the
save fails.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from ledgerbook.database.base import ACCOUNT_COUNTER, ENTRY_COUNTER, Database
from ledgerbook.domain.entities import Account, JournalEntry
from ledgerbook.domain.errors import StorageError, unsaved_change

logger = logging.getLogger(__name__)


class Ledger:
    """One loaded ledger document."""

    def __init__(self, db: Database):
        """Initialize an empty ledger bound to a database.

        Args:
            db: Persistence adapter. Call load() to read existing data.
        """
        self.db = db
        self._accounts: list[Account] = []
        self._entries: list[JournalEntry] = []
        self.next_account_id = 1
        self.next_entry_id = 1
        self._dirty_accounts = False
        self._dirty_entries = False

    def load(self) -> "Ledger":
        """Read accounts, entries and counters from the database.

        Counters that lag behind the stored ids are raised past them so new
        ids never collide with existing ones.
        """
        accounts = self.db.load_accounts()
        entries = self.db.load_entries()
        next_account_id = self.db.load_counter(ACCOUNT_COUNTER)
        next_entry_id = self.db.load_counter(ENTRY_COUNTER)

        self._accounts = list(accounts)
        self._entries = list(entries)
        self.next_account_id = max([next_account_id, *(acc.id + 1 for acc in accounts)])
        self.next_entry_id = max([next_entry_id, *(entry.id + 1 for entry in entries)])
        logger.debug(
            "Loaded ledger with %d accounts and %d entries", len(accounts), len(entries)
        )
        return self

    def reload(self) -> None:
        """Discard in-memory state and read everything again."""
        self.load()

    def subscribe(self, on_change: Callable[["Ledger"], None] | None = None) -> bool:
        """Reload automatically when the backend reports a change.

        Args:
            on_change: Optional callback invoked with this ledger after reloading

        Returns:
            False if the backend cannot push changes
        """

        def _reload() -> None:
            self.reload()
            if on_change is not None:
                on_change(self)

        return self.db.subscribe(_reload)

    @property
    def accounts(self) -> tuple[Account, ...]:
        """Chart of accounts in registry (number) order."""
        return tuple(self._accounts)

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """Journal entries in insertion order."""
        return tuple(self._entries)

    # Mutation helpers, valid only inside mutate()
    def replace_accounts(self, accounts: list[Account]) -> None:
        self._accounts = list(accounts)
        self._dirty_accounts = True

    def replace_entries(self, entries: list[JournalEntry]) -> None:
        self._entries = list(entries)
        self._dirty_entries = True

    def allocate_account_id(self) -> int:
        account_id = self.next_account_id
        self.next_account_id += 1
        self._dirty_accounts = True
        return account_id

    def allocate_entry_id(self) -> int:
        entry_id = self.next_entry_id
        self.next_entry_id += 1
        self._dirty_entries = True
        return entry_id

    def set_counters(self, next_account_id: int, next_entry_id: int) -> None:
        self.next_account_id = next_account_id
        self.next_entry_id = next_entry_id
        self._dirty_accounts = True
        self._dirty_entries = True

    @contextmanager
    def mutate(self, action: str) -> Iterator["Ledger"]:
        """Apply a change to the in-memory ledger and persist it.

        The block mutates the ledger through the helper methods above. On exit
        every changed collection is saved together with both counters. If the
        block raises, or the save fails, the in-memory state is restored.

        Args:
            action: Short description used in log and error messages

        Raises:
            StorageError: If the change could not be saved (unsaved=True)
        """
        snapshot = (
            list(self._accounts),
            list(self._entries),
            self.next_account_id,
            self.next_entry_id,
        )
        self._dirty_accounts = False
        self._dirty_entries = False
        try:
            yield self
            if self._dirty_accounts or self._dirty_entries:
                self.db.save_ledger(
                    accounts=self._accounts if self._dirty_accounts else None,
                    entries=self._entries if self._dirty_entries else None,
                    counters={
                        ACCOUNT_COUNTER: self.next_account_id,
                        ENTRY_COUNTER: self.next_entry_id,
                    },
                )
        except StorageError as e:
            self._restore(snapshot)
            logger.error("Could not save %s: %s", action, e)
            raise StorageError(unsaved_change(action, e), unsaved=True) from e
        except Exception:
            self._restore(snapshot)
            raise
        finally:
            self._dirty_accounts = False
            self._dirty_entries = False

    def _restore(self, snapshot: tuple[list[Account], list[JournalEntry], int, int]) -> None:
        self._accounts, self._entries, self.next_account_id, self.next_entry_id = snapshot
