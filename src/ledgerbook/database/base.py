"""Abstract persistence interface.

A ledger is stored as whole collections: the chart of accounts, the journal
and two id counters. Backends load and replace them wholesale; there is no
per-row update API.
"""

from abc import ABC, abstractmethod
from typing import Callable, Mapping, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import Account, JournalEntry

ACCOUNT_COUNTER = "next_account_id"
ENTRY_COUNTER = "next_entry_id"
COUNTER_NAMES = (ACCOUNT_COUNTER, ENTRY_COUNTER)


class Database(ABC):
    """Abstract persistence adapter for one ledger.

    Implementations raise StorageError for every I/O failure.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backing store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage (create tables or an empty document)."""
        pass

    # Accounts
    @abstractmethod
    def load_accounts(self) -> list[Account]:
        """Load the chart of accounts."""
        pass

    @abstractmethod
    def save_accounts(self, accounts: Sequence[Account]) -> None:
        """Replace the stored chart of accounts."""
        pass

    # Journal entries
    @abstractmethod
    def load_entries(self) -> list[JournalEntry]:
        """Load journal entries in insertion order."""
        pass

    @abstractmethod
    def save_entries(self, entries: Sequence[JournalEntry]) -> None:
        """Replace the stored journal."""
        pass

    # Counters
    @abstractmethod
    def load_counter(self, name: str) -> int:
        """Load an id counter. Unknown counters load as 1."""
        pass

    @abstractmethod
    def save_counter(self, name: str, value: int) -> None:
        """Store an id counter."""
        pass

    def save_ledger(
        self,
        accounts: Sequence[Account] | None = None,
        entries: Sequence[JournalEntry] | None = None,
        counters: Mapping[str, int] | None = None,
    ) -> None:
        """Save any combination of collections and counters.

        The default implementation saves each part in turn. Backends that can
        commit several parts atomically override this.
        """
        if accounts is not None:
            self.save_accounts(accounts)
        if entries is not None:
            self.save_entries(entries)
        for name, value in (counters or {}).items():
            self.save_counter(name, value)

    def subscribe(self, on_change: Callable[[], None]) -> bool:
        """Register a callback fired when stored data changes.

        Returns False when the backend cannot push changes.
        """
        return False
