"""Balance engine.

Pure functions folding journal entries into per-account balances. Every
report derives from compute_balances; nothing caches its result.
"""

import logging
from decimal import Decimal
from typing import Iterable, Mapping

from ledgerbook.domain.entities import ZERO, Account, JournalEntry

logger = logging.getLogger(__name__)


def compute_balances(
    accounts: Iterable[Account], entries: Iterable[JournalEntry]
) -> dict[int, Decimal]:
    """Compute debit-minus-credit balances for every account.

    Every known account starts at zero. Lines posting to an account id that
    is not in ``accounts`` still get a balance, so a dangling reference does
    not break the fold.

    Args:
        accounts: Chart of accounts
        entries: Journal entries, in any order

    Returns:
        Mapping of account id to signed balance
    """
    balances: dict[int, Decimal] = {account.id: ZERO for account in accounts}
    known = set(balances)

    for entry in entries:
        for line in entry.transactions:
            if line.account_id not in balances:
                balances[line.account_id] = ZERO
            balances[line.account_id] += line.debit - line.credit

    dangling = set(balances) - known
    if dangling:
        logger.warning(
            "Journal lines reference unknown account ids: %s",
            ", ".join(str(account_id) for account_id in sorted(dangling)),
        )
    return balances


def get_account_balance(
    accounts: Iterable[Account], entries: Iterable[JournalEntry], account_id: int
) -> Decimal:
    """Return the balance of one account, zero if it is unknown."""
    return compute_balances(accounts, entries).get(account_id, ZERO)


def total_balance(balances: Mapping[int, Decimal]) -> Decimal:
    """Sum all balances. Zero for a ledger of balanced entries."""
    return sum(balances.values(), ZERO)
