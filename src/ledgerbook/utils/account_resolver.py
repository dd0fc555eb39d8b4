"""Utility for resolving account references to IDs."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account number, ID or name to an account ID.

    Account numbers win over IDs: "1000" is the account numbered 1000 even
    if some other account has ID 1000.

    Args:
        account_service: AccountService instance
        account: Account number, ID (int or string representation of int) or name

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
    """
    # If it's already an integer, use it as ID
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    account = account.strip()

    by_number = account_service.get_account_by_number(account)
    if by_number is not None:
        return by_number.id

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except ValueError:
        account_id = None
    if account_id is not None and account_service.get_account(account_id) is not None:
        return account_id

    # Try to find by name
    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id
    for acc in account_service.list_accounts():
        if acc.name.lower() == account.lower():
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
