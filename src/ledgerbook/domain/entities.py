"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the storage backend. Backends convert to and from them at the persistence
boundary (see ledgerbook.database.mappers).
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerbook.domain.errors import ValidationError, unknown_account_type

BALANCE_TOLERANCE = Decimal("0.01")
ZERO = Decimal("0")


class AccountType(str, Enum):
    """The five account classes of the chart of accounts."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "AccountType | str | None") -> "AccountType":
        """Parse an account type from an enum member or a case-insensitive name.

        Raises:
            ValidationError: If the value is empty or not a known type
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            raise ValidationError("Account type is required")
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        raise ValidationError(unknown_account_type(value))

    def __str__(self) -> str:
        return self.value


ACCOUNT_TYPE_ORDER: tuple[AccountType, ...] = (
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.EXPENSE,
)


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    number: str
    name: str
    type: AccountType
    description: str = ""


@dataclass(frozen=True)
class TransactionLine:
    """One debit or credit line of a journal entry."""

    account_id: int
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def amount(self) -> Decimal:
        """Signed contribution to the account balance (debit minus credit)."""
        return self.debit - self.credit


@dataclass(frozen=True)
class JournalEntry:
    """Dated, described group of transaction lines recorded together."""

    id: int
    date: date
    description: str
    transactions: tuple[TransactionLine, ...]
    created_at: datetime
    reference: str = ""
    updated_at: Optional[datetime] = None

    @property
    def total_debits(self) -> Decimal:
        return sum((line.debit for line in self.transactions), ZERO)

    @property
    def total_credits(self) -> Decimal:
        return sum((line.credit for line in self.transactions), ZERO)

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debits - self.total_credits) < BALANCE_TOLERANCE

    def references_account(self, account_id: int) -> bool:
        """Return True if any line of this entry posts to the account."""
        return any(line.account_id == account_id for line in self.transactions)


@dataclass(frozen=True)
class TrialBalanceRow:
    """Trial balance line for one account."""

    account: Account
    debit_balance: Decimal
    credit_balance: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance report."""

    rows: tuple[TrialBalanceRow, ...] = ()
    total_debits: Decimal = ZERO
    total_credits: Decimal = ZERO

    @property
    def difference(self) -> Decimal:
        return self.total_debits - self.total_credits

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) < BALANCE_TOLERANCE


@dataclass(frozen=True)
class ReportLine:
    """Named amount on a financial statement.

    account is None for synthetic lines such as "Net Income".
    """

    name: str
    amount: Decimal
    account: Optional[Account] = None


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet report: Assets = Liabilities + Equity."""

    assets: tuple[ReportLine, ...] = ()
    liabilities: tuple[ReportLine, ...] = ()
    equity: tuple[ReportLine, ...] = ()
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    net_income: Decimal = ZERO

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_assets - self.total_liabilities_and_equity) < BALANCE_TOLERANCE


@dataclass(frozen=True)
class IncomeStatement:
    """Income statement report: Revenue - Expenses = Net Income."""

    revenue: tuple[ReportLine, ...] = ()
    expenses: tuple[ReportLine, ...] = ()
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO

    @property
    def net_income(self) -> Decimal:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True)
class LedgerAlert:
    """Dashboard alert. level is "danger" or "warning"."""

    level: str
    message: str


@dataclass(frozen=True)
class DashboardSummary:
    """Headline totals and health alerts for the dashboard."""

    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    alerts: tuple[LedgerAlert, ...] = field(default_factory=tuple)

    @property
    def net_income(self) -> Decimal:
        return self.total_revenue - self.total_expenses
