"""Demo restaurant ledger and full reset."""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerbook.domain.entities import Account, AccountType, JournalEntry, TransactionLine
from ledgerbook.domain.ledger import Ledger

logger = logging.getLogger(__name__)

A, L, E, R, X = (
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.EXPENSE,
)

# (id, number, name, type, description)
DEFAULT_ACCOUNTS = [
    (1, "1000", "Cash", A, "Cash register and petty cash"),
    (2, "1050", "Bank Account", A, "Business checking account"),
    (3, "1200", "Accounts Receivable", A, "Catering and corporate orders"),
    (4, "1300", "Food Inventory", A, "Food ingredients and supplies"),
    (5, "1350", "Beverage Inventory", A, "Drinks and beverage supplies"),
    (6, "1400", "Prepaid Rent", A, "Prepaid restaurant rent"),
    (7, "1700", "Kitchen Equipment", A, "Stoves, ovens, refrigerators"),
    (8, "1750", "Furniture & Fixtures", A, "Tables, chairs, decor"),
    (9, "2000", "Accounts Payable", L, "Money owed to food suppliers"),
    (10, "2100", "Accrued Wages", L, "Unpaid wages to staff"),
    (11, "2200", "Sales Tax Payable", L, "Sales tax collected"),
    (12, "2500", "Equipment Loan", L, "Loan for kitchen equipment"),
    (13, "3000", "Owner's Equity", E, "Owner's investment in restaurant"),
    (14, "3500", "Retained Earnings", E, "Accumulated restaurant profits"),
    (15, "4000", "Food Sales", R, "Revenue from food sales"),
    (16, "4100", "Beverage Sales", R, "Revenue from drink sales"),
    (17, "4200", "Catering Revenue", R, "Income from catering services"),
    (18, "5000", "Food Costs", X, "Cost of food ingredients"),
    (19, "5100", "Beverage Costs", X, "Cost of beverages"),
    (20, "6000", "Wages & Salaries", X, "Staff wages and salaries"),
    (21, "6100", "Rent Expense", X, "Monthly restaurant rent"),
    (22, "6200", "Utilities Expense", X, "Electricity, gas, water"),
    (23, "6300", "Marketing & Advertising", X, "Promotional expenses"),
    (24, "6400", "Equipment Maintenance", X, "Kitchen equipment repairs"),
    (25, "6500", "Insurance Expense", X, "Business insurance premiums"),
    (26, "6600", "Supplies Expense", X, "Paper goods, cleaning supplies"),
    (27, "6700", "Delivery Fees", X, "Food delivery service fees"),
]

# (date, reference, description, [(account id, debit, credit), ...])
DEMO_ENTRIES = [
    ("2024-01-01", "INV001", "Owner initial investment to start restaurant",
     [(2, 50000, 0), (13, 0, 50000)]),
    ("2024-01-02", "EQ001", "Purchase kitchen equipment - stoves, ovens, refrigerator",
     [(7, 25000, 0), (2, 0, 15000), (12, 0, 10000)]),
    ("2024-01-03", "FUR001", "Purchase dining tables, chairs, and restaurant decor",
     [(8, 8000, 0), (2, 0, 8000)]),
    ("2024-01-05", "RENT001", "Prepaid rent for restaurant space - 3 months",
     [(6, 9000, 0), (2, 0, 9000)]),
    ("2024-01-10", "FOOD001", "Initial food inventory purchase from Fresh Foods Supplier",
     [(4, 3500, 0), (9, 0, 3500)]),
    ("2024-01-10", "BEV001", "Initial beverage inventory - sodas, juices, coffee",
     [(5, 1200, 0), (9, 0, 1200)]),
    ("2024-01-15", "SALES001", "Daily sales - opening day",
     [(1, 850, 0), (2, 1200, 0), (15, 0, 1640), (16, 0, 280), (11, 0, 130)]),
    ("2024-01-15", "COGS001", "Cost of goods sold - opening day",
     [(18, 520, 0), (19, 85, 0), (4, 0, 520), (5, 0, 85)]),
    ("2024-01-21", "PAY001", "Weekly payroll - kitchen and service staff",
     [(20, 2800, 0), (2, 0, 2800)]),
    ("2024-01-21", "SALES002", "Weekend sales - busy Saturday",
     [(1, 1450, 0), (2, 2100, 0), (15, 0, 2840), (16, 0, 485), (11, 0, 225)]),
    ("2024-01-25", "CAT001", "Catering order for local business meeting",
     [(3, 950, 0), (17, 0, 950)]),
    ("2024-01-30", "PAY002", "Payment to Fresh Foods Supplier",
     [(9, 3500, 0), (2, 0, 3500)]),
    ("2024-01-31", "RENT002", "Monthly rent expense - January",
     [(21, 3000, 0), (6, 0, 3000)]),
    ("2024-01-31", "UTIL001", "Monthly utilities - electricity, gas, water",
     [(22, 450, 0), (2, 0, 450)]),
    ("2024-02-01", "MKT001", "Social media advertising campaign",
     [(23, 300, 0), (2, 0, 300)]),
    ("2024-02-05", "MAINT001", "Repair of commercial oven",
     [(24, 275, 0), (1, 0, 275)]),
    ("2024-02-10", "INS001", "Monthly business insurance premium",
     [(25, 650, 0), (2, 0, 650)]),
    ("2024-02-12", "SUP001", "Purchase cleaning supplies and paper goods",
     [(26, 180, 0), (1, 0, 180)]),
    ("2024-02-14", "DEL001", "Valentine's Day delivery service fees",
     [(27, 95, 0), (1, 0, 95)]),
    ("2024-02-14", "SALES003", "Valentine's Day special menu sales",
     [(1, 1950, 0), (2, 2800, 0), (15, 0, 3800), (16, 0, 650), (11, 0, 300)]),
]


def demo_accounts() -> list[Account]:
    """Build the default restaurant chart of accounts."""
    accounts = [
        Account(id=account_id, number=number, name=name, type=account_type, description=description)
        for account_id, number, name, account_type, description in DEFAULT_ACCOUNTS
    ]
    return sorted(accounts, key=lambda acc: acc.number)


def demo_entries() -> list[JournalEntry]:
    """Build the demo journal, ids numbered from 1 in date order."""
    entries = []
    for entry_id, (entry_date, reference, description, lines) in enumerate(DEMO_ENTRIES, start=1):
        day = date.fromisoformat(entry_date)
        entries.append(
            JournalEntry(
                id=entry_id,
                date=day,
                reference=reference,
                description=description,
                transactions=tuple(
                    TransactionLine(account_id=account_id, debit=Decimal(debit), credit=Decimal(credit))
                    for account_id, debit, credit in lines
                ),
                created_at=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
            )
        )
    return entries


class DemoDataService:
    """Service for loading demo data and resetting a ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize demo data service.

        Args:
            ledger: Loaded ledger
        """
        self.ledger = ledger

    def load_demo_data(self) -> tuple[int, int]:
        """Replace all ledger data with the demo restaurant.

        Returns:
            Tuple of (accounts loaded, entries loaded)

        Raises:
            StorageError: If the change could not be saved
        """
        accounts = demo_accounts()
        entries = demo_entries()
        with self.ledger.mutate("demo data") as ledger:
            ledger.replace_accounts(accounts)
            ledger.replace_entries(entries)
            ledger.set_counters(
                next_account_id=max(acc.id for acc in accounts) + 1,
                next_entry_id=max(entry.id for entry in entries) + 1,
            )
        logger.info("Loaded demo data: %d accounts, %d entries", len(accounts), len(entries))
        return len(accounts), len(entries)

    def clear_all_data(self) -> tuple[int, int]:
        """Remove every account and entry and reset both id counters.

        Returns:
            Tuple of (accounts removed, entries removed); (0, 0) when the
            ledger was already empty, in which case nothing is written

        Raises:
            StorageError: If the change could not be saved
        """
        account_count = len(self.ledger.accounts)
        entry_count = len(self.ledger.entries)
        if account_count == 0 and entry_count == 0:
            return 0, 0

        with self.ledger.mutate("cleared ledger") as ledger:
            ledger.replace_accounts([])
            ledger.replace_entries([])
            ledger.set_counters(next_account_id=1, next_entry_id=1)
        logger.info("Cleared ledger: %d accounts, %d entries", account_count, entry_count)
        return account_count, entry_count
