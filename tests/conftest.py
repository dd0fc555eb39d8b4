"""Shared pytest fixtures for ledgerbook tests."""

import logging
import tempfile
import os
import pytest

from ledgerbook.database.document_store import DocumentDatabase
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.journal import JournalService
from ledgerbook.domain.ledger import Ledger
from ledgerbook.domain.reports import ReportService


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the CLI's logging setup so later tests log through pytest again."""
    yield
    for name in ("ledgerbook", "sqlalchemy.engine"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, ledger_name="default")
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory document database."""
    db = DocumentDatabase()
    db.connect()
    db.initialize_schema()
    return db


@pytest.fixture
def ledger(temp_db):
    """Create an empty ledger on the temporary database."""
    return Ledger(temp_db).load()


@pytest.fixture
def account_service(ledger):
    """Create an AccountService on the ledger."""
    return AccountService(ledger)


@pytest.fixture
def journal_service(ledger):
    """Create a JournalService on the ledger."""
    return JournalService(ledger)


@pytest.fixture
def report_service(ledger):
    """Create a ReportService on the ledger."""
    return ReportService(ledger)


@pytest.fixture
def sample_accounts(account_service):
    """Create one account of each type and return them keyed by name."""
    specs = [
        ("1000", "Cash", "Asset"),
        ("2000", "Accounts Payable", "Liability"),
        ("3000", "Owner's Equity", "Equity"),
        ("4000", "Sales", "Revenue"),
        ("5000", "Rent Expense", "Expense"),
    ]
    return {
        name: account_service.create_account(number=number, name=name, account_type=account_type)
        for number, name, account_type in specs
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
