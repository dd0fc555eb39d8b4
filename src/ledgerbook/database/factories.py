"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.database.document_store import DocumentDatabase
from ledgerbook.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

BACKENDS = ("sqlite", "json")
DEFAULT_LEDGER = "default"


def _default_path(filename: str) -> str:
    """Return ~/.ledgerbook/<filename>, creating the directory."""
    db_dir = Path.home() / ".ledgerbook"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / filename)


def _ledger_name(ledger_name: Optional[str]) -> str:
    if ledger_name is None:
        ledger_name = os.environ.get("LEDGERBOOK_LEDGER")
    return ledger_name or DEFAULT_LEDGER


def create_sqlite_database(
    database_path: Optional[str] = None, ledger_name: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERBOOK_DB_PATH
            environment variable, then defaults to ~/.ledgerbook/ledgerbook.db
        ledger_name: Ledger namespace. If None, checks LEDGERBOOK_LEDGER, then
            defaults to "default"

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("LEDGERBOOK_DB_PATH")

    if database_path is None:
        database_path = _default_path("ledgerbook.db")

    database_url = f"sqlite:///{database_path}"
    logger.debug("Opening SQLite ledger at %s", database_path)
    return SQLAlchemyDatabase(database_url, ledger_name=_ledger_name(ledger_name))


def create_document_database(
    path: Optional[str] = None, ledger_name: Optional[str] = None
) -> DocumentDatabase:
    """Create a JSON document database instance.

    Args:
        path: Path to the JSON document. If None, checks LEDGERBOOK_DB_PATH
            environment variable, then defaults to ~/.ledgerbook/ledgerbook.json
        ledger_name: Ledger namespace, resolved like create_sqlite_database

    Returns:
        DocumentDatabase instance backed by the file
    """
    if path is None:
        path = os.environ.get("LEDGERBOOK_DB_PATH")

    if path is None:
        path = _default_path("ledgerbook.json")

    logger.debug("Opening JSON ledger at %s", path)
    return DocumentDatabase(path, ledger_name=_ledger_name(ledger_name))


def create_database(
    backend: Optional[str] = None,
    path: Optional[str] = None,
    ledger_name: Optional[str] = None,
) -> Database:
    """Create a database for the named backend.

    Args:
        backend: "sqlite" or "json". If None, checks LEDGERBOOK_BACKEND, then
            defaults to "sqlite"
        path: Storage path passed to the backend factory
        ledger_name: Ledger namespace

    Raises:
        ValueError: If the backend is unknown
    """
    if backend is None:
        backend = os.environ.get("LEDGERBOOK_BACKEND") or "sqlite"

    backend = backend.lower()
    if backend == "sqlite":
        return create_sqlite_database(path, ledger_name=ledger_name)
    if backend == "json":
        return create_document_database(path, ledger_name=ledger_name)
    raise ValueError(f"Unknown backend '{backend}'. Expected one of: {', '.join(BACKENDS)}")
