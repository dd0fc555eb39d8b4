"""SQLAlchemy models for the ledgerbook database.

Every row carries a ledger name so several isolated ledgers (one per user)
can share one database file.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    ledger = Column(String, nullable=False, index=True)
    account_id = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    number = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint("ledger", "account_id", name="uq_ledger_account_id"),
        UniqueConstraint("ledger", "number", name="uq_ledger_account_number"),
    )


class JournalEntry(Base):
    """Journal entry model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    ledger = Column(String, nullable=False, index=True)
    entry_id = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    reference = Column(String, nullable=False, default="")
    description = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (UniqueConstraint("ledger", "entry_id", name="uq_ledger_entry_id"),)

    # Relationships
    lines = relationship(
        "TransactionLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="TransactionLine.position",
    )


class TransactionLine(Base):
    """Debit/credit line of a journal entry.

    account_id is the ledger-level account id, not a foreign key: lines may
    outlive a damaged chart of accounts and the balance fold tolerates that.
    """

    __tablename__ = "transaction_lines"

    id = Column(Integer, primary_key=True)
    entry_row_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    account_id = Column(Integer, nullable=False)
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")


class Counter(Base):
    """Named id counter."""

    __tablename__ = "counters"

    id = Column(Integer, primary_key=True)
    ledger = Column(String, nullable=False)
    name = Column(String, nullable=False)
    value = Column(Integer, nullable=False, default=1)

    __table_args__ = (UniqueConstraint("ledger", "name", name="uq_ledger_counter"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
