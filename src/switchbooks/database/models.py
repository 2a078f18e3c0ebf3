"""SQLAlchemy models for switchbooks database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(19, 2)


class SourceAccount(Base):
    """Bank, credit-card or manual account model."""

    __tablename__ = "source_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    kind = Column(String, nullable=False)
    current_balance = Column(MONEY, default=0, nullable=False)
    is_manual = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    pending_transactions = relationship("PendingTransaction", back_populates="source_account")
    transactions = relationship("Transaction", back_populates="source_account")


class ChartAccount(Base):
    """Chart-of-accounts model with a two-level hierarchy."""

    __tablename__ = "chart_of_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    subtype = Column(String, nullable=True)
    parent_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=True)
    linked_source_account_id = Column(
        Integer, ForeignKey("source_accounts.id"), nullable=True, unique=True
    )
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("ChartAccount", remote_side=[id], backref="children")


class Payee(Base):
    __tablename__ = "payees"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class PendingTransaction(Base):
    """Imported transaction that has not been posted yet."""

    __tablename__ = "pending_transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    amount = Column(MONEY, nullable=False)
    source_account_id = Column(Integer, ForeignKey("source_accounts.id"), nullable=False)
    selected_category_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=True)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    source_account = relationship("SourceAccount", back_populates="pending_transactions")
    split_lines = relationship(
        "SplitLine", back_populates="pending_transaction", cascade="all, delete-orphan"
    )


class SplitLine(Base):
    __tablename__ = "pending_transaction_splits"

    id = Column(Integer, primary_key=True)
    pending_transaction_id = Column(
        Integer, ForeignKey("pending_transactions.id"), nullable=False
    )
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    chart_account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    debit = Column(MONEY, default=0, nullable=False)
    credit = Column(MONEY, default=0, nullable=False)

    # Relationships
    pending_transaction = relationship("PendingTransaction", back_populates="split_lines")


class Transaction(Base):
    """Posted transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    amount = Column(MONEY, nullable=False)
    source_account_id = Column(Integer, ForeignKey("source_accounts.id"), nullable=False)
    debit_account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    credit_account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    posted_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    source_account = relationship("SourceAccount", back_populates="transactions")
    ledger_lines = relationship(
        "LedgerLine", back_populates="transaction", cascade="all, delete-orphan"
    )


class LedgerLine(Base):
    """Debit or credit line of a posted transaction."""

    __tablename__ = "ledger_lines"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    chart_account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    debit = Column(MONEY, default=0, nullable=False)
    credit = Column(MONEY, default=0, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="ledger_lines")


class JournalLine(Base):
    """Manual journal entry line."""

    __tablename__ = "manual_journal_lines"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    category_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    debit = Column(MONEY, default=0, nullable=False)
    credit = Column(MONEY, default=0, nullable=False)
    reference_number = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Automation(Base):
    __tablename__ = "automations"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    automation_type = Column(String, nullable=False)
    condition_type = Column(String, nullable=False)
    condition_value = Column(String, nullable=False)
    action_value = Column(String, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)
    auto_add = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
