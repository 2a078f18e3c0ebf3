"""Shared pytest fixtures for switchbooks tests."""

import os
import tempfile

import pytest

from switchbooks.database.factories import create_sqlite_database
from switchbooks.domain.automation import AutomationService
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.entities import AccountType
from switchbooks.domain.manual_journal import ManualJournalService
from switchbooks.domain.payee import PayeeService
from switchbooks.domain.pending import PendingTransactionService
from switchbooks.domain.report import ReportService
from switchbooks.domain.source_account import SourceAccountService
from switchbooks.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def source_account_service(temp_db):
    return SourceAccountService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def payee_service(temp_db):
    return PayeeService(temp_db)


@pytest.fixture
def pending_service(temp_db):
    return PendingTransactionService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    return ManualJournalService(temp_db)


@pytest.fixture
def automation_service(temp_db):
    return AutomationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def checking(source_account_service):
    """A bank (Asset) source account named Checking."""
    account_id = source_account_service.create_account(name="Checking", kind=AccountType.ASSET)
    return source_account_service.get_account(account_id)


@pytest.fixture
def credit_card(source_account_service):
    """A credit card (Liability) source account named Visa."""
    account_id = source_account_service.create_account(name="Visa", kind=AccountType.LIABILITY)
    return source_account_service.get_account(account_id)


@pytest.fixture
def checking_chart(source_account_service, checking):
    """The chart row linked to the Checking account."""
    return source_account_service.get_linked_chart_account(checking.id)


@pytest.fixture
def sample_chart(chart_service):
    """Create a small chart of accounts and return IDs by name."""
    ids = {}
    for name, account_type in [
        ("Operating Expenses", AccountType.EXPENSE),
        ("Office Supplies", AccountType.EXPENSE),
        ("Sales", AccountType.REVENUE),
        ("Merchandise", AccountType.COGS),
        ("Owner's Equity", AccountType.EQUITY),
        ("Equipment", AccountType.ASSET),
        ("Loan", AccountType.LIABILITY),
    ]:
        ids[name] = chart_service.create_account(name=name, account_type=account_type)
    ids["Software"] = chart_service.create_account(
        name="Software", account_type=AccountType.EXPENSE, parent_id=ids["Operating Expenses"]
    )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
