"""Tests for database mappers."""

from datetime import UTC, date, datetime
from decimal import Decimal

from switchbooks.database.mappers import (
    automation_to_domain,
    chart_account_to_domain,
    source_account_to_domain,
    transaction_to_domain,
)
from switchbooks.database.models import (
    Automation as ORMAutomation,
    ChartAccount as ORMChartAccount,
    SourceAccount as ORMSourceAccount,
    Transaction as ORMTransaction,
)
from switchbooks.domain.entities import (
    AccountType,
    Automation,
    AutomationType,
    ChartAccount,
    ConditionType,
    SourceAccount,
    Transaction,
)


class TestSourceAccountMapper:
    def test_source_account_to_domain(self):
        orm_account = ORMSourceAccount(
            id=1,
            name="Visa",
            kind="Liability",
            current_balance=Decimal("-120.55"),
            is_manual=False,
            created_at=datetime.now(UTC),
        )
        account = source_account_to_domain(orm_account)

        assert isinstance(account, SourceAccount)
        assert account.kind is AccountType.LIABILITY
        assert account.current_balance == Decimal("-120.55")
        assert account.is_manual is False


class TestChartAccountMapper:
    def test_chart_account_to_domain(self):
        orm_account = ORMChartAccount(
            id=5,
            name="Software",
            type="Expense",
            subtype="SaaS",
            parent_id=2,
            linked_source_account_id=None,
            created_at=datetime.now(UTC),
        )
        account = chart_account_to_domain(orm_account)

        assert isinstance(account, ChartAccount)
        assert account.type is AccountType.EXPENSE
        assert account.subtype == "SaaS"
        assert account.parent_id == 2


class TestTransactionMapper:
    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id=9,
            date=date(2024, 1, 15),
            description="STAPLES",
            amount=Decimal("-50.00"),
            source_account_id=1,
            debit_account_id=4,
            credit_account_id=1,
            payee_id=None,
            posted_at=datetime.now(UTC),
        )
        transaction = transaction_to_domain(orm_transaction)

        assert isinstance(transaction, Transaction)
        assert transaction.amount == Decimal("-50.00")
        assert (transaction.debit_account_id, transaction.credit_account_id) == (4, 1)


class TestAutomationMapper:
    def test_automation_to_domain(self):
        orm_automation = ORMAutomation(
            id=3,
            name="Zoom",
            automation_type="category",
            condition_type="ends_with",
            condition_value=".US",
            action_value="Software",
            enabled=True,
            auto_add=True,
            created_at=datetime.now(UTC),
        )
        automation = automation_to_domain(orm_automation)

        assert isinstance(automation, Automation)
        assert automation.automation_type is AutomationType.CATEGORY
        assert automation.condition_type is ConditionType.ENDS_WITH
        assert automation.auto_add is True
