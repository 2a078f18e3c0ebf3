"""Tests for the Database interface and its atomic blocks."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from switchbooks.domain import entities
from switchbooks.domain.errors import NotFoundError


class TestDatabaseInterface:
    """The store returns domain entities, never ORM rows."""

    def test_source_account_round_trip(self, temp_db):
        account_id = temp_db.create_source_account(
            name="Checking", kind="Asset", current_balance=Decimal("10.50"), is_manual=True
        )

        account = temp_db.get_source_account(account_id)

        assert isinstance(account, entities.SourceAccount)
        assert account.kind is entities.AccountType.ASSET
        assert account.current_balance == Decimal("10.50")
        assert isinstance(account.created_at, datetime)

    def test_chart_account_lookup_by_source(self, temp_db, checking):
        chart_account = temp_db.get_chart_account_by_source(checking.id)

        assert isinstance(chart_account, entities.ChartAccount)
        assert chart_account.type is entities.AccountType.ASSET
        assert temp_db.get_chart_account_by_source(999) is None

    def test_automation_enums(self, temp_db):
        automation_id = temp_db.create_automation(
            name="Adobe",
            automation_type="category",
            condition_type="starts_with",
            condition_value="ADOBE",
            action_value="Software",
            enabled=True,
            auto_add=False,
        )

        automation = temp_db.get_automation(automation_id)
        assert automation.automation_type is entities.AutomationType.CATEGORY
        assert automation.condition_type is entities.ConditionType.STARTS_WITH

    def test_missing_rows_raise_not_found(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(1)
        with pytest.raises(NotFoundError):
            temp_db.update_pending_category(1, None)


class TestAtomic:
    """Writes inside atomic() commit together or not at all."""

    def test_rollback_on_error(self, temp_db, checking):
        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                temp_db.create_pending_transaction(
                    date=date(2024, 1, 1),
                    description="ROLLED BACK",
                    amount=Decimal("-1"),
                    source_account_id=checking.id,
                )
                raise RuntimeError("boom")

        assert temp_db.list_pending_transactions() == []

    def test_nested_blocks_commit_once(self, temp_db, checking):
        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                with temp_db.atomic():
                    temp_db.create_payee("Inner")
                temp_db.create_payee("Outer")
                raise RuntimeError("boom")

        assert temp_db.list_payees() == []

    def test_commit_on_success(self, temp_db):
        with temp_db.atomic():
            temp_db.create_payee("Adobe")
            temp_db.create_payee("Zoom")

        temp_db.disconnect()
        assert [payee.name for payee in temp_db.list_payees()] == ["Adobe", "Zoom"]
