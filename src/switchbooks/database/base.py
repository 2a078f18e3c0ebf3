"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from switchbooks.domain.entities import (
    Automation,
    ChartAccount,
    JournalLine,
    JournalLineInput,
    LedgerLine,
    Payee,
    PendingTransaction,
    SourceAccount,
    SplitLine,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for switchbooks.

    Every write commits on its own unless it runs inside ``atomic()``, in
    which case the whole block commits or rolls back together.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into a single all-or-nothing unit."""
        pass

    # Source account operations
    @abstractmethod
    def create_source_account(
        self, name: str, kind: str, current_balance: Decimal, is_manual: bool
    ) -> int:
        """Create a source account. Returns source account ID."""
        pass

    @abstractmethod
    def get_source_account(self, account_id: int) -> Optional[SourceAccount]:
        pass

    @abstractmethod
    def get_source_account_by_name(self, name: str) -> Optional[SourceAccount]:
        pass

    @abstractmethod
    def list_source_accounts(self) -> list[SourceAccount]:
        pass

    @abstractmethod
    def update_source_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        current_balance: Optional[Decimal] = None,
    ) -> None:
        """Update source account name and/or bank-reported balance."""
        pass

    @abstractmethod
    def delete_source_account(self, account_id: int) -> None:
        pass

    @abstractmethod
    def get_source_account_usage(self, account_id: int) -> dict[str, int]:
        """Count pending and posted transactions referencing a source account."""
        pass

    # Chart-of-accounts operations
    @abstractmethod
    def create_chart_account(
        self,
        name: str,
        account_type: str,
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
        linked_source_account_id: Optional[int] = None,
    ) -> int:
        """Create a chart-of-accounts row. Returns chart account ID."""
        pass

    @abstractmethod
    def get_chart_account(self, account_id: int) -> Optional[ChartAccount]:
        pass

    @abstractmethod
    def get_chart_account_by_name(self, name: str) -> Optional[ChartAccount]:
        """Get chart account by exact name (first by ID when names repeat)."""
        pass

    @abstractmethod
    def get_chart_account_by_source(self, source_account_id: int) -> Optional[ChartAccount]:
        """Get the chart row linked to a source account."""
        pass

    @abstractmethod
    def list_chart_accounts(self) -> list[ChartAccount]:
        pass

    @abstractmethod
    def update_chart_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[str] = None,
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
        update_parent: bool = False,
    ) -> None:
        """Update chart account fields.

        Args:
            update_parent: If True, set parent_id even when it is None (to make a root)
        """
        pass

    @abstractmethod
    def delete_chart_account(self, account_id: int) -> None:
        pass

    @abstractmethod
    def get_chart_account_usage(self, account_id: int) -> dict[str, int]:
        """Count rows that depend on a chart account, keyed by a singular label."""
        pass

    @abstractmethod
    def get_chart_account_totals(self, account_id: int) -> tuple[Decimal, Decimal]:
        """Sum debits and credits posted to a chart account (ledger and journal)."""
        pass

    @abstractmethod
    def get_account_activity(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict[int, tuple[Decimal, Decimal]]:
        """Sum debits and credits per chart account over ledger and journal lines.

        Args:
            start_date: Only lines dated on or after this date
            end_date: Only lines dated on or before this date

        Returns:
            Mapping of chart account ID to (total debit, total credit);
            accounts without lines in the range are absent
        """
        pass

    # Payee operations
    @abstractmethod
    def create_payee(self, name: str) -> int:
        pass

    @abstractmethod
    def get_payee(self, payee_id: int) -> Optional[Payee]:
        pass

    @abstractmethod
    def get_payee_by_name(self, name: str) -> Optional[Payee]:
        pass

    @abstractmethod
    def list_payees(self) -> list[Payee]:
        pass

    @abstractmethod
    def update_payee(self, payee_id: int, name: str) -> None:
        pass

    @abstractmethod
    def delete_payee(self, payee_id: int) -> None:
        pass

    @abstractmethod
    def get_payee_usage(self, payee_id: int) -> dict[str, int]:
        """Count rows referencing a payee, keyed by a singular label."""
        pass

    # Pending transaction operations
    @abstractmethod
    def create_pending_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        source_account_id: int,
        selected_category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
    ) -> int:
        """Create a pending transaction. Returns pending transaction ID."""
        pass

    @abstractmethod
    def get_pending_transaction(self, pending_id: int) -> Optional[PendingTransaction]:
        pass

    @abstractmethod
    def list_pending_transactions(
        self, source_account_id: Optional[int] = None
    ) -> list[PendingTransaction]:
        pass

    @abstractmethod
    def update_pending_category(self, pending_id: int, category_id: Optional[int]) -> None:
        pass

    @abstractmethod
    def update_pending_payee(self, pending_id: int, payee_id: Optional[int]) -> None:
        pass

    @abstractmethod
    def delete_pending_transaction(self, pending_id: int) -> None:
        """Delete a pending transaction together with its split lines."""
        pass

    @abstractmethod
    def create_split_lines(
        self, pending_id: int, date: date, lines: Sequence[JournalLineInput]
    ) -> list[int]:
        pass

    @abstractmethod
    def list_split_lines(self, pending_id: int) -> list[SplitLine]:
        pass

    @abstractmethod
    def delete_split_lines(self, pending_id: int) -> int:
        """Delete all split lines of a pending transaction. Returns count deleted."""
        pass

    # Posted transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        source_account_id: int,
        debit_account_id: int,
        credit_account_id: int,
        payee_id: Optional[int] = None,
    ) -> int:
        """Create a posted transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        pass

    @abstractmethod
    def list_transactions(
        self,
        source_account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        chart_account_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List posted transactions, newest first.

        Args:
            chart_account_id: Only transactions debiting or crediting this row
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        debit_account_id: Optional[int] = None,
        credit_account_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        update_payee: bool = False,
    ) -> None:
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a posted transaction together with its ledger lines."""
        pass

    @abstractmethod
    def create_ledger_lines(
        self, transaction_id: int, date: date, lines: Sequence[JournalLineInput]
    ) -> list[int]:
        """Insert ledger lines; a line without its own line_date gets ``date``."""
        pass

    @abstractmethod
    def list_ledger_lines(
        self,
        transaction_id: Optional[int] = None,
        chart_account_id: Optional[int] = None,
    ) -> list[LedgerLine]:
        pass

    @abstractmethod
    def delete_ledger_lines(self, transaction_id: int) -> int:
        pass

    # Manual journal operations
    @abstractmethod
    def create_journal_lines(
        self, reference_number: str, date: date, lines: Sequence[JournalLineInput]
    ) -> list[int]:
        pass

    @abstractmethod
    def list_journal_lines(self, reference_number: Optional[str] = None) -> list[JournalLine]:
        pass

    @abstractmethod
    def delete_journal_lines(self, reference_number: str) -> int:
        """Delete every line of a journal entry. Returns count deleted."""
        pass

    @abstractmethod
    def list_journal_references(self) -> list[str]:
        """List distinct reference numbers, newest entry first."""
        pass

    # Automation operations
    @abstractmethod
    def create_automation(
        self,
        name: str,
        automation_type: str,
        condition_type: str,
        condition_value: str,
        action_value: str,
        enabled: bool = True,
        auto_add: bool = False,
    ) -> int:
        pass

    @abstractmethod
    def get_automation(self, automation_id: int) -> Optional[Automation]:
        pass

    @abstractmethod
    def list_automations(
        self, automation_type: Optional[str] = None, enabled_only: bool = False
    ) -> list[Automation]:
        pass

    @abstractmethod
    def update_automation(
        self,
        automation_id: int,
        name: Optional[str] = None,
        automation_type: Optional[str] = None,
        condition_type: Optional[str] = None,
        condition_value: Optional[str] = None,
        action_value: Optional[str] = None,
        auto_add: Optional[bool] = None,
    ) -> None:
        """Update the given automation fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def update_automation_enabled(self, automation_id: int, enabled: bool) -> None:
        pass

    @abstractmethod
    def delete_automation(self, automation_id: int) -> None:
        pass
