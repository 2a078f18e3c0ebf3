"""Source account domain service."""

import logging
from decimal import Decimal
from typing import Optional, Union

from switchbooks.database.base import Database
from switchbooks.domain.entities import (
    SOURCE_ACCOUNT_KINDS,
    AccountType,
    ChartAccount,
    SourceAccount,
)
from switchbooks.domain.errors import (
    ConflictError,
    DependencyError,
    MissingLinkedAccountError,
    NotFoundError,
    ValidationError,
    dependency_summary,
    source_account_not_found,
)
from switchbooks.domain.posting import coerce_account_type

logger = logging.getLogger(__name__)


class SourceAccountService:
    """Service for managing bank, credit-card and manual accounts."""

    def __init__(self, db: Database):
        """Initialize source account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        kind: Union[AccountType, str] = AccountType.ASSET,
        current_balance: Decimal = Decimal("0"),
        is_manual: bool = True,
    ) -> int:
        """Create a source account and its linked chart-of-accounts row.

        Args:
            name: Account name (unique)
            kind: Asset for bank accounts, Liability for credit cards
            current_balance: Balance reported by the bank
            is_manual: False for accounts fed by a bank connection

        Returns:
            Source account ID

        Raises:
            ValidationError: If the name is empty or the kind is not Asset/Liability
            ConflictError: If an account with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        kind = coerce_account_type(kind)
        if kind not in SOURCE_ACCOUNT_KINDS:
            raise ValidationError(
                f"Source account kind must be Asset or Liability, got '{kind.value}'"
            )
        if self.db.get_source_account_by_name(name) is not None:
            raise ConflictError(f"Account with name '{name}' already exists")

        with self.db.atomic():
            account_id = self.db.create_source_account(
                name=name,
                kind=kind.value,
                current_balance=Decimal(current_balance),
                is_manual=is_manual,
            )
            self.db.create_chart_account(
                name=name,
                account_type=kind.value,
                linked_source_account_id=account_id,
            )
        logger.info("Created source account %s '%s' (%s)", account_id, name, kind.value)
        return account_id

    def get_account(self, account_id: int) -> Optional[SourceAccount]:
        return self.db.get_source_account(account_id)

    def require_account(self, account_id: int) -> SourceAccount:
        """Get source account by ID or raise NotFoundError."""
        account = self.db.get_source_account(account_id)
        if account is None:
            raise NotFoundError(source_account_not_found(account_id))
        return account

    def list_accounts(self) -> list[SourceAccount]:
        return self.db.list_source_accounts()

    def get_linked_chart_account(self, account_id: int) -> ChartAccount:
        """Get the chart row linked to a source account.

        Raises:
            NotFoundError: If the source account does not exist
            MissingLinkedAccountError: If it has no linked chart row
        """
        account = self.require_account(account_id)
        chart_account = self.db.get_chart_account_by_source(account_id)
        if chart_account is None:
            raise MissingLinkedAccountError(account.name)
        return chart_account

    def rename_account(self, account_id: int, name: str) -> None:
        """Rename a source account and its linked chart row.

        Raises:
            NotFoundError: If the account does not exist
            ConflictError: If the new name is taken
        """
        self.require_account(account_id)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        existing = self.db.get_source_account_by_name(name)
        if existing is not None and existing.id != account_id:
            raise ConflictError(f"Account with name '{name}' already exists")

        with self.db.atomic():
            self.db.update_source_account(account_id, name=name)
            chart_account = self.db.get_chart_account_by_source(account_id)
            if chart_account is not None:
                self.db.update_chart_account(chart_account.id, name=name)

    def set_current_balance(self, account_id: int, balance: Decimal) -> None:
        """Record the balance reported by the bank."""
        self.require_account(account_id)
        self.db.update_source_account(account_id, current_balance=Decimal(balance))

    def get_ledger_balance(self, account_id: int) -> Decimal:
        """Return debits minus credits posted to the account's chart row."""
        chart_account = self.get_linked_chart_account(account_id)
        total_debit, total_credit = self.db.get_chart_account_totals(chart_account.id)
        return total_debit - total_credit

    def delete_account(self, account_id: int) -> None:
        """Delete a source account and its linked chart row.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If it still has pending or posted transactions,
                or its chart row is used by journal lines
        """
        account = self.require_account(account_id)
        usage = self.db.get_source_account_usage(account_id)
        chart_account = self.db.get_chart_account_by_source(account_id)
        if chart_account is not None:
            chart_usage = self.db.get_chart_account_usage(chart_account.id)
            usage["journal line"] = chart_usage["journal line"]
            usage["split line"] = chart_usage["split line"]
            usage["posted transaction"] = max(
                usage["posted transaction"], chart_usage["posted transaction"]
            )

        if any(usage.values()):
            raise DependencyError(
                f"Cannot delete account '{account.name}': it has {dependency_summary(usage)}. "
                "Please delete or undo them first."
            )

        with self.db.atomic():
            if chart_account is not None:
                self.db.delete_chart_account(chart_account.id)
            self.db.delete_source_account(account_id)
        logger.info("Deleted source account %s '%s'", account_id, account.name)
