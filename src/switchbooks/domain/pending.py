"""Pending (imported, not yet posted) transaction service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from switchbooks.database.base import Database
from switchbooks.domain.entities import JournalLineInput, PendingTransaction, SplitLine
from switchbooks.domain.errors import (
    MissingLinkedAccountError,
    NotFoundError,
    ValidationError,
    chart_account_not_found,
    payee_not_found,
    pending_not_found,
    source_account_not_found,
)
from switchbooks.domain.posting import prepare_journal_lines, require_source_leg

logger = logging.getLogger(__name__)


class PendingTransactionService:
    """Service for transactions waiting to be categorized and posted."""

    def __init__(self, db: Database):
        """Initialize pending transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_pending(
        self,
        source_account_id: int,
        date: date,
        amount: Decimal,
        description: str = "",
    ) -> int:
        """Add a pending transaction for a source account.

        Args:
            source_account_id: Source account the transaction belongs to
            date: Transaction date
            amount: Signed amount as reported by the bank
            description: Bank description

        Returns:
            Pending transaction ID

        Raises:
            NotFoundError: If the source account does not exist
        """
        if self.db.get_source_account(source_account_id) is None:
            raise NotFoundError(source_account_not_found(source_account_id))

        pending_id = self.db.create_pending_transaction(
            date=date,
            description=description or "",
            amount=Decimal(amount),
            source_account_id=source_account_id,
        )
        logger.debug("Added pending transaction %s for account %s", pending_id, source_account_id)
        return pending_id

    def get_pending(self, pending_id: int) -> Optional[PendingTransaction]:
        return self.db.get_pending_transaction(pending_id)

    def require_pending(self, pending_id: int) -> PendingTransaction:
        pending = self.db.get_pending_transaction(pending_id)
        if pending is None:
            raise NotFoundError(pending_not_found(pending_id))
        return pending

    def list_pending(self, source_account_id: Optional[int] = None) -> list[PendingTransaction]:
        return self.db.list_pending_transactions(source_account_id=source_account_id)

    def select_category(self, pending_id: int, category_id: Optional[int]) -> None:
        """Pre-select (or clear) the category a pending transaction will post to."""
        self.require_pending(pending_id)
        if category_id is not None and self.db.get_chart_account(category_id) is None:
            raise NotFoundError(chart_account_not_found(category_id))
        self.db.update_pending_category(pending_id, category_id)

    def select_payee(self, pending_id: int, payee_id: Optional[int]) -> None:
        self.require_pending(pending_id)
        if payee_id is not None and self.db.get_payee(payee_id) is None:
            raise NotFoundError(payee_not_found(payee_id))
        self.db.update_pending_payee(pending_id, payee_id)

    def set_split_lines(self, pending_id: int, lines: Sequence[JournalLineInput]) -> int:
        """Replace the split lines of a pending transaction.

        The lines are validated like a journal entry and saved as a whole.
        The lines on the source account's own chart row must net to the
        pending amount. An empty sequence clears the split.

        Returns:
            Number of split lines saved

        Raises:
            NotFoundError: If the pending transaction or a chart account is missing
            MissingLinkedAccountError: If the source account has no chart row
            ValidationError: If the lines are invalid, unbalanced, or do not
                move the source account by the pending amount
        """
        pending = self.require_pending(pending_id)

        if not lines:
            self.db.delete_split_lines(pending_id)
            return 0

        prepared = prepare_journal_lines(lines)
        if len(prepared) < 2:
            raise ValidationError("A split needs at least two lines")
        for line in prepared:
            if self.db.get_chart_account(line.category_id) is None:
                raise NotFoundError(chart_account_not_found(line.category_id))

        source_chart = self.db.get_chart_account_by_source(pending.source_account_id)
        if source_chart is None:
            source = self.db.get_source_account(pending.source_account_id)
            raise MissingLinkedAccountError(source.name if source else None)
        require_source_leg(prepared, source_chart.id, pending.amount)

        with self.db.atomic():
            self.db.delete_split_lines(pending_id)
            self.db.create_split_lines(pending_id, pending.date, prepared)
        logger.info("Saved %d split lines for pending transaction %s", len(prepared), pending_id)
        return len(prepared)

    def get_split_lines(self, pending_id: int) -> list[SplitLine]:
        self.require_pending(pending_id)
        return self.db.list_split_lines(pending_id)

    def delete_pending(self, pending_id: int) -> None:
        """Discard a pending transaction and its split lines."""
        self.require_pending(pending_id)
        self.db.delete_pending_transaction(pending_id)
        logger.info("Deleted pending transaction %s", pending_id)
