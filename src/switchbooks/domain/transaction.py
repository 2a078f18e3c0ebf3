"""Posted transaction domain service.

Every path that creates or changes a posted transaction (posting a pending
transaction, adding a manual one, editing one) goes through
``determine_posting`` so the debit/credit decision lives in one place.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from switchbooks.database.base import Database
from switchbooks.domain.entities import (
    JournalLineInput,
    LedgerLine,
    Posting,
    Transaction as TransactionEntity,
)
from switchbooks.domain.errors import (
    MissingCategoryError,
    MissingLinkedAccountError,
    NotFoundError,
    ValidationError,
    chart_account_not_found,
    payee_not_found,
    pending_not_found,
    source_account_not_found,
    transaction_not_found,
)
from switchbooks.domain.posting import (
    determine_posting,
    ledger_lines_for_posting,
    require_balanced,
    require_source_leg,
)

logger = logging.getLogger(__name__)


def _as_inputs(
    lines: Iterable,
    chart_attr: str = "chart_account_id",
    moved_from: Optional[date] = None,
    moved_to: Optional[date] = None,
) -> list[JournalLineInput]:
    """Copy stored split or ledger lines into unsaved line inputs.

    Each line keeps its own date, except that lines dated ``moved_from``
    are moved to ``moved_to``.
    """
    inputs = []
    for line in lines:
        line_date = line.date
        if moved_to is not None and line_date == moved_from:
            line_date = moved_to
        inputs.append(
            JournalLineInput(
                category_id=getattr(line, chart_attr),
                debit=line.debit,
                credit=line.credit,
                description=line.description,
                payee_id=line.payee_id,
                line_date=line_date,
            )
        )
    return inputs


class TransactionService:
    """Service for posting, editing and undoing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def resolve_posting(self, source_account_id: int, category_id: Optional[int]) -> Posting:
        """Look up both accounts and run the posting rules.

        Raises:
            NotFoundError: If the source account or category does not exist
            MissingLinkedAccountError: If the source account has no chart row
            MissingCategoryError: If no category was selected
        """
        source = self.db.get_source_account(source_account_id)
        if source is None:
            raise NotFoundError(source_account_not_found(source_account_id))

        source_chart = self.db.get_chart_account_by_source(source_account_id)
        if source_chart is None:
            raise MissingLinkedAccountError(source.name)
        if category_id is None:
            raise MissingCategoryError()

        category = self.db.get_chart_account(category_id)
        if category is None:
            raise NotFoundError(chart_account_not_found(category_id))

        posting = determine_posting(
            source_account_type=source.kind,
            category_type=category.type,
            source_chart_account_id=source_chart.id,
            category_chart_account_id=category.id,
            source_account_name=source.name,
        )
        logger.debug(
            "Posting %s (%s) against %s (%s): debit %s, credit %s",
            source.name,
            source.kind.value,
            category.name,
            category.type.value,
            posting.debit_account_id,
            posting.credit_account_id,
        )
        return posting

    def _require_payee(self, payee_id: Optional[int]) -> None:
        if payee_id is not None and self.db.get_payee(payee_id) is None:
            raise NotFoundError(payee_not_found(payee_id))

    def post_pending(
        self,
        pending_id: int,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
    ) -> int:
        """Post a pending transaction to the ledger.

        The transaction and its ledger lines are inserted and the pending
        record deleted in a single atomic unit.

        Args:
            pending_id: Pending transaction to post
            category_id: Category to post against (defaults to the pre-selected one)
            payee_id: Payee (defaults to the pre-selected one)

        Returns:
            Posted transaction ID

        Raises:
            NotFoundError: If the pending transaction or an account is missing
            MissingLinkedAccountError: If the source account has no chart row
            MissingCategoryError: If no category is given or pre-selected
            UnbalancedEntryError: If the pending transaction's split lines do not balance
            ValidationError: If the split lines do not put the pending amount
                on the source account's side of the posting
        """
        pending = self.db.get_pending_transaction(pending_id)
        if pending is None:
            raise NotFoundError(pending_not_found(pending_id))

        if category_id is None:
            category_id = pending.selected_category_id
        if payee_id is None:
            payee_id = pending.payee_id
        self._require_payee(payee_id)

        posting = self.resolve_posting(pending.source_account_id, category_id)

        splits = self.db.list_split_lines(pending_id)
        if splits:
            require_balanced(splits)
            source_chart = self.db.get_chart_account_by_source(pending.source_account_id)
            require_source_leg(
                splits, source_chart.id, pending.amount, posting, attr="chart_account_id"
            )
            lines = _as_inputs(splits)
        else:
            lines = ledger_lines_for_posting(posting, pending.amount, pending.description, payee_id)

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                date=pending.date,
                description=pending.description,
                amount=pending.amount,
                source_account_id=pending.source_account_id,
                debit_account_id=posting.debit_account_id,
                credit_account_id=posting.credit_account_id,
                payee_id=payee_id,
            )
            self.db.create_ledger_lines(transaction_id, pending.date, lines)
            self.db.delete_pending_transaction(pending_id)

        logger.info(
            "Posted pending transaction %s as transaction %s (%d ledger lines)",
            pending_id,
            transaction_id,
            len(lines),
        )
        return transaction_id

    def post_many(self, selections: dict[int, Optional[int]]) -> list[int]:
        """Post several pending transactions, all or nothing.

        Args:
            selections: Mapping of pending ID to category ID (None uses the
                pre-selected category)

        Returns:
            Posted transaction IDs in the order given
        """
        with self.db.atomic():
            return [
                self.post_pending(pending_id, category_id=category_id)
                for pending_id, category_id in selections.items()
            ]

    def add_manual_transaction(
        self,
        source_account_id: int,
        date: date,
        amount: Decimal,
        category_id: Optional[int],
        description: str = "",
        payee_id: Optional[int] = None,
    ) -> int:
        """Post a transaction directly against a source account.

        Returns:
            Posted transaction ID

        Raises:
            NotFoundError: If an account or the payee does not exist
            MissingLinkedAccountError: If the source account has no chart row
            MissingCategoryError: If no category is given
        """
        self._require_payee(payee_id)
        posting = self.resolve_posting(source_account_id, category_id)
        amount = Decimal(amount)
        lines = ledger_lines_for_posting(posting, amount, description, payee_id)

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                date=date,
                description=description or "",
                amount=amount,
                source_account_id=source_account_id,
                debit_account_id=posting.debit_account_id,
                credit_account_id=posting.credit_account_id,
                payee_id=payee_id,
            )
            self.db.create_ledger_lines(transaction_id, date, lines)

        logger.info("Added manual transaction %s on account %s", transaction_id, source_account_id)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def get_ledger_lines(self, transaction_id: int) -> list[LedgerLine]:
        self.require_transaction(transaction_id)
        return self.db.list_ledger_lines(transaction_id=transaction_id)

    def is_split(self, transaction_id: int) -> bool:
        return len(self.db.list_ledger_lines(transaction_id=transaction_id)) > 2

    def get_category_id(self, transaction: TransactionEntity) -> Optional[int]:
        """Return the leg that is not the source account's chart row."""
        source_chart = self.db.get_chart_account_by_source(transaction.source_account_id)
        if source_chart is None:
            return None
        if transaction.debit_account_id == source_chart.id:
            return transaction.credit_account_id
        return transaction.debit_account_id

    def list_transactions(
        self,
        source_account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List posted transactions with filters, newest first."""
        return self.db.list_transactions(
            source_account_id=source_account_id,
            start_date=start_date,
            end_date=end_date,
            chart_account_id=category_id,
        )

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        clear_payee: bool = False,
    ) -> None:
        """Edit a posted transaction and re-post it.

        The debit/credit pair is recomputed from the (possibly new) category
        and the ledger lines are rewritten in one atomic unit.

        Raises:
            NotFoundError: If the transaction, category or payee does not exist
            MissingLinkedAccountError: If the source account has no chart row
            ValidationError: If the amount or category of a split is changed
        """
        transaction = self.require_transaction(transaction_id)
        if clear_payee and payee_id is not None:
            raise ValidationError("Cannot set both payee_id and clear_payee")

        existing_lines = self.db.list_ledger_lines(transaction_id=transaction_id)
        split = len(existing_lines) > 2
        if split and (amount is not None or category_id is not None):
            raise ValidationError(
                f"Transaction {transaction_id} is split; undo it to change its amount or category"
            )

        if category_id is None:
            category_id = self.get_category_id(transaction)
        posting = self.resolve_posting(transaction.source_account_id, category_id)

        new_date = date if date is not None else transaction.date
        new_description = description if description is not None else transaction.description
        new_amount = Decimal(amount) if amount is not None else transaction.amount
        if clear_payee:
            new_payee_id = None
        else:
            new_payee_id = payee_id if payee_id is not None else transaction.payee_id
        self._require_payee(new_payee_id)

        if split:
            lines = _as_inputs(existing_lines, moved_from=transaction.date, moved_to=new_date)
        else:
            lines = ledger_lines_for_posting(posting, new_amount, new_description, new_payee_id)

        with self.db.atomic():
            self.db.update_transaction(
                transaction_id=transaction_id,
                date=new_date,
                description=new_description,
                amount=new_amount,
                debit_account_id=posting.debit_account_id,
                credit_account_id=posting.credit_account_id,
                payee_id=new_payee_id,
                update_payee=True,
            )
            self.db.delete_ledger_lines(transaction_id)
            self.db.create_ledger_lines(transaction_id, new_date, lines)

        logger.info("Updated transaction %s", transaction_id)

    def undo_transaction(self, transaction_id: int) -> int:
        """Move a posted transaction back to pending.

        The pending record gets the original date, description, signed amount
        and source account, with the category and payee pre-selected. A split
        transaction keeps its ledger lines as split lines of the new record.

        Returns:
            ID of the re-created pending transaction

        Raises:
            NotFoundError: If the transaction does not exist
        """
        transaction = self.require_transaction(transaction_id)
        lines = self.db.list_ledger_lines(transaction_id=transaction_id)
        category_id = self.get_category_id(transaction)

        with self.db.atomic():
            pending_id = self.db.create_pending_transaction(
                date=transaction.date,
                description=transaction.description,
                amount=transaction.amount,
                source_account_id=transaction.source_account_id,
                selected_category_id=category_id,
                payee_id=transaction.payee_id,
            )
            if len(lines) > 2:
                self.db.create_split_lines(pending_id, transaction.date, _as_inputs(lines))
            self.db.delete_transaction(transaction_id)

        logger.info("Undid transaction %s into pending transaction %s", transaction_id, pending_id)
        return pending_id

    def undo_many(self, transaction_ids: Iterable[int]) -> list[int]:
        """Undo several transactions, all or nothing."""
        with self.db.atomic():
            return [self.undo_transaction(transaction_id) for transaction_id in transaction_ids]
