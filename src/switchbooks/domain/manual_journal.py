"""Manual journal entry service.

A journal entry is the set of lines sharing a reference number. Entries are
always written as a whole: saving replaces every line of the reference
number, and an unbalanced entry is never written at all.
"""

import logging
import time
from datetime import date
from typing import Optional, Sequence

from switchbooks.database.base import Database
from switchbooks.domain.entities import JournalLine, JournalLineInput
from switchbooks.domain.errors import (
    ConflictError,
    NotFoundError,
    chart_account_not_found,
    journal_entry_not_found,
    payee_not_found,
)
from switchbooks.domain.posting import prepare_journal_lines

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "MJE-"


def generate_reference_number() -> str:
    """Return a reference number like 'MJE-1719500000000'."""
    return f"{REFERENCE_PREFIX}{int(time.time() * 1000)}"


class ManualJournalService:
    """Service for manual journal entries."""

    def __init__(self, db: Database):
        """Initialize manual journal service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(self, lines: Sequence[JournalLineInput]) -> list[JournalLineInput]:
        prepared = prepare_journal_lines(lines)
        for line in prepared:
            if self.db.get_chart_account(line.category_id) is None:
                raise NotFoundError(chart_account_not_found(line.category_id))
            if line.payee_id is not None and self.db.get_payee(line.payee_id) is None:
                raise NotFoundError(payee_not_found(line.payee_id))
        return prepared

    def create_entry(
        self,
        date: date,
        lines: Sequence[JournalLineInput],
        reference_number: Optional[str] = None,
    ) -> str:
        """Create a balanced journal entry.

        Args:
            date: Entry date
            lines: Entry lines; blank lines are ignored
            reference_number: Optional reference number (generated if omitted)

        Returns:
            Reference number of the entry

        Raises:
            UnbalancedEntryError: If debits and credits differ
            MissingCategoryError: If a line with an amount has no category
            ValidationError: If no valid line remains
            ConflictError: If the reference number is already used
        """
        prepared = self._validate(lines)

        reference_number = (reference_number or "").strip() or generate_reference_number()
        if self.db.list_journal_lines(reference_number=reference_number):
            raise ConflictError(f"Journal entry '{reference_number}' already exists")

        with self.db.atomic():
            self.db.create_journal_lines(reference_number, date, prepared)
        logger.info("Created journal entry %s with %d lines", reference_number, len(prepared))
        return reference_number

    def update_entry(
        self,
        reference_number: str,
        date: date,
        lines: Sequence[JournalLineInput],
    ) -> None:
        """Replace every line of an existing journal entry.

        Raises:
            NotFoundError: If the entry does not exist
            UnbalancedEntryError: If debits and credits differ (nothing is changed)
        """
        if not self.db.list_journal_lines(reference_number=reference_number):
            raise NotFoundError(journal_entry_not_found(reference_number))
        prepared = self._validate(lines)

        with self.db.atomic():
            self.db.delete_journal_lines(reference_number)
            self.db.create_journal_lines(reference_number, date, prepared)
        logger.info("Replaced journal entry %s with %d lines", reference_number, len(prepared))

    def delete_entry(self, reference_number: str) -> int:
        """Delete a journal entry. Returns the number of lines removed."""
        deleted = self.db.delete_journal_lines(reference_number)
        if deleted == 0:
            raise NotFoundError(journal_entry_not_found(reference_number))
        logger.info("Deleted journal entry %s", reference_number)
        return deleted

    def get_entry(self, reference_number: str) -> list[JournalLine]:
        """Get the lines of a journal entry, in entry order."""
        lines = self.db.list_journal_lines(reference_number=reference_number)
        if not lines:
            raise NotFoundError(journal_entry_not_found(reference_number))
        return sorted(lines, key=lambda line: line.id)

    def list_references(self) -> list[str]:
        return self.db.list_journal_references()
