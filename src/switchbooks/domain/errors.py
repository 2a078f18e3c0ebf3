"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class MissingLinkedAccountError(ValidationError):
    """Source account has no chart-of-accounts row linked to it."""

    def __init__(self, account_name: Optional[str] = None):
        self.account_name = account_name
        if account_name:
            message = f"Account '{account_name}' not found in chart of accounts"
        else:
            message = "Account not found in chart of accounts"
        super().__init__(message)


class MissingCategoryError(ValidationError):
    """No category was selected for a posting or journal line."""

    def __init__(self, message: str = "A category must be selected"):
        super().__init__(message)


class UnbalancedEntryError(ValidationError):
    """Total debits do not equal total credits."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            "Journal entry must be balanced (total debits must equal total credits): "
            f"debits {total_debit:.2f}, credits {total_credit:.2f}"
        )


def source_account_not_found(account_id: int) -> str:
    """Return message for missing source account."""
    return f"Account {account_id} not found"


def chart_account_not_found(account_id: int) -> str:
    """Return message for missing chart-of-accounts row."""
    return f"Chart account {account_id} not found"


def chart_account_name_not_found(name: str) -> str:
    return f"Chart account '{name}' not found"


def pending_not_found(pending_id: int) -> str:
    return f"Pending transaction {pending_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    return f"Transaction {transaction_id} not found"


def payee_not_found(payee_id: int) -> str:
    return f"Payee {payee_id} not found"


def journal_entry_not_found(reference_number: str) -> str:
    return f"Journal entry '{reference_number}' not found"


def automation_not_found(automation_id: int) -> str:
    return f"Automation {automation_id} not found"


def dependency_summary(counts: dict[str, int]) -> str:
    """Render non-zero dependency counts, e.g. '2 transactions, 1 child account'."""
    parts = []
    for label, count in counts.items():
        if count > 0:
            parts.append(f"{count} {label}{'s' if count != 1 else ''}")
    return ", ".join(parts)
