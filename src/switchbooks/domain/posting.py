"""Double-entry posting rules.

Everything here is a pure function: callers resolve accounts from the
database, ask this module which chart rows to debit and credit, and persist
the result themselves.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from switchbooks.domain.entities import AccountType, JournalLineInput, Posting
from switchbooks.domain.errors import (
    MissingCategoryError,
    MissingLinkedAccountError,
    UnbalancedEntryError,
    ValidationError,
)

BALANCE_TOLERANCE = Decimal("0.01")
ZERO = Decimal("0")

# Category types that grow with a credit; every other type is debited.
CREDITED_CATEGORY_TYPES = frozenset({AccountType.REVENUE, AccountType.EQUITY})


def coerce_account_type(value: Union[AccountType, str]) -> AccountType:
    """Convert a type name to AccountType.

    Raises:
        ValidationError: If the value is not a known account type
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(value)
    except ValueError:
        valid = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Unknown account type '{value}'. Expected one of: {valid}")


def determine_posting(
    source_account_type: Union[AccountType, str],
    category_type: Union[AccountType, str],
    source_chart_account_id: Optional[int],
    category_chart_account_id: Optional[int],
    source_account_name: Optional[str] = None,
) -> Posting:
    """Decide which chart rows a source-account transaction debits and credits.

    The source account's chart row is always one leg and the category the
    other. Expense, COGS, Asset and Liability categories are debited;
    Revenue and Equity categories are credited. The decision does not depend
    on whether the source is an Asset or a Liability.

    Args:
        source_account_type: Type of the source account (Asset or Liability)
        category_type: Type of the selected category
        source_chart_account_id: Chart row linked to the source account
        category_chart_account_id: Chart row of the selected category
        source_account_name: Used in the error message when the link is missing

    Returns:
        Posting with debit and credit chart account IDs

    Raises:
        MissingLinkedAccountError: If the source has no linked chart row
        MissingCategoryError: If no category was given
        ValidationError: If a type is unknown or both legs are the same row
    """
    if source_chart_account_id is None:
        raise MissingLinkedAccountError(source_account_name)
    if category_chart_account_id is None:
        raise MissingCategoryError()

    source_type = coerce_account_type(source_account_type)
    if source_type not in (AccountType.ASSET, AccountType.LIABILITY):
        raise ValidationError(
            f"Source account type must be Asset or Liability, got '{source_type.value}'"
        )
    category_type = coerce_account_type(category_type)

    if source_chart_account_id == category_chart_account_id:
        raise ValidationError("A transaction cannot be categorized to its own source account")

    if category_type in CREDITED_CATEGORY_TYPES:
        return Posting(
            debit_account_id=source_chart_account_id,
            credit_account_id=category_chart_account_id,
        )
    return Posting(
        debit_account_id=category_chart_account_id,
        credit_account_id=source_chart_account_id,
    )


def total_debits_and_credits(lines: Iterable) -> tuple[Decimal, Decimal]:
    """Sum the debit and credit columns of any line-like objects."""
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        total_debit += Decimal(line.debit or 0)
        total_credit += Decimal(line.credit or 0)
    return total_debit, total_credit


def is_balanced(lines: Iterable) -> bool:
    """Return True if total debits equal total credits within one cent."""
    total_debit, total_credit = total_debits_and_credits(lines)
    return abs(total_debit - total_credit) < BALANCE_TOLERANCE


def require_balanced(lines: Iterable) -> None:
    """Raise UnbalancedEntryError unless the lines balance."""
    total_debit, total_credit = total_debits_and_credits(lines)
    if abs(total_debit - total_credit) >= BALANCE_TOLERANCE:
        raise UnbalancedEntryError(total_debit, total_credit)


def net_debit_on(lines: Iterable, chart_account_id: int, attr: str = "category_id") -> Decimal:
    """Debits minus credits of the lines posted to one chart row."""
    return sum(
        (
            Decimal(line.debit or 0) - Decimal(line.credit or 0)
            for line in lines
            if getattr(line, attr) == chart_account_id
        ),
        ZERO,
    )


def require_source_leg(
    lines: Iterable,
    source_chart_account_id: int,
    amount: Decimal,
    posting: Optional[Posting] = None,
    attr: str = "category_id",
) -> None:
    """Check that split lines move the source account by the transaction amount.

    The lines on the source account's chart row must net to ``|amount|``.
    With a posting, the net must also be on the side the posting puts the
    source account: a debit when the source is the debit leg, otherwise a
    credit.

    Raises:
        ValidationError: If the source account's lines do not match
    """
    value = abs(Decimal(amount))
    net = net_debit_on(lines, source_chart_account_id, attr)

    if posting is None:
        if abs(abs(net) - value) >= BALANCE_TOLERANCE:
            raise ValidationError(
                f"Split lines must move the source account by {value:.2f}, "
                f"found {abs(net):.2f}"
            )
        return

    if posting.debit_account_id == source_chart_account_id:
        side, expected = "debit", value
    else:
        side, expected = "credit", -value
    if abs(net - expected) >= BALANCE_TOLERANCE:
        raise ValidationError(
            f"Split lines must {side} the source account {value:.2f}, "
            f"found a net debit of {net:.2f}"
        )


def filter_blank_lines(lines: Iterable[JournalLineInput]) -> list[JournalLineInput]:
    """Drop lines with no category and nothing on either side."""
    return [
        line
        for line in lines
        if line.category_id is not None or line.debit or line.credit
    ]


def prepare_journal_lines(lines: Sequence[JournalLineInput]) -> list[JournalLineInput]:
    """Validate a multi-line entry and return the lines worth saving.

    The entry is rejected as a whole if any check fails.

    Raises:
        ValidationError: Negative amounts, or nothing left to save
        MissingCategoryError: A line with an amount has no category
        UnbalancedEntryError: Debits and credits differ
    """
    lines = filter_blank_lines(lines)

    for index, line in enumerate(lines, start=1):
        if line.debit < 0 or line.credit < 0:
            raise ValidationError(f"Line {index}: amounts cannot be negative")
        if line.category_id is None:
            raise MissingCategoryError(f"Line {index}: a category must be selected")

    require_balanced(lines)

    lines = [line for line in lines if line.debit > 0 or line.credit > 0]
    if not lines:
        raise ValidationError("At least one valid journal entry line is required")
    return lines


def ledger_lines_for_posting(
    posting: Posting,
    amount: Decimal,
    description: str = "",
    payee_id: Optional[int] = None,
) -> list[JournalLineInput]:
    """Build the debit and credit lines for a plain (non-split) posting."""
    value = abs(Decimal(amount))
    return [
        JournalLineInput(
            category_id=posting.debit_account_id,
            debit=value,
            credit=ZERO,
            description=description,
            payee_id=payee_id,
        ),
        JournalLineInput(
            category_id=posting.credit_account_id,
            debit=ZERO,
            credit=value,
            description=description,
            payee_id=payee_id,
        ),
    ]
