"""Tests for posting, editing and undoing transactions."""

from datetime import date
from decimal import Decimal

import pytest

from switchbooks.domain.entities import JournalLineInput
from switchbooks.domain.errors import (
    MissingCategoryError,
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
)


@pytest.fixture
def split_pending(pending_service, checking, checking_chart, sample_chart):
    """A -$100 pending transaction split between Software and Office Supplies."""
    pending_id = pending_service.add_pending(checking.id, date(2024, 2, 10), Decimal("-100.00"), "ADOBE + STAPLES")
    pending_service.set_split_lines(
        pending_id,
        [
            JournalLineInput(category_id=checking_chart.id, credit=Decimal("100"), description="Card"),
            JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("60"), description="Adobe"),
            JournalLineInput(category_id=sample_chart["Office Supplies"], debit=Decimal("40"), description="Staples"),
        ],
    )
    return pending_id


def test_post_expense(pending_service, transaction_service, checking, checking_chart, sample_chart):
    """$50 of office supplies paid from checking."""
    pending_id = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-50.00"), "STAPLES")

    transaction_id = transaction_service.post_pending(pending_id, category_id=sample_chart["Office Supplies"])

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == sample_chart["Office Supplies"]
    assert txn.credit_account_id == checking_chart.id
    assert txn.amount == Decimal("-50.00")

    lines = transaction_service.get_ledger_lines(transaction_id)
    assert [(line.chart_account_id, line.debit, line.credit) for line in lines] == [
        (sample_chart["Office Supplies"], Decimal("50.00"), Decimal("0")),
        (checking_chart.id, Decimal("0"), Decimal("50.00")),
    ]
    assert pending_service.get_pending(pending_id) is None


def test_post_revenue(pending_service, transaction_service, checking, checking_chart, sample_chart):
    """$200 of sales deposited into checking."""
    pending_id = pending_service.add_pending(checking.id, date(2024, 1, 16), Decimal("200.00"), "STRIPE PAYOUT")

    transaction_id = transaction_service.post_pending(pending_id, category_id=sample_chart["Sales"])

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == checking_chart.id
    assert txn.credit_account_id == sample_chart["Sales"]


def test_post_uses_preselected_category_and_payee(
    pending_service, transaction_service, payee_service, checking, sample_chart
):
    payee_id = payee_service.create_payee("Staples")
    pending_id = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-12.00"), "STAPLES")
    pending_service.select_category(pending_id, sample_chart["Office Supplies"])
    pending_service.select_payee(pending_id, payee_id)

    transaction_id = transaction_service.post_pending(pending_id)

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == sample_chart["Office Supplies"]
    assert txn.payee_id == payee_id
    assert all(line.payee_id == payee_id for line in transaction_service.get_ledger_lines(transaction_id))


def test_post_without_category_keeps_pending(pending_service, transaction_service, checking):
    pending_id = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-12.00"), "UNKNOWN")

    with pytest.raises(MissingCategoryError):
        transaction_service.post_pending(pending_id)

    assert pending_service.get_pending(pending_id) is not None
    assert transaction_service.list_transactions() == []


def test_post_missing_pending(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.post_pending(999)


def test_credit_card_expense(transaction_service, source_account_service, credit_card, sample_chart):
    """A card purchase debits the expense and credits the card."""
    card_chart = source_account_service.get_linked_chart_account(credit_card.id)

    transaction_id = transaction_service.add_manual_transaction(
        credit_card.id, date(2024, 3, 1), Decimal("-75.00"), sample_chart["Software"], "ZOOM"
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == sample_chart["Software"]
    assert txn.credit_account_id == card_chart.id


def test_owner_investment(transaction_service, checking, checking_chart, sample_chart):
    transaction_id = transaction_service.add_manual_transaction(
        checking.id, date(2024, 1, 1), Decimal("5000"), sample_chart["Owner's Equity"]
    )
    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == checking_chart.id
    assert txn.credit_account_id == sample_chart["Owner's Equity"]


def test_cannot_categorize_to_own_account(transaction_service, checking, checking_chart):
    with pytest.raises(ValidationError):
        transaction_service.add_manual_transaction(checking.id, date(2024, 1, 1), Decimal("-5"), checking_chart.id)


def test_undo_round_trip(pending_service, transaction_service, checking, sample_chart):
    pending_id = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-50.00"), "STAPLES")
    transaction_id = transaction_service.post_pending(pending_id, category_id=sample_chart["Office Supplies"])

    new_pending_id = transaction_service.undo_transaction(transaction_id)

    pending = pending_service.get_pending(new_pending_id)
    assert pending.date == date(2024, 1, 15)
    assert pending.description == "STAPLES"
    assert pending.amount == Decimal("-50.00")
    assert pending.source_account_id == checking.id
    assert pending.selected_category_id == sample_chart["Office Supplies"]
    assert pending_service.get_split_lines(new_pending_id) == []
    assert transaction_service.get_transaction(transaction_id) is None


def test_post_split(transaction_service, split_pending, checking_chart, sample_chart):
    transaction_id = transaction_service.post_pending(split_pending, category_id=sample_chart["Software"])

    lines = transaction_service.get_ledger_lines(transaction_id)
    assert len(lines) == 3
    assert transaction_service.is_split(transaction_id)
    assert {line.chart_account_id for line in lines} == {
        checking_chart.id,
        sample_chart["Software"],
        sample_chart["Office Supplies"],
    }


def test_undo_split_restores_split_lines(pending_service, transaction_service, split_pending, sample_chart):
    before = [
        (line.chart_account_id, line.debit, line.credit, line.description)
        for line in pending_service.get_split_lines(split_pending)
    ]
    transaction_id = transaction_service.post_pending(split_pending, category_id=sample_chart["Software"])

    new_pending_id = transaction_service.undo_transaction(transaction_id)

    after = [
        (line.chart_account_id, line.debit, line.credit, line.description)
        for line in pending_service.get_split_lines(new_pending_id)
    ]
    assert after == before
    assert pending_service.get_pending(new_pending_id).amount == Decimal("-100.00")


def test_unbalanced_split_rejected(pending_service, checking, checking_chart, sample_chart):
    pending_id = pending_service.add_pending(checking.id, date(2024, 2, 10), Decimal("-100"), "MIXED")

    with pytest.raises(UnbalancedEntryError):
        pending_service.set_split_lines(
            pending_id,
            [
                JournalLineInput(category_id=checking_chart.id, credit=Decimal("100")),
                JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("60")),
            ],
        )
    assert pending_service.get_split_lines(pending_id) == []


def test_split_needs_two_lines(pending_service, checking, sample_chart):
    pending_id = pending_service.add_pending(checking.id, date(2024, 2, 10), Decimal("-100"), "MIXED")
    with pytest.raises(ValidationError, match="two lines"):
        pending_service.set_split_lines(
            pending_id, [JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("5"), credit=Decimal("5"))]
        )


def test_clear_split(pending_service, split_pending):
    assert pending_service.set_split_lines(split_pending, []) == 0
    assert pending_service.get_split_lines(split_pending) == []


def test_update_category_reposts(transaction_service, checking, checking_chart, sample_chart):
    transaction_id = transaction_service.add_manual_transaction(
        checking.id, date(2024, 1, 15), Decimal("200"), sample_chart["Office Supplies"], "REFUND?"
    )

    transaction_service.update_transaction(transaction_id, category_id=sample_chart["Sales"], amount=Decimal("250"))

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.debit_account_id == checking_chart.id
    assert txn.credit_account_id == sample_chart["Sales"]
    assert txn.amount == Decimal("250")
    lines = transaction_service.get_ledger_lines(transaction_id)
    assert [(line.chart_account_id, line.debit, line.credit) for line in lines] == [
        (checking_chart.id, Decimal("250"), Decimal("0")),
        (sample_chart["Sales"], Decimal("0"), Decimal("250")),
    ]


def test_update_keeps_category(transaction_service, checking, sample_chart):
    transaction_id = transaction_service.add_manual_transaction(
        checking.id, date(2024, 1, 15), Decimal("-20"), sample_chart["Office Supplies"], "PAPER"
    )

    transaction_service.update_transaction(transaction_id, description="Printer paper", date=date(2024, 1, 20))

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.description == "Printer paper"
    assert txn.date == date(2024, 1, 20)
    assert txn.debit_account_id == sample_chart["Office Supplies"]
    assert all(line.date == date(2024, 1, 20) for line in transaction_service.get_ledger_lines(transaction_id))


def test_update_split_amount_rejected(transaction_service, split_pending, sample_chart):
    transaction_id = transaction_service.post_pending(split_pending, category_id=sample_chart["Software"])

    with pytest.raises(ValidationError, match="split"):
        transaction_service.update_transaction(transaction_id, amount=Decimal("-90"))

    transaction_service.update_transaction(transaction_id, description="Adobe and Staples")
    assert len(transaction_service.get_ledger_lines(transaction_id)) == 3


def test_post_many_is_atomic(pending_service, transaction_service, checking, sample_chart):
    good = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-10"), "GOOD")
    pending_service.select_category(good, sample_chart["Office Supplies"])
    bad = pending_service.add_pending(checking.id, date(2024, 1, 16), Decimal("-10"), "NO CATEGORY")

    with pytest.raises(MissingCategoryError):
        transaction_service.post_many({good: None, bad: None})

    assert {p.id for p in pending_service.list_pending()} == {good, bad}
    assert transaction_service.list_transactions() == []


def test_post_many(pending_service, transaction_service, checking, sample_chart):
    first = pending_service.add_pending(checking.id, date(2024, 1, 15), Decimal("-10"), "ONE")
    second = pending_service.add_pending(checking.id, date(2024, 1, 16), Decimal("-20"), "TWO")

    posted = transaction_service.post_many({first: sample_chart["Software"], second: sample_chart["Software"]})

    assert len(posted) == 2
    assert pending_service.list_pending() == []


def test_undo_many(transaction_service, pending_service, checking, sample_chart):
    ids = [
        transaction_service.add_manual_transaction(checking.id, date(2024, 1, day), Decimal("-5"), sample_chart["Software"])
        for day in (1, 2)
    ]

    pending_ids = transaction_service.undo_many(ids)

    assert len(pending_ids) == 2
    assert transaction_service.list_transactions() == []
    assert len(pending_service.list_pending()) == 2


def test_list_transactions_filters(transaction_service, checking, credit_card, sample_chart):
    transaction_service.add_manual_transaction(checking.id, date(2024, 1, 5), Decimal("-5"), sample_chart["Software"])
    transaction_service.add_manual_transaction(checking.id, date(2024, 2, 5), Decimal("-6"), sample_chart["Office Supplies"])
    transaction_service.add_manual_transaction(credit_card.id, date(2024, 2, 6), Decimal("-7"), sample_chart["Software"])

    assert len(transaction_service.list_transactions()) == 3
    assert len(transaction_service.list_transactions(source_account_id=checking.id)) == 2
    assert len(transaction_service.list_transactions(category_id=sample_chart["Software"])) == 2
    in_february = transaction_service.list_transactions(start_date=date(2024, 2, 1), end_date=date(2024, 2, 28))
    assert [txn.amount for txn in in_february] == [Decimal("-7"), Decimal("-6")]


def test_ledger_balance(transaction_service, source_account_service, checking, sample_chart):
    transaction_service.add_manual_transaction(checking.id, date(2024, 1, 1), Decimal("1000"), sample_chart["Sales"])
    transaction_service.add_manual_transaction(checking.id, date(2024, 1, 2), Decimal("-250"), sample_chart["Software"])

    assert source_account_service.get_ledger_balance(checking.id) == Decimal("750")


def test_split_must_move_source_account(pending_service, checking, checking_chart, sample_chart):
    pending_id = pending_service.add_pending(checking.id, date(2024, 2, 10), Decimal("-100"), "ADOBE")

    with pytest.raises(ValidationError, match="source account"):
        pending_service.set_split_lines(
            pending_id,
            [
                JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("5")),
                JournalLineInput(category_id=sample_chart["Sales"], credit=Decimal("5")),
            ],
        )
    with pytest.raises(ValidationError, match="100.00"):
        pending_service.set_split_lines(
            pending_id,
            [
                JournalLineInput(category_id=checking_chart.id, credit=Decimal("80")),
                JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("80")),
            ],
        )
    assert pending_service.get_split_lines(pending_id) == []


def test_split_posting_moves_source_balance(
    transaction_service, source_account_service, split_pending, checking, sample_chart
):
    transaction_service.post_pending(split_pending, category_id=sample_chart["Software"])

    assert source_account_service.get_ledger_balance(checking.id) == Decimal("-100")


def test_split_on_wrong_side_of_posting_rejected(pending_service, transaction_service, split_pending, sample_chart):
    # Sales is credited, so the posting debits Checking; the split credits it.
    with pytest.raises(ValidationError, match="debit the source account"):
        transaction_service.post_pending(split_pending, category_id=sample_chart["Sales"])

    assert pending_service.get_pending(split_pending) is not None
    assert transaction_service.list_transactions() == []


def test_split_line_dates_survive_post_and_undo(
    pending_service, transaction_service, checking, checking_chart, sample_chart
):
    pending_id = pending_service.add_pending(checking.id, date(2024, 3, 1), Decimal("-30"), "ADOBE + STAPLES")
    pending_service.set_split_lines(
        pending_id,
        [
            JournalLineInput(category_id=checking_chart.id, credit=Decimal("30")),
            JournalLineInput(category_id=sample_chart["Software"], debit=Decimal("20")),
            JournalLineInput(
                category_id=sample_chart["Office Supplies"], debit=Decimal("10"), line_date=date(2024, 2, 28)
            ),
        ],
    )
    assert [line.date for line in pending_service.get_split_lines(pending_id)] == [
        date(2024, 3, 1),
        date(2024, 3, 1),
        date(2024, 2, 28),
    ]

    transaction_id = transaction_service.post_pending(pending_id, category_id=sample_chart["Software"])
    assert [line.date for line in transaction_service.get_ledger_lines(transaction_id)] == [
        date(2024, 3, 1),
        date(2024, 3, 1),
        date(2024, 2, 28),
    ]

    transaction_service.update_transaction(transaction_id, date=date(2024, 3, 5))
    assert [line.date for line in transaction_service.get_ledger_lines(transaction_id)] == [
        date(2024, 3, 5),
        date(2024, 3, 5),
        date(2024, 2, 28),
    ]

    new_pending_id = transaction_service.undo_transaction(transaction_id)
    assert [line.date for line in pending_service.get_split_lines(new_pending_id)] == [
        date(2024, 3, 5),
        date(2024, 3, 5),
        date(2024, 2, 28),
    ]
