"""Tests for financial reports."""

from datetime import date
from decimal import Decimal

import pytest

from switchbooks.domain.entities import AccountType, JournalLineInput
from switchbooks.domain.errors import ValidationError
from switchbooks.domain.report import build_report_rows, natural_balance


@pytest.fixture
def january_books(journal_service, transaction_service, checking, checking_chart, credit_card, sample_chart):
    """A month of activity: owner investment, a sale, purchases and an equipment buy."""
    journal_service.create_entry(
        date(2024, 1, 2),
        [
            JournalLineInput(category_id=checking_chart.id, debit=Decimal("1000")),
            JournalLineInput(category_id=sample_chart["Owner's Equity"], credit=Decimal("1000")),
        ],
    )
    transaction_service.add_manual_transaction(
        checking.id, date(2024, 1, 10), Decimal("500"), sample_chart["Sales"], "Invoice 1"
    )
    transaction_service.add_manual_transaction(
        credit_card.id, date(2024, 1, 15), Decimal("-50"), sample_chart["Software"], "ADOBE"
    )
    transaction_service.add_manual_transaction(
        checking.id, date(2024, 1, 20), Decimal("-100"), sample_chart["Merchandise"], "Stock"
    )
    journal_service.create_entry(
        date(2024, 1, 25),
        [
            JournalLineInput(category_id=sample_chart["Equipment"], debit=Decimal("400")),
            JournalLineInput(category_id=checking_chart.id, credit=Decimal("400")),
        ],
    )
    transaction_service.add_manual_transaction(
        checking.id, date(2024, 2, 5), Decimal("-30"), sample_chart["Office Supplies"], "PAPER"
    )
    return sample_chart


def test_natural_balance():
    assert natural_balance(AccountType.EXPENSE, Decimal("50"), Decimal("10")) == Decimal("40")
    assert natural_balance("Revenue", Decimal("10"), Decimal("50")) == Decimal("40")
    assert natural_balance(AccountType.LIABILITY, Decimal("20"), Decimal("5")) == Decimal("-15")


def test_build_report_rows_rolls_children_into_parents(chart_service, sample_chart):
    accounts = chart_service.list_accounts()
    activity = {
        sample_chart["Software"]: (Decimal("50"), Decimal("0")),
        sample_chart["Operating Expenses"]: (Decimal("5"), Decimal("0")),
    }

    rows = build_report_rows(accounts, activity, [AccountType.EXPENSE])

    assert [(row.account.name, row.depth, row.amount, row.total) for row in rows] == [
        ("Operating Expenses", 0, Decimal("5"), Decimal("55")),
        ("Software", 1, Decimal("50"), Decimal("50")),
    ]


def test_profit_and_loss(report_service, january_books):
    report = report_service.profit_and_loss(date(2024, 1, 1), date(2024, 1, 31))

    assert report.total_revenue == Decimal("500")
    assert report.total_cogs == Decimal("100")
    assert report.total_expenses == Decimal("50")
    assert report.gross_profit == Decimal("400")
    assert report.net_income == Decimal("350")
    assert [row.account.name for row in report.expenses] == ["Operating Expenses", "Software"]


def test_profit_and_loss_without_bounds(report_service, january_books):
    report = report_service.profit_and_loss()

    assert report.total_expenses == Decimal("80")
    assert report.net_income == Decimal("320")


def test_profit_and_loss_rejects_reversed_range(report_service):
    with pytest.raises(ValidationError, match="after end date"):
        report_service.profit_and_loss(date(2024, 2, 1), date(2024, 1, 1))


def test_balance_sheet_balances(report_service, january_books):
    sheet = report_service.balance_sheet(as_of=date(2024, 1, 31))

    assert [(row.account.name, row.total) for row in sheet.assets] == [
        ("Checking", Decimal("1000")),
        ("Equipment", Decimal("400")),
    ]
    assert sheet.total_assets == Decimal("1400")
    assert sheet.total_liabilities == Decimal("50")
    assert sheet.retained_earnings == Decimal("350")
    assert sheet.total_equity == Decimal("1350")
    assert sheet.total_liabilities_and_equity == sheet.total_assets


def test_balance_sheet_as_of_excludes_later_activity(report_service, january_books):
    sheet = report_service.balance_sheet(as_of=date(2024, 1, 5))

    assert sheet.total_assets == Decimal("1000")
    assert sheet.liabilities == ()
    assert sheet.retained_earnings == Decimal("0")
    assert sheet.total_equity == Decimal("1000")


def test_cash_flow(report_service, january_books):
    flow = report_service.cash_flow(date(2024, 1, 1), date(2024, 1, 31))

    assert flow.operating == Decimal("350")
    assert flow.investing == Decimal("-400")
    assert flow.financing == Decimal("1050")
    assert flow.net_change == Decimal("1000")
    assert flow.cash_change == flow.net_change
