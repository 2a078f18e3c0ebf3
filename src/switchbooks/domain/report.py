"""Financial reports domain service.

Reports read the ledger only: posted ledger lines and manual journal lines,
summed per chart account and rolled up from children into their parents.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from switchbooks.database.base import Database
from switchbooks.domain.chart import order_chart_tree
from switchbooks.domain.entities import (
    AccountType,
    BalanceSheet,
    CashFlow,
    ChartAccount,
    ProfitAndLoss,
    ReportRow,
)
from switchbooks.domain.errors import ValidationError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Types whose balance grows with a debit; every other type grows with a credit.
NORMAL_DEBIT_TYPES = frozenset({AccountType.ASSET, AccountType.COGS, AccountType.EXPENSE})

Activity = dict[int, tuple[Decimal, Decimal]]


def natural_balance(
    account_type: Union[AccountType, str], debit: Decimal, credit: Decimal
) -> Decimal:
    """Return a balance on the account type's normal side."""
    if AccountType(account_type) in NORMAL_DEBIT_TYPES:
        return debit - credit
    return credit - debit


def build_report_rows(
    accounts: Iterable[ChartAccount],
    activity: Activity,
    account_types: Iterable[AccountType],
) -> list[ReportRow]:
    """Build report rows for the accounts of the given types, in tree order.

    Each row's total includes its descendants. Accounts with no activity in
    themselves or any descendant are left out.
    """
    account_types = set(account_types)
    selected = [account for account in accounts if account.type in account_types]
    selected_ids = {account.id for account in selected}

    children: dict[int, list[int]] = defaultdict(list)
    for account in selected:
        if account.parent_id in selected_ids:
            children[account.parent_id].append(account.id)

    own = {
        account.id: natural_balance(account.type, *activity.get(account.id, (ZERO, ZERO)))
        for account in selected
    }
    totals: dict[int, Decimal] = {}
    active: dict[int, bool] = {}

    def visit(account_id: int) -> None:
        total = own[account_id]
        has_activity = account_id in activity
        for child_id in children.get(account_id, []):
            visit(child_id)
            total += totals[child_id]
            has_activity = has_activity or active[child_id]
        totals[account_id] = total
        active[account_id] = has_activity

    nodes = order_chart_tree(selected)
    for node in nodes:
        if node.depth == 0:
            visit(node.account.id)

    return [
        ReportRow(
            account=node.account,
            depth=node.depth,
            amount=own[node.account.id],
            total=totals[node.account.id],
        )
        for node in nodes
        if active[node.account.id]
    ]


def sum_top_level(rows: Iterable[ReportRow]) -> Decimal:
    """Total of the root rows; their totals already include every descendant."""
    return sum((row.total for row in rows if row.depth == 0), ZERO)


class ReportService:
    """Service for profit and loss, balance sheet and cash flow reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def _activity(self, start_date: Optional[date], end_date: Optional[date]) -> Activity:
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")
        return self.db.get_account_activity(start_date=start_date, end_date=end_date)

    def _profit_and_loss(
        self,
        accounts: list[ChartAccount],
        activity: Activity,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> ProfitAndLoss:
        revenue = build_report_rows(accounts, activity, [AccountType.REVENUE])
        cogs = build_report_rows(accounts, activity, [AccountType.COGS])
        expenses = build_report_rows(accounts, activity, [AccountType.EXPENSE])
        return ProfitAndLoss(
            start_date=start_date,
            end_date=end_date,
            revenue=tuple(revenue),
            cogs=tuple(cogs),
            expenses=tuple(expenses),
            total_revenue=sum_top_level(revenue),
            total_cogs=sum_top_level(cogs),
            total_expenses=sum_top_level(expenses),
        )

    def profit_and_loss(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ProfitAndLoss:
        """Build a profit and loss report.

        Args:
            start_date: First day of the period (None for no lower bound)
            end_date: Last day of the period (None for no upper bound)

        Returns:
            ProfitAndLoss with Revenue, COGS and Expense rows and totals

        Raises:
            ValidationError: If start_date is after end_date
        """
        activity = self._activity(start_date, end_date)
        report = self._profit_and_loss(
            self.db.list_chart_accounts(), activity, start_date, end_date
        )
        logger.debug("Built profit and loss for %s..%s: net income %s", start_date, end_date, report.net_income)
        return report

    def balance_sheet(self, as_of: Optional[date] = None) -> BalanceSheet:
        """Build a balance sheet from everything posted up to and including as_of."""
        accounts = self.db.list_chart_accounts()
        activity = self._activity(None, as_of)

        assets = build_report_rows(accounts, activity, [AccountType.ASSET])
        liabilities = build_report_rows(accounts, activity, [AccountType.LIABILITY])
        equity = build_report_rows(accounts, activity, [AccountType.EQUITY])
        retained_earnings = self._profit_and_loss(accounts, activity, None, as_of).net_income

        sheet = BalanceSheet(
            as_of=as_of,
            assets=tuple(assets),
            liabilities=tuple(liabilities),
            equity=tuple(equity),
            total_assets=sum_top_level(assets),
            total_liabilities=sum_top_level(liabilities),
            retained_earnings=retained_earnings,
            total_equity=sum_top_level(equity) + retained_earnings,
        )
        logger.debug(
            "Built balance sheet as of %s: assets %s, liabilities and equity %s",
            as_of,
            sheet.total_assets,
            sheet.total_liabilities_and_equity,
        )
        return sheet

    def cash_flow(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> CashFlow:
        """Build a cash flow report.

        Operating activity is the period's net income. Investing activity is
        the decrease in non-cash assets, and financing activity the increase
        in liabilities and equity.
        """
        accounts = self.db.list_chart_accounts()
        activity = self._activity(start_date, end_date)

        def change(account: ChartAccount) -> Decimal:
            return natural_balance(account.type, *activity.get(account.id, (ZERO, ZERO)))

        cash_change = ZERO
        investing = ZERO
        financing = ZERO
        for account in accounts:
            if account.type is AccountType.ASSET:
                if account.linked_source_account_id is not None:
                    cash_change += change(account)
                else:
                    investing -= change(account)
            elif account.type in (AccountType.LIABILITY, AccountType.EQUITY):
                financing += change(account)

        operating = self._profit_and_loss(accounts, activity, start_date, end_date).net_income
        return CashFlow(
            start_date=start_date,
            end_date=end_date,
            operating=operating,
            investing=investing,
            financing=financing,
            cash_change=cash_change,
        )
