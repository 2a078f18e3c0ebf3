"""Domain model entities for switchbooks.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Services and the posting engine only ever see these; the
SQLAlchemy models stay behind the database layer.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Chart-of-accounts type."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    COGS = "COGS"
    EXPENSE = "Expense"


# Source accounts can only be bank-like (Asset) or card-like (Liability)
SOURCE_ACCOUNT_KINDS = (AccountType.ASSET, AccountType.LIABILITY)


class AutomationType(str, Enum):
    PAYEE = "payee"
    CATEGORY = "category"


class ConditionType(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


@dataclass(frozen=True)
class ChartAccount:
    """Chart-of-accounts row, either a root category or a child of one."""

    id: int
    name: str
    type: AccountType
    subtype: Optional[str]
    parent_id: Optional[int]
    linked_source_account_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class SourceAccount:
    """Bank, credit-card or manual account whose transactions get posted."""

    id: int
    name: str
    kind: AccountType
    current_balance: Decimal
    is_manual: bool
    created_at: datetime


@dataclass(frozen=True)
class Payee:
    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class PendingTransaction:
    """Imported transaction waiting to be categorized and posted."""

    id: int
    date: date
    description: str
    amount: Decimal
    source_account_id: int
    selected_category_id: Optional[int]
    payee_id: Optional[int]
    imported_at: datetime


@dataclass(frozen=True)
class SplitLine:
    """One line of split data attached to a pending transaction."""

    id: int
    pending_transaction_id: int
    date: date
    description: str
    chart_account_id: int
    payee_id: Optional[int]
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class Transaction:
    """Posted double-entry transaction."""

    id: int
    date: date
    description: str
    amount: Decimal
    source_account_id: int
    debit_account_id: int
    credit_account_id: int
    payee_id: Optional[int]
    posted_at: datetime


@dataclass(frozen=True)
class LedgerLine:
    """Debit or credit line belonging to a posted transaction."""

    id: int
    transaction_id: int
    date: date
    description: str
    chart_account_id: int
    payee_id: Optional[int]
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class JournalLine:
    """Manual journal line; lines sharing a reference number form one entry."""

    id: int
    date: date
    description: str
    category_id: int
    payee_id: Optional[int]
    debit: Decimal
    credit: Decimal
    reference_number: str


@dataclass(frozen=True)
class JournalLineInput:
    """Unsaved journal or split line as submitted by a user.

    ``line_date`` overrides the date of the entry the line is saved under;
    None means the line takes the entry's date.
    """

    category_id: Optional[int]
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    description: str = ""
    payee_id: Optional[int] = None
    line_date: Optional[date] = None


@dataclass(frozen=True)
class Posting:
    """Result of the posting engine: which chart rows to debit and credit."""

    debit_account_id: int
    credit_account_id: int


@dataclass(frozen=True)
class ChartTreeNode:
    """One rendered row of the chart of accounts."""

    account: ChartAccount
    depth: int
    parent_name: Optional[str]


@dataclass(frozen=True)
class Automation:
    id: int
    name: str
    automation_type: AutomationType
    condition_type: ConditionType
    condition_value: str
    action_value: str
    enabled: bool
    auto_add: bool
    created_at: datetime


@dataclass(frozen=True)
class ReportRow:
    """One chart account in a financial report.

    ``amount`` is the account's own balance on its normal side (debit for
    Asset, COGS and Expense; credit otherwise) and ``total`` adds every
    descendant's amount.
    """

    account: ChartAccount
    depth: int
    amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class ProfitAndLoss:
    """Revenue, cost of goods sold and expenses over a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    revenue: tuple[ReportRow, ...]
    cogs: tuple[ReportRow, ...]
    expenses: tuple[ReportRow, ...]
    total_revenue: Decimal
    total_cogs: Decimal
    total_expenses: Decimal

    @property
    def gross_profit(self) -> Decimal:
        return self.total_revenue - self.total_cogs

    @property
    def net_income(self) -> Decimal:
        return self.gross_profit - self.total_expenses


@dataclass(frozen=True)
class BalanceSheet:
    """Asset, liability and equity balances as of a date.

    ``total_equity`` includes ``retained_earnings``, the net income of
    everything posted up to ``as_of``.
    """

    as_of: Optional[date]
    assets: tuple[ReportRow, ...]
    liabilities: tuple[ReportRow, ...]
    equity: tuple[ReportRow, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    retained_earnings: Decimal
    total_equity: Decimal

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity


@dataclass(frozen=True)
class CashFlow:
    """Change in cash over a period, split by activity.

    Cash accounts are the Asset chart rows linked to a source account.
    """

    start_date: Optional[date]
    end_date: Optional[date]
    operating: Decimal
    investing: Decimal
    financing: Decimal
    cash_change: Decimal

    @property
    def net_change(self) -> Decimal:
        return self.operating + self.investing + self.financing
