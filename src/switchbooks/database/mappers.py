"""Mapper functions to convert between domain models and SQLAlchemy models.

Enum-typed columns are stored as plain strings; this is the only place they
are turned back into domain enums.
"""

from decimal import Decimal

from switchbooks.domain import entities as domain
from switchbooks.database.models import (
    Automation as ORMAutomation,
    ChartAccount as ORMChartAccount,
    JournalLine as ORMJournalLine,
    LedgerLine as ORMLedgerLine,
    Payee as ORMPayee,
    PendingTransaction as ORMPendingTransaction,
    SourceAccount as ORMSourceAccount,
    SplitLine as ORMSplitLine,
    Transaction as ORMTransaction,
)


def _money(value) -> Decimal:
    return Decimal(value if value is not None else 0)


def source_account_to_domain(orm_account: ORMSourceAccount) -> domain.SourceAccount:
    """Convert SQLAlchemy SourceAccount model to domain SourceAccount entity."""
    return domain.SourceAccount(
        id=orm_account.id,
        name=orm_account.name,
        kind=domain.AccountType(orm_account.kind),
        current_balance=_money(orm_account.current_balance),
        is_manual=orm_account.is_manual,
        created_at=orm_account.created_at,
    )


def chart_account_to_domain(orm_account: ORMChartAccount) -> domain.ChartAccount:
    """Convert SQLAlchemy ChartAccount model to domain ChartAccount entity."""
    return domain.ChartAccount(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        subtype=orm_account.subtype,
        parent_id=orm_account.parent_id,
        linked_source_account_id=orm_account.linked_source_account_id,
        created_at=orm_account.created_at,
    )


def payee_to_domain(orm_payee: ORMPayee) -> domain.Payee:
    return domain.Payee(id=orm_payee.id, name=orm_payee.name, created_at=orm_payee.created_at)


def pending_to_domain(orm_pending: ORMPendingTransaction) -> domain.PendingTransaction:
    """Convert SQLAlchemy PendingTransaction model to domain entity."""
    return domain.PendingTransaction(
        id=orm_pending.id,
        date=orm_pending.date,
        description=orm_pending.description,
        amount=_money(orm_pending.amount),
        source_account_id=orm_pending.source_account_id,
        selected_category_id=orm_pending.selected_category_id,
        payee_id=orm_pending.payee_id,
        imported_at=orm_pending.imported_at,
    )


def split_line_to_domain(orm_line: ORMSplitLine) -> domain.SplitLine:
    return domain.SplitLine(
        id=orm_line.id,
        pending_transaction_id=orm_line.pending_transaction_id,
        date=orm_line.date,
        description=orm_line.description,
        chart_account_id=orm_line.chart_account_id,
        payee_id=orm_line.payee_id,
        debit=_money(orm_line.debit),
        credit=_money(orm_line.credit),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=_money(orm_transaction.amount),
        source_account_id=orm_transaction.source_account_id,
        debit_account_id=orm_transaction.debit_account_id,
        credit_account_id=orm_transaction.credit_account_id,
        payee_id=orm_transaction.payee_id,
        posted_at=orm_transaction.posted_at,
    )


def ledger_line_to_domain(orm_line: ORMLedgerLine) -> domain.LedgerLine:
    return domain.LedgerLine(
        id=orm_line.id,
        transaction_id=orm_line.transaction_id,
        date=orm_line.date,
        description=orm_line.description,
        chart_account_id=orm_line.chart_account_id,
        payee_id=orm_line.payee_id,
        debit=_money(orm_line.debit),
        credit=_money(orm_line.credit),
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    return domain.JournalLine(
        id=orm_line.id,
        date=orm_line.date,
        description=orm_line.description,
        category_id=orm_line.category_id,
        payee_id=orm_line.payee_id,
        debit=_money(orm_line.debit),
        credit=_money(orm_line.credit),
        reference_number=orm_line.reference_number,
    )


def automation_to_domain(orm_automation: ORMAutomation) -> domain.Automation:
    """Convert SQLAlchemy Automation model to domain Automation entity."""
    return domain.Automation(
        id=orm_automation.id,
        name=orm_automation.name,
        automation_type=domain.AutomationType(orm_automation.automation_type),
        condition_type=domain.ConditionType(orm_automation.condition_type),
        condition_value=orm_automation.condition_value,
        action_value=orm_automation.action_value,
        enabled=orm_automation.enabled,
        auto_add=orm_automation.auto_add,
        created_at=orm_automation.created_at,
    )
