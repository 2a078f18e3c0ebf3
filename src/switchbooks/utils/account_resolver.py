"""Utilities for resolving account, category and payee names to IDs."""

from typing import Union

from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.errors import NotFoundError
from switchbooks.domain.payee import PayeeService
from switchbooks.domain.source_account import SourceAccountService


def _as_id(value: Union[str, int]):
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def resolve_account(account_service: SourceAccountService, account: Union[str, int]) -> int:
    """Resolve a source account name or ID to its ID.

    A value that parses as an integer is treated as an ID.

    Raises:
        NotFoundError: If no account matches
    """
    account_id = _as_id(account)
    if account_id is not None:
        return account_service.require_account(account_id).id

    for candidate in account_service.list_accounts():
        if candidate.name == account:
            return candidate.id
    raise NotFoundError(f"Account '{account}' not found")


def resolve_chart_account(chart_service: ChartOfAccountsService, category: Union[str, int]) -> int:
    """Resolve a chart-of-accounts name or ID to its ID.

    Raises:
        NotFoundError: If no chart account matches
    """
    account_id = _as_id(category)
    if account_id is not None:
        return chart_service.require_account(account_id).id
    return chart_service.require_account_by_name(str(category).strip()).id


def resolve_payee(payee_service: PayeeService, payee: Union[str, int]) -> int:
    """Resolve a payee name or ID to its ID.

    Raises:
        NotFoundError: If no payee matches
    """
    payee_id = _as_id(payee)
    if payee_id is not None:
        return payee_service.require_payee(payee_id).id
    found = payee_service.get_payee_by_name(str(payee).strip())
    if found is None:
        raise NotFoundError(f"Payee '{payee}' not found")
    return found.id
