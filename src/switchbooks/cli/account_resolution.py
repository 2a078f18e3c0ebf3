"""CLI helpers for resolving accounts, categories and payees."""

from __future__ import annotations

import click

from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.payee import PayeeService
from switchbooks.domain.source_account import SourceAccountService
from switchbooks.utils.account_resolver import (
    resolve_account,
    resolve_chart_account,
    resolve_payee,
)


def resolve_account_or_exit(ctx: click.Context, account: str | int) -> int:
    """Resolve a source account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(SourceAccountService(ctx.obj["db"]), account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, category: str | int) -> int:
    """Resolve a chart account name or ID, or exit with a CLI error."""
    try:
        return resolve_chart_account(ChartOfAccountsService(ctx.obj["db"]), category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_payee_or_exit(ctx: click.Context, payee: str | int) -> int:
    """Resolve a payee name or ID, or exit with a CLI error."""
    try:
        return resolve_payee(PayeeService(ctx.obj["db"]), payee)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
