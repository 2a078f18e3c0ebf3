"""Pending transaction commands."""

import click

from switchbooks.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_payee_or_exit,
)
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.cli.line_options import LINE_HELP, parse_line_options
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.pending import PendingTransactionService
from switchbooks.domain.source_account import SourceAccountService
from switchbooks.utils.amount_parser import parse_amount
from switchbooks.utils.date_parser import parse_date


@click.group()
def pending_group():
    """Manage transactions waiting to be posted."""
    pass


@pending_group.command("add")
@click.option("--account", required=True, help="Source account name or ID")
@click.option("--date", "txn_date", default="today", help="Transaction date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--amount", required=True, help="Signed amount as shown by the bank (e.g., -50.00)")
@click.option("--description", default="", help="Bank description")
@click.pass_context
def add_pending(ctx, account: str, txn_date: str, amount: str, description: str):
    """Add a pending transaction.

    Examples:
        switchbooks pending add --account Checking --amount -50 --description "STAPLES 123"
    """
    service = PendingTransactionService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)

    try:
        pending_id = service.add_pending(
            source_account_id=account_id,
            date=parse_date(txn_date),
            amount=parse_amount(amount),
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added pending transaction {pending_id}")


@pending_group.command("list")
@click.option("--account", help="Source account name or ID")
@click.pass_context
def list_pending(ctx, account: str | None):
    """List pending transactions, newest first."""
    db = ctx.obj["db"]
    service = PendingTransactionService(db)
    account_id = resolve_account_or_exit(ctx, account) if account else None

    pending = service.list_pending(source_account_id=account_id)
    if not pending:
        click.echo("No pending transactions.")
        return

    accounts = {acc.id: acc.name for acc in SourceAccountService(db).list_accounts()}
    categories = {acc.id: acc.name for acc in ChartOfAccountsService(db).list_accounts()}

    click.echo(f"\nFound {len(pending)} pending transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':<12} {'Account':<20} {'Category':<20} {'Description':<30}")
    click.echo("-" * 100)
    for txn in pending:
        category = categories.get(txn.selected_category_id, "") if txn.selected_category_id else ""
        if service.get_split_lines(txn.id):
            category = "-- split --"
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {f'${txn.amount:,.2f}':<12} "
            f"{accounts.get(txn.source_account_id, 'Unknown'):<20} {category:<20} "
            f"{(txn.description or '')[:30]:<30}"
        )


@pending_group.command("categorize")
@click.argument("pending_id", type=int)
@click.option("--category", help="Chart account name or ID (empty string to clear)")
@click.option("--payee", help="Payee name or ID (empty string to clear)")
@click.pass_context
def categorize_pending(ctx, pending_id: int, category: str | None, payee: str | None):
    """Pre-select the category and/or payee of a pending transaction."""
    service = PendingTransactionService(ctx.obj["db"])
    if category is None and payee is None:
        click.echo("Error: Specify --category and/or --payee.", err=True)
        ctx.exit(1)

    try:
        if category is not None:
            category_id = resolve_category_or_exit(ctx, category) if category else None
            service.select_category(pending_id, category_id)
        if payee is not None:
            payee_id = resolve_payee_or_exit(ctx, payee) if payee else None
            service.select_payee(pending_id, payee_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated pending transaction {pending_id}")


@pending_group.command("split")
@click.argument("pending_id", type=int)
@click.option("--line", "raw_lines", multiple=True, help=LINE_HELP)
@click.option("--clear", is_flag=True, help="Remove the split lines")
@click.pass_context
def split_pending(ctx, pending_id: int, raw_lines: tuple[str, ...], clear: bool):
    """Split a pending transaction across several chart accounts.

    The lines must balance (total debits equal total credits).

    Examples:
        switchbooks pending split 4 --line Checking:0:100 --line Software:60:0 --line Supplies:40:0
    """
    service = PendingTransactionService(ctx.obj["db"])
    if clear == bool(raw_lines):
        click.echo("Error: Specify either --line options or --clear.", err=True)
        ctx.exit(1)

    lines = parse_line_options(ctx, raw_lines)
    try:
        saved = service.set_split_lines(pending_id, lines)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if saved:
        click.echo(f"Saved {saved} split lines for pending transaction {pending_id}")
    else:
        click.echo(f"Cleared split lines for pending transaction {pending_id}")


@pending_group.command("delete")
@click.argument("pending_id", type=int)
@click.pass_context
def delete_pending(ctx, pending_id: int):
    """Discard a pending transaction."""
    service = PendingTransactionService(ctx.obj["db"])
    try:
        service.delete_pending(pending_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted pending transaction {pending_id}")


def register_commands(cli):
    """Register pending commands with main CLI."""
    cli.add_command(pending_group, name="pending")
