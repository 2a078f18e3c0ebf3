"""Posted transaction commands."""

import click

from switchbooks.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_payee_or_exit,
)
from switchbooks.cli.date_filters import period_options, resolve_cli_date_range
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.source_account import SourceAccountService
from switchbooks.domain.transaction import TransactionService
from switchbooks.utils.amount_parser import parse_amount
from switchbooks.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Post, edit and undo ledger transactions."""
    pass


@transaction_group.command("post")
@click.argument("pending_ids", type=int, nargs=-1, required=True)
@click.option("--category", help="Chart account name or ID (defaults to the pre-selected category)")
@click.option("--payee", help="Payee name or ID (defaults to the pre-selected payee)")
@click.pass_context
def post_pending(ctx, pending_ids: tuple[int, ...], category: str | None, payee: str | None):
    """Post one or more pending transactions to the ledger.

    Several IDs are posted all or nothing.

    Examples:
        switchbooks transaction post 12 --category "Supplies"
        switchbooks transaction post 12 13 14
    """
    service = TransactionService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category) if category else None
    payee_id = resolve_payee_or_exit(ctx, payee) if payee else None
    if payee_id is not None and len(pending_ids) > 1:
        click.echo("Error: --payee can only be used when posting a single transaction.", err=True)
        ctx.exit(1)

    try:
        if len(pending_ids) == 1:
            posted = [service.post_pending(pending_ids[0], category_id=category_id, payee_id=payee_id)]
        else:
            posted = service.post_many({pending_id: category_id for pending_id in pending_ids})
    except ValueError as e:
        handle_domain_error(ctx, e)

    for pending_id, transaction_id in zip(pending_ids, posted):
        click.echo(f"Posted pending transaction {pending_id} as transaction {transaction_id}")


@transaction_group.command("add")
@click.option("--account", required=True, help="Source account name or ID")
@click.option("--date", "txn_date", default="today", help="Transaction date")
@click.option("--amount", required=True, help="Signed amount (e.g., -50.00)")
@click.option("--category", required=True, help="Chart account name or ID")
@click.option("--description", default="", help="Description")
@click.option("--payee", help="Payee name or ID")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    txn_date: str,
    amount: str,
    category: str,
    description: str,
    payee: str | None,
):
    """Post a transaction directly, without a pending step.

    Examples:
        switchbooks transaction add --account Checking --amount -50 --category "Office Supplies"
    """
    service = TransactionService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    category_id = resolve_category_or_exit(ctx, category)
    payee_id = resolve_payee_or_exit(ctx, payee) if payee else None

    try:
        transaction_id = service.add_manual_transaction(
            source_account_id=account_id,
            date=parse_date(txn_date),
            amount=parse_amount(amount),
            category_id=category_id,
            description=description,
            payee_id=payee_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added transaction {transaction_id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "txn_date", help="Transaction date")
@click.option("--amount", help="Signed amount")
@click.option("--description", help="Description")
@click.option("--category", help="Chart account name or ID")
@click.option("--payee", help="Payee name or ID (empty string to clear)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    txn_date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    payee: str | None,
):
    """Edit a posted transaction; it is re-posted with the new values.

    Updates only the fields that are provided.
    """
    service = TransactionService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category) if category else None
    payee_id = resolve_payee_or_exit(ctx, payee) if payee else None

    try:
        service.update_transaction(
            transaction_id,
            date=parse_date(txn_date) if txn_date is not None else None,
            description=description,
            amount=parse_amount(amount) if amount is not None else None,
            category_id=category_id,
            payee_id=payee_id,
            clear_payee=payee == "",
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("undo")
@click.argument("transaction_ids", type=int, nargs=-1, required=True)
@click.pass_context
def undo_transactions(ctx, transaction_ids: tuple[int, ...]):
    """Move posted transactions back to pending."""
    service = TransactionService(ctx.obj["db"])

    try:
        pending_ids = service.undo_many(transaction_ids)
    except ValueError as e:
        handle_domain_error(ctx, e)

    for transaction_id, pending_id in zip(transaction_ids, pending_ids):
        click.echo(f"Undid transaction {transaction_id} (pending transaction {pending_id})")


@transaction_group.command("list")
@click.option("--account", help="Source account name or ID")
@click.option("--category", help="Chart account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    **period_flags: bool,
):
    """List posted transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = resolve_account_or_exit(ctx, account) if account else None
    category_id = resolve_category_or_exit(ctx, category) if category else None
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={name.replace("_", "-"): value for name, value in period_flags.items()},
    )

    transactions = service.list_transactions(
        source_account_id=account_id, start_date=start, end_date=end, category_id=category_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in SourceAccountService(db).list_accounts()}
    chart = {acc.id: acc.name for acc in ChartOfAccountsService(db).list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':<12} {'Account':<18} {'Debit':<20} {'Credit':<20} {'Description':<20}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        debit = "-- split --" if service.is_split(txn.id) else chart.get(txn.debit_account_id, "")
        credit = "" if service.is_split(txn.id) else chart.get(txn.credit_account_id, "")
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {f'${txn.amount:,.2f}':<12} "
            f"{accounts.get(txn.source_account_id, 'Unknown'):<18} {debit:<20} {credit:<20} "
            f"{(txn.description or '')[:20]:<20}"
        )

    click.echo("-" * 110)
    total_out = sum(txn.amount for txn in transactions if txn.amount < 0)
    total_in = sum(txn.amount for txn in transactions if txn.amount > 0)
    click.echo(
        f"{'TOTAL':<6} Out: ${abs(total_out):,.2f} | In: ${total_in:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a posted transaction and its ledger lines."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.require_transaction(transaction_id)
        lines = service.get_ledger_lines(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    chart = {acc.id: acc.name for acc in ChartOfAccountsService(db).list_accounts()}
    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Posted: {txn.posted_at}")
    click.echo("  Ledger lines:")
    for line in lines:
        click.echo(
            f"    {chart.get(line.chart_account_id, 'Unknown'):<25} "
            f"Dr {line.debit:>12,.2f}  Cr {line.credit:>12,.2f}  {line.description or ''}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
