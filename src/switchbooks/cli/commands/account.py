"""Source account management commands."""

import click

from switchbooks.cli.account_resolution import resolve_account_or_exit
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.entities import AccountType
from switchbooks.domain.source_account import SourceAccountService
from switchbooks.utils.amount_parser import parse_amount

KIND_CHOICES = {"bank": AccountType.ASSET, "credit-card": AccountType.LIABILITY}


@click.group()
def account_group():
    """Manage bank and credit-card accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--kind",
    type=click.Choice(sorted(KIND_CHOICES), case_sensitive=False),
    default="bank",
    show_default=True,
    help="'bank' accounts are assets, 'credit-card' accounts are liabilities",
)
@click.option("--balance", default="0", help="Current balance reported by the bank")
@click.option("--connected", is_flag=True, help="Account is fed by a bank connection")
@click.pass_context
def create_account(ctx, name: str, kind: str, balance: str, connected: bool):
    """Create a source account and its chart-of-accounts row.

    Examples:
        switchbooks account create "Checking"
        switchbooks account create "Amex" --kind credit-card --balance -120.50
    """
    service = SourceAccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            name=name,
            kind=KIND_CHOICES[kind.lower()],
            current_balance=parse_amount(balance),
            is_manual=not connected,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all source accounts with bank and ledger balances."""
    service = SourceAccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        try:
            ledger = f"${service.get_ledger_balance(acc.id):,.2f}"
        except ValueError:
            ledger = "n/a"
        source = "manual" if acc.is_manual else "connected"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.kind.value:9s} | {source:9s} | "
            f"Bank: ${acc.current_balance:,.2f} | Ledger: {ledger}"
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account (and its chart-of-accounts row).

    ACCOUNT can be an account name or ID.
    """
    service = SourceAccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)

    try:
        service.rename_account(account_id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name}'")


@account_group.command("set-balance")
@click.argument("account", metavar="ACCOUNT")
@click.argument("balance")
@click.pass_context
def set_balance(ctx, account: str, balance: str) -> None:
    """Record the balance reported by the bank."""
    service = SourceAccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)

    try:
        service.set_current_balance(account_id, parse_amount(balance))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Balance updated to ${parse_amount(balance):,.2f}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. The account can only be deleted
    when it has no pending or posted transactions and its chart row is not
    used by journal entries.
    """
    service = SourceAccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
