"""Chart of accounts commands."""

import click

from switchbooks.cli.account_resolution import resolve_category_or_exit
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.entities import AccountType, ChartTreeNode

TYPE_CHOICES = [account_type.value for account_type in AccountType]


def print_chart_tree(nodes: list[ChartTreeNode]) -> None:
    """Print chart nodes indented by depth."""
    for node in nodes:
        account = node.account
        prefix = "  " * node.depth
        subtype = f" [{account.subtype}]" if account.subtype else ""
        linked = " (source account)" if account.linked_source_account_id is not None else ""
        click.echo(f"{prefix}{account.name} (ID: {account.id}) - {account.type.value}{subtype}{linked}")


@click.group()
def chart_group():
    """Manage the chart of accounts."""
    pass


@chart_group.command("list")
@click.pass_context
def list_chart(ctx):
    """List all chart accounts as a tree."""
    service = ChartOfAccountsService(ctx.obj["db"])

    nodes = service.get_tree()
    if not nodes:
        click.echo("No chart accounts found. Run 'init-chart' to create the default chart.")
        return

    click.echo("\nChart of accounts:")
    print_chart_tree(nodes)


@chart_group.command("search")
@click.argument("query")
@click.pass_context
def search_chart(ctx, query: str):
    """Search accounts by name, type, subtype or parent name."""
    service = ChartOfAccountsService(ctx.obj["db"])

    nodes = service.search(query)
    if not nodes:
        click.echo(f"No chart accounts match '{query}'.")
        return
    print_chart_tree(nodes)


@chart_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    required=True,
    help="Account type",
)
@click.option("--subtype", help="Optional subtype")
@click.option("--parent", help="Parent account name or ID (must be a root of the same type)")
@click.pass_context
def create_chart_account(ctx, name: str, account_type: str, subtype: str | None, parent: str | None):
    """Create a chart account.

    Examples:
        switchbooks chart create "Operating Expenses" --type Expense
        switchbooks chart create "Software" --type Expense --parent "Operating Expenses"
    """
    service = ChartOfAccountsService(ctx.obj["db"])
    parent_id = resolve_category_or_exit(ctx, parent) if parent else None

    try:
        account_id = service.create_account(
            name=name, account_type=account_type, subtype=subtype, parent_id=parent_id
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    parent_str = f" under '{parent}'" if parent else ""
    click.echo(f"Created chart account '{name}'{parent_str} (ID: {account_id})")


@chart_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New name")
@click.option("--type", "account_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), help="New type")
@click.option("--subtype", help="New subtype (empty string to clear)")
@click.option("--parent", help="New parent account name or ID")
@click.option("--no-parent", is_flag=True, help="Make the account a root account")
@click.pass_context
def update_chart_account(
    ctx,
    account: str,
    name: str | None,
    account_type: str | None,
    subtype: str | None,
    parent: str | None,
    no_parent: bool,
):
    """Update a chart account. ACCOUNT can be a name or ID."""
    service = ChartOfAccountsService(ctx.obj["db"])
    account_id = resolve_category_or_exit(ctx, account)
    parent_id = resolve_category_or_exit(ctx, parent) if parent else None

    try:
        service.update_account(
            account_id,
            name=name,
            account_type=account_type,
            subtype=subtype,
            parent_id=parent_id,
            clear_parent=no_parent,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated chart account {account_id}")


@chart_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_chart_account(ctx, account: str):
    """Delete an unused chart account. ACCOUNT can be a name or ID."""
    service = ChartOfAccountsService(ctx.obj["db"])
    account_id = resolve_category_or_exit(ctx, account)

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted chart account {account_id}")


def register_commands(cli):
    """Register chart commands with main CLI."""
    cli.add_command(chart_group, name="chart")
