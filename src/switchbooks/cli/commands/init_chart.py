"""Initialize the default chart of accounts and payees."""

import click

from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.entities import AccountType
from switchbooks.domain.payee import PayeeService

# (name, type, parent name)
DEFAULT_CHART = [
    ("Sales", AccountType.REVENUE, None),
    ("Discounts", AccountType.REVENUE, "Sales"),
    ("Merchandise", AccountType.COGS, None),
    ("Travel", AccountType.EXPENSE, None),
    ("Operating Expenses", AccountType.EXPENSE, None),
    ("Payroll Expenses", AccountType.EXPENSE, None),
    ("Meals & Entertainment", AccountType.EXPENSE, None),
    ("Airfare", AccountType.EXPENSE, "Travel"),
    ("Lodging", AccountType.EXPENSE, "Travel"),
    ("Software", AccountType.EXPENSE, "Operating Expenses"),
    ("Supplies", AccountType.EXPENSE, "Operating Expenses"),
    ("Bank Charges", AccountType.EXPENSE, "Operating Expenses"),
    ("Payroll Wages", AccountType.EXPENSE, "Payroll Expenses"),
    ("Payroll Taxes", AccountType.EXPENSE, "Payroll Expenses"),
    ("Current Assets", AccountType.ASSET, None),
    ("Fixed Assets", AccountType.ASSET, None),
    ("Equipment", AccountType.ASSET, "Fixed Assets"),
    ("Current Liabilities", AccountType.LIABILITY, None),
    ("Owner's Equity", AccountType.EQUITY, None),
    ("Owner's Investment", AccountType.EQUITY, "Owner's Equity"),
    ("Owner's Distribution", AccountType.EQUITY, "Owner's Equity"),
]

DEFAULT_PAYEES = [
    "Amazon",
    "Costco",
    "Home Depot",
    "Apple",
    "Microsoft",
    "Zoom",
    "Adobe",
    "Stripe",
    "Square",
    "PayPal",
    "Gusto",
    "ADP",
    "Uber",
    "Delta Airlines",
    "Starbucks",
]


@click.command("init-chart")
@click.option("--with-payees", is_flag=True, help="Also create a set of common payees")
@click.pass_context
def init_chart(ctx, with_payees: bool):
    """Initialize database with the default chart of accounts."""
    db = ctx.obj["db"]
    service = ChartOfAccountsService(db)

    existing = [account for account in service.list_accounts() if account.linked_source_account_id is None]
    if existing:
        click.echo("Chart accounts already exist. Nothing to do.")
        return

    click.echo("Creating default chart of accounts...")
    created = 0
    errors = 0

    # Roots first so children can find their parent by name
    ordered = sorted(DEFAULT_CHART, key=lambda row: row[2] is not None)
    for name, account_type, parent_name in ordered:
        try:
            parent_id = service.require_account_by_name(parent_name).id if parent_name else None
            service.create_account(name=name, account_type=account_type, parent_id=parent_id)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create account '{name}': {e}", err=True)
            errors += 1

    if with_payees:
        payee_service = PayeeService(db)
        missing = [name for name in DEFAULT_PAYEES if payee_service.get_payee_by_name(name) is None]
        for payee_name in missing:
            payee_service.create_payee(payee_name)
        click.echo(f"Created {len(missing)} payees.")

    if errors == 0:
        click.echo(f"Successfully created {created} chart accounts.")
    else:
        click.echo(f"Created {created} chart accounts with {errors} errors.")


def register_commands(cli):
    """Register init-chart command with main CLI."""
    cli.add_command(init_chart)
