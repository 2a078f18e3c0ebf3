"""Financial report commands."""

from datetime import date
from decimal import Decimal

import click

from switchbooks.cli.date_filters import period_options, resolve_cli_date_range
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.entities import ReportRow
from switchbooks.domain.report import ReportService
from switchbooks.utils.date_parser import parse_date

INDENT_SIZE = 4
NAME_WIDTH = 50
AMOUNT_WIDTH = 16


def _money(amount: Decimal) -> str:
    if amount < 0:
        return f"(${-amount:,.2f})"
    return f"${amount:,.2f}"


def _echo_line(label: str, amount: Decimal, indent: int = 0) -> None:
    indent_str = " " * (INDENT_SIZE * indent)
    click.echo(f"{indent_str}{label:<{NAME_WIDTH - INDENT_SIZE * indent}} {_money(amount):>{AMOUNT_WIDTH}}")


def _echo_section(title: str, rows: tuple[ReportRow, ...], total: Decimal) -> None:
    click.echo(title)
    for row in rows:
        _echo_line(row.account.name, row.total, indent=row.depth + 1)
    _echo_line(f"Total {title}", total)
    click.echo()


def _describe_period(start: date | None, end: date | None) -> str:
    if start and end:
        return f"{start} to {end}"
    if start:
        return f"from {start}"
    if end:
        return f"through {end}"
    return "all dates"


def _date_range(ctx, start_date, end_date, period_flags):
    return resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={name.replace("_", "-"): value for name, value in period_flags.items()},
    )


@click.group()
def report_group():
    """Profit and loss, balance sheet and cash flow reports."""
    pass


@report_group.command("pnl")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def profit_and_loss(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """Show the profit and loss report.

    Examples:
        switchbooks report pnl --this-year
        switchbooks report pnl --start-date 2024-01-01 --end-date 2024-03-31
    """
    start, end = _date_range(ctx, start_date, end_date, period_flags)
    try:
        report = ReportService(ctx.obj["db"]).profit_and_loss(start_date=start, end_date=end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Profit and Loss ({_describe_period(start, end)})")
    click.echo()
    _echo_section("Revenue", report.revenue, report.total_revenue)
    _echo_section("Cost of Goods Sold", report.cogs, report.total_cogs)
    _echo_line("Gross Profit", report.gross_profit)
    click.echo()
    _echo_section("Expenses", report.expenses, report.total_expenses)
    _echo_line("Net Income", report.net_income)


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (YYYY-MM-DD or relative like 'last month'); defaults to today")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show the balance sheet."""
    try:
        as_of_date = parse_date(as_of) if as_of else date.today()
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    sheet = ReportService(ctx.obj["db"]).balance_sheet(as_of=as_of_date)

    click.echo(f"Balance Sheet (as of {as_of_date})")
    click.echo()
    _echo_section("Assets", sheet.assets, sheet.total_assets)
    _echo_section("Liabilities", sheet.liabilities, sheet.total_liabilities)
    click.echo("Equity")
    for row in sheet.equity:
        _echo_line(row.account.name, row.total, indent=row.depth + 1)
    _echo_line("Retained Earnings", sheet.retained_earnings, indent=1)
    _echo_line("Total Equity", sheet.total_equity)
    click.echo()
    _echo_line("Total Liabilities & Equity", sheet.total_liabilities_and_equity)


@report_group.command("cash-flow")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def cash_flow(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """Show the cash flow report."""
    start, end = _date_range(ctx, start_date, end_date, period_flags)
    try:
        flow = ReportService(ctx.obj["db"]).cash_flow(start_date=start, end_date=end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Cash Flow ({_describe_period(start, end)})")
    click.echo()
    _echo_line("Operating Activities (Net Income)", flow.operating)
    _echo_line("Investing Activities", flow.investing)
    _echo_line("Financing Activities", flow.financing)
    click.echo()
    _echo_line("Net Change in Cash", flow.net_change)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
