"""Manual journal entry commands."""

import click

from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.cli.line_options import LINE_HELP, parse_line_options
from switchbooks.domain.chart import ChartOfAccountsService
from switchbooks.domain.manual_journal import ManualJournalService
from switchbooks.utils.date_parser import parse_date


@click.group()
def journal_group():
    """Manage manual journal entries."""
    pass


@journal_group.command("create")
@click.option("--date", "entry_date", default="today", help="Entry date")
@click.option("--line", "raw_lines", multiple=True, required=True, help=LINE_HELP)
@click.option("--reference", help="Reference number (generated if omitted)")
@click.pass_context
def create_entry(ctx, entry_date: str, raw_lines: tuple[str, ...], reference: str | None):
    """Create a balanced manual journal entry.

    Examples:
        switchbooks journal create --line "Equipment:1500:0:Laptop" --line "Owner's Investment:0:1500"
    """
    service = ManualJournalService(ctx.obj["db"])
    lines = parse_line_options(ctx, raw_lines)

    try:
        reference_number = service.create_entry(parse_date(entry_date), lines, reference_number=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created journal entry {reference_number}")


@journal_group.command("update")
@click.argument("reference_number")
@click.option("--date", "entry_date", required=True, help="Entry date")
@click.option("--line", "raw_lines", multiple=True, required=True, help=LINE_HELP)
@click.pass_context
def update_entry(ctx, reference_number: str, entry_date: str, raw_lines: tuple[str, ...]):
    """Replace every line of a journal entry."""
    service = ManualJournalService(ctx.obj["db"])
    lines = parse_line_options(ctx, raw_lines)

    try:
        service.update_entry(reference_number, parse_date(entry_date), lines)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated journal entry {reference_number}")


@journal_group.command("delete")
@click.argument("reference_number")
@click.pass_context
def delete_entry(ctx, reference_number: str):
    """Delete a journal entry."""
    service = ManualJournalService(ctx.obj["db"])
    try:
        deleted = service.delete_entry(reference_number)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted journal entry {reference_number} ({deleted} lines)")


@journal_group.command("show")
@click.argument("reference_number")
@click.pass_context
def show_entry(ctx, reference_number: str):
    """Show the lines of a journal entry."""
    db = ctx.obj["db"]
    service = ManualJournalService(db)
    try:
        lines = service.get_entry(reference_number)
    except ValueError as e:
        handle_domain_error(ctx, e)

    chart = {acc.id: acc.name for acc in ChartOfAccountsService(db).list_accounts()}
    click.echo(f"\nJournal entry {reference_number} ({lines[0].date}):")
    for line in lines:
        click.echo(
            f"  {chart.get(line.category_id, 'Unknown'):<25} "
            f"Dr {line.debit:>12,.2f}  Cr {line.credit:>12,.2f}  {line.description or ''}"
        )
    click.echo(
        f"  {'TOTAL':<25} Dr {sum(line.debit for line in lines):>12,.2f}  Cr {sum(line.credit for line in lines):>12,.2f}"
    )


@journal_group.command("list")
@click.pass_context
def list_entries(ctx):
    """List journal entry reference numbers."""
    service = ManualJournalService(ctx.obj["db"])
    references = service.list_references()
    if not references:
        click.echo("No journal entries found.")
        return
    for reference_number in references:
        click.echo(reference_number)


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
