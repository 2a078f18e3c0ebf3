"""Parsing of repeated --line options for journal entries and splits."""

import click

from switchbooks.cli.account_resolution import resolve_category_or_exit
from switchbooks.domain.entities import JournalLineInput
from switchbooks.utils.amount_parser import parse_non_negative_amount

LINE_HELP = "Entry line as CATEGORY:DEBIT:CREDIT[:DESCRIPTION] (repeatable)"


def parse_line_options(ctx: click.Context, raw_lines: tuple[str, ...]) -> list[JournalLineInput]:
    """Turn 'Software:120:0:License' style values into line inputs.

    CATEGORY may be a chart account name or ID. Blank debit or credit
    fields count as zero.
    """
    lines = []
    for raw in raw_lines:
        parts = raw.split(":", 3)
        if len(parts) < 3:
            click.echo(f"Error: Invalid line '{raw}'. Expected CATEGORY:DEBIT:CREDIT[:DESCRIPTION]", err=True)
            ctx.exit(1)
        category, debit, credit = parts[:3]
        description = parts[3] if len(parts) == 4 else ""

        try:
            debit_amount = parse_non_negative_amount(debit)
            credit_amount = parse_non_negative_amount(credit)
        except ValueError as e:
            click.echo(f"Error: Invalid line '{raw}': {e}", err=True)
            ctx.exit(1)

        lines.append(
            JournalLineInput(
                category_id=resolve_category_or_exit(ctx, category) if category.strip() else None,
                debit=debit_amount,
                credit=credit_amount,
                description=description,
            )
        )
    return lines
