"""Payee commands."""

import click

from switchbooks.cli.account_resolution import resolve_payee_or_exit
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.payee import PayeeService


@click.group()
def payee_group():
    """Manage payees."""
    pass


@payee_group.command("create")
@click.argument("name")
@click.pass_context
def create_payee(ctx, name: str):
    """Create a payee."""
    service = PayeeService(ctx.obj["db"])
    try:
        payee_id = service.create_payee(name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created payee '{name}' (ID: {payee_id})")


@payee_group.command("list")
@click.pass_context
def list_payees(ctx):
    """List all payees."""
    payees = PayeeService(ctx.obj["db"]).list_payees()
    if not payees:
        click.echo("No payees found.")
        return
    for payee in payees:
        click.echo(f"ID: {payee.id:3d} | {payee.name}")


@payee_group.command("rename")
@click.argument("payee")
@click.argument("new_name")
@click.pass_context
def rename_payee(ctx, payee: str, new_name: str):
    """Rename a payee. PAYEE can be a name or ID."""
    service = PayeeService(ctx.obj["db"])
    payee_id = resolve_payee_or_exit(ctx, payee)
    try:
        service.rename_payee(payee_id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed payee {payee_id} to '{new_name.strip()}'")


@payee_group.command("delete")
@click.argument("payee")
@click.pass_context
def delete_payee(ctx, payee: str):
    """Delete a payee. PAYEE can be a name or ID."""
    service = PayeeService(ctx.obj["db"])
    payee_id = resolve_payee_or_exit(ctx, payee)
    try:
        service.delete_payee(payee_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted payee {payee_id}")


def register_commands(cli):
    """Register payee commands with main CLI."""
    cli.add_command(payee_group, name="payee")
