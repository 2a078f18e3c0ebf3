"""Automation rule commands."""

import click

from switchbooks.cli.account_resolution import resolve_account_or_exit
from switchbooks.cli.error_handling import handle_domain_error
from switchbooks.domain.automation import AutomationService
from switchbooks.domain.entities import AutomationType, ConditionType


@click.group()
def automation_group():
    """Manage rules that categorize pending transactions."""
    pass


@automation_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "automation_type",
    type=click.Choice([t.value for t in AutomationType]),
    default=AutomationType.CATEGORY.value,
    show_default=True,
    help="What the rule assigns",
)
@click.option(
    "--condition",
    type=click.Choice([c.value for c in ConditionType]),
    default=ConditionType.CONTAINS.value,
    show_default=True,
    help="How the description is matched",
)
@click.option("--match", "condition_value", required=True, help="Text to look for in the description")
@click.option("--assign", "action_value", required=True, help="Chart account or payee name to assign")
@click.option("--auto-add", is_flag=True, help="Post matching transactions immediately")
@click.option("--disabled", is_flag=True, help="Create the rule disabled")
@click.pass_context
def create_automation(
    ctx,
    name: str,
    automation_type: str,
    condition: str,
    condition_value: str,
    action_value: str,
    auto_add: bool,
    disabled: bool,
):
    """Create an automation rule.

    Examples:
        switchbooks automation create "Adobe" --match ADOBE --assign Software --auto-add
        switchbooks automation create "Uber payee" --type payee --match UBER --assign Uber
    """
    service = AutomationService(ctx.obj["db"])
    try:
        automation_id = service.create_automation(
            name=name,
            automation_type=automation_type,
            condition_type=condition,
            condition_value=condition_value,
            action_value=action_value,
            enabled=not disabled,
            auto_add=auto_add,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created automation '{name}' (ID: {automation_id})")


@automation_group.command("list")
@click.pass_context
def list_automations(ctx):
    """List automation rules."""
    automations = AutomationService(ctx.obj["db"]).list_automations()
    if not automations:
        click.echo("No automations found.")
        return
    for rule in automations:
        flags = []
        if not rule.enabled:
            flags.append("disabled")
        if rule.auto_add:
            flags.append("auto-add")
        suffix = f" ({', '.join(flags)})" if flags else ""
        click.echo(
            f"ID: {rule.id:3d} | {rule.name:20s} | {rule.automation_type.value:8s} | "
            f"{rule.condition_type.value} '{rule.condition_value}' -> {rule.action_value}{suffix}"
        )


@automation_group.command("update")
@click.argument("automation_id", type=int)
@click.option("--name", help="New rule name")
@click.option(
    "--type",
    "automation_type",
    type=click.Choice([t.value for t in AutomationType]),
    help="What the rule assigns",
)
@click.option(
    "--condition",
    type=click.Choice([c.value for c in ConditionType]),
    help="How the description is matched",
)
@click.option("--match", "condition_value", help="Text to look for in the description")
@click.option("--assign", "action_value", help="Chart account or payee name to assign")
@click.option("--auto-add/--no-auto-add", default=None, help="Post matching transactions immediately")
@click.pass_context
def update_automation(
    ctx,
    automation_id: int,
    name: str | None,
    automation_type: str | None,
    condition: str | None,
    condition_value: str | None,
    action_value: str | None,
    auto_add: bool | None,
):
    """Edit an automation rule. Only the given options change."""
    try:
        AutomationService(ctx.obj["db"]).update_automation(
            automation_id,
            name=name,
            automation_type=automation_type,
            condition_type=condition,
            condition_value=condition_value,
            action_value=action_value,
            auto_add=auto_add,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated automation {automation_id}")


def _set_enabled(ctx, automation_id: int, enabled: bool) -> None:
    try:
        AutomationService(ctx.obj["db"]).set_enabled(automation_id, enabled)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{'Enabled' if enabled else 'Disabled'} automation {automation_id}")


@automation_group.command("enable")
@click.argument("automation_id", type=int)
@click.pass_context
def enable_automation(ctx, automation_id: int):
    """Enable an automation rule."""
    _set_enabled(ctx, automation_id, True)


@automation_group.command("disable")
@click.argument("automation_id", type=int)
@click.pass_context
def disable_automation(ctx, automation_id: int):
    """Disable an automation rule."""
    _set_enabled(ctx, automation_id, False)


@automation_group.command("delete")
@click.argument("automation_id", type=int)
@click.pass_context
def delete_automation(ctx, automation_id: int):
    """Delete an automation rule."""
    try:
        AutomationService(ctx.obj["db"]).delete_automation(automation_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted automation {automation_id}")


@automation_group.command("apply")
@click.option("--account", help="Only apply to pending transactions of this source account")
@click.pass_context
def apply_automations(ctx, account: str | None):
    """Apply enabled rules to uncategorized pending transactions."""
    account_id = resolve_account_or_exit(ctx, account) if account else None
    result = AutomationService(ctx.obj["db"]).apply_automations(source_account_id=account_id)

    click.echo(
        f"Categorized {result['categorized']}, assigned payees to {result['payees']}, "
        f"posted {result['posted']} pending transaction(s)."
    )
    if result["errors"]:
        click.echo(f"\n{len(result['errors'])} error(s):", err=True)
        for error in result["errors"]:
            click.echo(f"  {error}", err=True)


def register_commands(cli):
    """Register automation commands with main CLI."""
    cli.add_command(automation_group, name="automation")
