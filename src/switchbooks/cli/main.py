"""Main CLI entry point."""

import logging

import click

from switchbooks.cli.commands import (
    account,
    automation,
    chart,
    init_chart,
    journal,
    payee,
    pending,
    report,
    transaction,
)
from switchbooks.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

LOG_LEVEL_ENV_VAR = "SWITCHBOOKS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send switchbooks log records to stderr at the given level."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("switchbooks").setLevel(level.upper())


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar=LOG_LEVEL_ENV_VAR,
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Switchbooks - double-entry bookkeeping for small businesses.

    Record bank and credit-card transactions, categorize them against a
    chart of accounts and post them to a balanced ledger.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Only open the database when a command runs (not for --help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


account.register_commands(cli)
chart.register_commands(cli)
init_chart.register_commands(cli)
pending.register_commands(cli)
transaction.register_commands(cli)
journal.register_commands(cli)
payee.register_commands(cli)
automation.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
