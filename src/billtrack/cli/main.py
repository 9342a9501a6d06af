"""Main CLI entry point."""

import logging

import click
from billtrack.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from billtrack.cli.commands import (
    init_categories,
    user,
    partner,
    category,
    invoice,
    dashboard,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Billtrack - Invoice tracking for small businesses.

    Record payable and receivable invoices for suppliers and clients and
    follow what is due, overdue and settled.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_categories.register_commands(cli)
user.register_commands(cli)
partner.register_commands(cli)
category.register_commands(cli)
invoice.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
