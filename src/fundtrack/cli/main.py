"""Main CLI entry point."""

import click
from fundtrack.database.factories import create_sqlite_database
from fundtrack.log import configure_logging
from fundtrack.storage.local import create_local_blob_store
from fundtrack.cli.runtime import AppContext

# Import and register all commands at module level
from fundtrack.cli.commands import (
    account,
    category,
    config,
    income,
    purchase,
    summary,
    user,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FUNDTRACK_DB_PATH environment variable)",
    envvar="FUNDTRACK_DB_PATH",
)
@click.option(
    "--storage-path",
    type=click.Path(file_okay=False),
    help="Directory for receipts and vouchers (overrides FUNDTRACK_STORAGE_PATH)",
    envvar="FUNDTRACK_STORAGE_PATH",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    help="ID of the signed-in user (overrides FUNDTRACK_USER)",
    envvar="FUNDTRACK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="FUNDTRACK_LOG_LEVEL",
    help="Logging level",
)
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, storage_path: str | None, user_id: int | None, log_level: str, log_json: bool):
    """Fundtrack - Purchase approvals and income tracking for small organizations.

    Purchase managers submit purchases, administrators and treasurers approve
    or reject them, and income deposits are registered against accounts.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level, json_output=log_json)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["app"] = AppContext(db, create_local_blob_store(storage_path), user_id)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
config.register_commands(cli)
income.register_commands(cli)
purchase.register_commands(cli)
summary.register_commands(cli)
user.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
