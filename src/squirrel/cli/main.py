"""Main CLI entry point."""

import click

from squirrel.cli.logging_config import configure_logging
from squirrel.domain.ledger_service import LedgerService
from squirrel.storage.factories import BASE_DIR_ENV, create_local_store

# Import and register all commands at module level
from squirrel.cli.commands import (
    account,
    add,
    check,
    import_cmd,
    rotate,
    view,
)


@click.group()
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False),
    help=f"Generated ledger directory (overrides {BASE_DIR_ENV} environment variable)",
    envvar=BASE_DIR_ENV,
)
@click.option(
    "--month",
    help="Current month as YYYYMM, YYYY-MM or a date (defaults to today)",
    envvar="SQUIRREL_NOW_YYYYMM",
)
@click.option("-v", "--verbose", is_flag=True, help="Log store activity to stderr")
@click.pass_context
def cli(ctx, base_dir: str | None, month: str | None, verbose: bool):
    """Squirrel - plain-text double-entry ledger.

    Validate ledger files, import them into the generated ledger with
    duplicate detection, and archive the active ledger month by month.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Only build the store when actually running a command
    if ctx.invoked_subcommand is not None:
        store = create_local_store(base_dir)
        ctx.obj["store"] = store
        ctx.obj["service"] = LedgerService(store)
        ctx.obj["month"] = month


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
check.register_commands(cli)
import_cmd.register_commands(cli)
rotate.register_commands(cli)
view.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
