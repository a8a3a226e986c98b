"""Ledger file check command."""

import click

from squirrel.domain.errors import NotFoundError
from squirrel.domain.ledger_service import parse_file


def check_file(ctx: click.Context, file_path: str) -> None:
    """Parse a file and exit 0 (OK), 1 (diagnostics) or 2 (unreadable)."""
    try:
        result = parse_file(file_path)
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)

    if result.ok:
        click.echo("OK")
        ctx.exit(0)

    click.echo("Parse failed with diagnostics:", err=True)
    for diagnostic in result.diagnostics:
        click.echo(
            f"line {diagnostic.line}, column {diagnostic.column}: {diagnostic.message}",
            err=True,
        )
    ctx.exit(1)


@click.command("check")
@click.argument("file_path", metavar="FILE")
@click.pass_context
def check(ctx, file_path: str):
    """Validate a ledger FILE without importing it.

    Examples:
        squirrel check binance-2026-01.transactions
    """
    check_file(ctx, file_path)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check)
