"""Ledger rotation command."""

import click

from squirrel.cli.error_handling import handle_domain_error
from squirrel.cli.month_option import resolve_cli_month
from squirrel.domain.errors import DomainError


@click.command("rotate")
@click.pass_context
def rotate_ledger(ctx):
    """Archive the active ledger if it belongs to an earlier month."""
    service = ctx.obj["service"]
    month = resolve_cli_month(ctx)

    try:
        destination = service.rotate_ledger(month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if destination is None:
        click.echo(f"Active ledger is current for {month}; nothing to rotate.")
    else:
        click.echo(f"Rotated active ledger to {destination}")


def register_commands(cli):
    """Register rotate command with main CLI."""
    cli.add_command(rotate_ledger)
