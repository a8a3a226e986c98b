"""CLI helpers for current-month resolution."""

import click

from squirrel.utils.date_parser import current_year_month, parse_year_month


def resolve_cli_month(ctx: click.Context) -> str:
    """Return the ``YYYYMM`` the command should treat as the current month.

    Uses the group's --month option (or SQUIRREL_NOW_YYYYMM) when given,
    otherwise the local clock.
    """
    month = ctx.obj.get("month")
    if not month:
        return current_year_month()

    try:
        return parse_year_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)
