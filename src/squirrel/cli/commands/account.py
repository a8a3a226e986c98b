"""Account declaration commands."""

import click

from squirrel.cli.error_handling import handle_domain_error
from squirrel.domain.errors import DomainError
from squirrel.utils.amount_parser import to_ledger_amount


@click.group("account")
def account_group():
    """Manage account declarations."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--currency", help="Default commodity of the account (e.g., AUD)")
@click.option("--opening", help="Opening balance (commodity defaults to USD)")
@click.pass_context
def add_account(ctx, name: str, currency: str | None, opening: str | None):
    """Declare an account in the active ledger.

    Examples:
        squirrel account add assets:CBA:smartaccess --currency AUD --opening 100.00
        squirrel account add expenses:food
    """
    service = ctx.obj["service"]

    opening_balance = None
    if opening is not None:
        try:
            opening_balance = to_ledger_amount(opening)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        result = service.add_account_declaration(name, currency, opening_balance)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Declared account '{name}'")
    if not result.ok:
        click.echo(
            f"Warning: active ledger has {len(result.diagnostics)} diagnostics", err=True
        )


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List accounts declared in the active ledger."""
    service = ctx.obj["service"]

    try:
        result = service.load_active_ledger()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.declarations:
        click.echo("No accounts declared.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for declaration in result.declarations:
        line = f"{declaration.account:40s} {declaration.default_commodity or '':6s}"
        if declaration.opening is not None:
            commodity, amount = declaration.opening
            line += f" opening {amount:,.2f} {commodity}"
        click.echo(line.rstrip())


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group)
