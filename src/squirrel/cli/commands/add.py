"""Add transaction command."""

import click

from squirrel.cli.error_handling import handle_domain_error
from squirrel.cli.month_option import resolve_cli_month
from squirrel.domain.entities import ManualPostingInput, ManualTransactionInput
from squirrel.domain.errors import DomainError
from squirrel.utils.amount_parser import to_ledger_amount
from squirrel.utils.date_parser import parse_ledger_datetime


def parse_posting_option(ctx: click.Context, value: str) -> ManualPostingInput:
    """Parse ``"ACCOUNT AMOUNT COMMODITY [REMAINDER]"`` or exit."""
    parts = value.split(None, 3)
    if len(parts) < 3:
        click.echo(
            f"Error: Invalid posting '{value}': expected ACCOUNT AMOUNT COMMODITY [REMAINDER]",
            err=True,
        )
        ctx.exit(1)

    try:
        amount = to_ledger_amount(parts[1])
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    return ManualPostingInput(
        account=parts[0],
        amount=amount,
        commodity=parts[2],
        remainder=parts[3] if len(parts) > 3 else None,
    )


@click.command("add")
@click.option(
    "--date",
    "date_str",
    required=True,
    help="Transaction date (YYYY-MM-DD, full datetime, or relative like 'today')",
)
@click.option("--payee", required=True, help="Payee")
@click.option("--narration", default="", help="Narration")
@click.option("--status", type=click.Choice(["*", "!"]), help="Status marker")
@click.option(
    "--posting",
    "postings",
    multiple=True,
    required=True,
    help='Posting as "ACCOUNT AMOUNT COMMODITY [REMAINDER]" (repeatable)',
)
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    payee: str,
    narration: str,
    status: str | None,
    postings: tuple[str, ...],
):
    """Add a transaction manually.

    Examples:
        squirrel add --date 2026-01-15 --status "*" --payee "Binance" --narration "Buy SOL" \\
            --posting "assets:exchange:binance:sol 10 SOL" \\
            --posting "assets:cash:usd -230.10 USD"
    """
    store = ctx.obj["store"]
    month = resolve_cli_month(ctx)

    try:
        datetime = parse_ledger_datetime(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    manual = ManualTransactionInput(
        datetime=datetime,
        payee=payee,
        narration=narration,
        status=status,
        postings=tuple(parse_posting_option(ctx, p) for p in postings),
    )

    try:
        txn_id = store.add_manual_transaction(month, manual)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction txn:{txn_id}")
    click.echo(f"  Date: {datetime}")
    click.echo(f"  Payee: {payee}")
    if narration:
        click.echo(f"  Narration: {narration}")
    click.echo(f"  Postings: {len(manual.postings)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
