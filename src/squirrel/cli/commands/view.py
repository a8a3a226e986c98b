"""Active ledger view command."""

import json

import click

from squirrel.cli.error_handling import handle_domain_error
from squirrel.cli.month_option import resolve_cli_month
from squirrel.domain.entities import ParseResult
from squirrel.domain.errors import DomainError
from squirrel.domain.ledger_service import result_to_dict


def format_amount(amount: float) -> str:
    return f"{amount:,.2f}"


def echo_parse_result(result: ParseResult) -> None:
    """Print transactions, balances and diagnostics of a parse result."""
    if not result.transactions and not result.balances:
        click.echo("Active ledger is empty.")
    else:
        click.echo(f"\nTransactions ({len(result.transactions)}):")
        click.echo("-" * 60)
        for txn in result.transactions:
            status = f"{txn.status} " if txn.status else ""
            payee = txn.payee or ""
            narration = f" - {txn.narration}" if txn.narration else ""
            click.echo(f"{txn.datetime} {status}{payee}{narration}")
            for posting in txn.postings:
                click.echo(
                    f"    {posting.account:40s} {posting.amount_text:>14s} {posting.commodity}"
                )

        click.echo("\nBalances:")
        click.echo("-" * 60)
        for balance in result.balances:
            if not balance.amounts:
                click.echo(f"{balance.account:40s} {'-':>14s}")
            for commodity, amount in balance.amounts:
                click.echo(f"{balance.account:40s} {format_amount(amount):>14s} {commodity}")

    if result.diagnostics:
        click.echo(f"\nDiagnostics ({len(result.diagnostics)}):", err=True)
        for d in result.diagnostics:
            click.echo(f"  line {d.line}, column {d.column}: {d.message}", err=True)


@click.command("show")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def show(ctx, as_json: bool):
    """Show the active ledger's transactions and balances.

    The ledger is rotated first if it belongs to an earlier month.
    """
    service = ctx.obj["service"]
    month = resolve_cli_month(ctx)

    try:
        result = service.load_active_ledger(month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(json.dumps(result_to_dict(result), indent=2))
    else:
        echo_parse_result(result)


def register_commands(cli):
    """Register show command with main CLI."""
    cli.add_command(show)
