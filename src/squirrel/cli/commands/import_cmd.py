"""Ledger source import command."""

import json

import click

from squirrel.cli.error_handling import handle_domain_error
from squirrel.cli.month_option import resolve_cli_month
from squirrel.domain.errors import DomainError
from squirrel.domain.ledger_service import import_result_to_dict


@click.command("import")
@click.argument("source_files", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def import_sources(ctx, source_files: tuple[str, ...], as_json: bool):
    """Import transactions from one or more ledger files.

    Transactions already imported (same txn: identifier) are skipped.
    """
    service = ctx.obj["service"]
    month = resolve_cli_month(ctx)

    try:
        result = service.import_sources(month, list(source_files))
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(json.dumps(import_result_to_dict(result), indent=2))
        return

    stats = result.stats
    click.echo("\nImport complete:")
    click.echo(f"  Imported: {stats.imported} transactions")
    click.echo(f"  Skipped: {stats.skipped_duplicates} duplicates")
    click.echo(f"  Archived: {stats.archived} to earlier months")
    if not result.parse.ok:
        click.echo(
            f"  Active ledger has {len(result.parse.diagnostics)} diagnostics", err=True
        )


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_sources)
