"""Standalone ledger file checker.

Prints ``OK`` and exits 0 when the file parses cleanly, prints diagnostics
to stderr and exits 1 otherwise. Usage and I/O errors exit 2.
"""

import click

from squirrel.cli.commands.check import check_file


@click.command("ledger-parse")
@click.argument("file_path", metavar="FILE")
@click.pass_context
def ledger_parse(ctx, file_path: str):
    """Validate a .transactions FILE."""
    check_file(ctx, file_path)


def main():
    """Entry point for the ledger-parse script."""
    ledger_parse()


if __name__ == "__main__":
    main()
