"""Canonical text rendering of ledger entries."""

from typing import Optional

from squirrel.domain.entities import Posting, Transaction
from squirrel.domain.grammar import INDENT, quote


def posting_to_text(posting: Posting) -> str:
    """Render one posting line (without line terminator)."""
    text = f"{INDENT}{posting.account} {posting.amount_text} {posting.commodity}"
    remainder = (posting.remainder or "").strip()
    if remainder:
        text += f" {remainder}"
    return text


def transaction_to_text(txn: Transaction, meta: str) -> str:
    """Render a transaction with the given meta text.

    The result ends with a newline so that it forms a complete entry.
    """
    header = f"{txn.datetime} "
    if txn.status:
        header += f"{txn.status} "
    if txn.payee is not None:
        header += f"{quote(txn.payee)} "
    if txn.narration is not None:
        header += f"{quote(txn.narration)} "
    header += f"; {meta}"

    lines = [header]
    lines.extend(posting_to_text(posting) for posting in txn.postings)
    lines.append("")
    return "\n".join(lines)


def account_declaration_to_text(
    account: str,
    currency: Optional[str] = None,
    opening_balance: Optional[str] = None,
) -> str:
    """Render an ``account`` line and optional ``opening`` sub-declaration.

    The opening commodity defaults to USD when no currency is given.
    """
    text = f"account {account}"
    if currency:
        text += f" {currency}"
    text += "\n"
    if opening_balance is not None:
        text += f"{INDENT}opening {opening_balance} {currency or 'USD'}\n"
    return text
