"""Tests for canonical text rendering."""

from squirrel.domain.entities import Posting, Transaction
from squirrel.domain.identity import extract_txn_id
from squirrel.domain.parser import parse_ledger
from squirrel.domain.rendering import (
    account_declaration_to_text,
    posting_to_text,
    transaction_to_text,
)

TXN = Transaction(
    date="2026-01-15",
    datetime="2026-01-15T09:30:00Z",
    status="*",
    payee='Bob "B"',
    narration="a\\b",
    postings=(
        Posting("assets:cash:usd", -5.0, "-5.00", "USD"),
        Posting("expenses:food", 5.0, "5.00", "USD", "{{ note:lunch }}"),
    ),
)


def test_transaction_to_text():
    """Header, postings and trailing newline are rendered canonically."""
    assert transaction_to_text(TXN, "txn:1") == (
        '2026-01-15T09:30:00Z * "Bob \\"B\\"" "a\\\\b" ; txn:1\n'
        "    assets:cash:usd -5.00 USD\n"
        "    expenses:food 5.00 USD {{ note:lunch }}\n"
    )


def test_transaction_to_text_optional_fields():
    """Missing status and narration are omitted."""
    txn = Transaction(
        date="2026-01-15",
        datetime="2026-01-15",
        payee="Shop",
        postings=(Posting("assets:cash", 1.0, "1", "USD"),),
    )

    assert transaction_to_text(txn, "txn:x") == (
        '2026-01-15 "Shop" ; txn:x\n    assets:cash 1 USD\n'
    )


def test_posting_to_text_blank_remainder():
    """A whitespace-only remainder is dropped."""
    posting = Posting("assets:cash", 1.0, "1.0", "USD", "   ")

    assert posting_to_text(posting) == "    assets:cash 1.0 USD"


def test_render_then_parse_round_trip():
    """Re-parsing rendered text reproduces the transaction."""
    result = parse_ledger(transaction_to_text(TXN, "src:x, txn:abc"))

    assert result.ok
    parsed = result.transactions[0]
    assert parsed.payee == TXN.payee
    assert parsed.narration == TXN.narration
    assert parsed.postings == TXN.postings
    assert parsed.datetime == TXN.datetime
    assert extract_txn_id(parsed.meta) == "abc"


def test_account_declaration_to_text():
    """Declarations render with an optional opening line."""
    assert account_declaration_to_text("assets:a", "AUD", "100.00") == (
        "account assets:a AUD\n    opening 100.00 AUD\n"
    )
    assert account_declaration_to_text("assets:a", None, "5") == (
        "account assets:a\n    opening 5 USD\n"
    )
    assert account_declaration_to_text("assets:a") == "account assets:a\n"
