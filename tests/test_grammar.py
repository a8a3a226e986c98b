"""Tests for line classification and header tokenizing."""

import pytest

from squirrel.domain.grammar import (
    LineKind,
    classify_line,
    looks_like_header,
    quote,
    tokenize,
)


@pytest.mark.parametrize(
    "line,kind",
    [
        ("", LineKind.BLANK),
        ("   \t", LineKind.BLANK),
        ("; a comment", LineKind.DIRECTIVE),
        ("\t  ; indented comment", LineKind.DIRECTIVE),
        ("    ; comment inside a transaction", LineKind.DIRECTIVE),
        ("    assets:cash:usd 1 USD", LineKind.INDENTED),
        ("account assets:cash:usd USD", LineKind.ACCOUNT_DECLARATION),
        ("account", LineKind.ACCOUNT_DECLARATION),
        ("account ; only a comment", LineKind.ACCOUNT_DECLARATION),
        ("2026-01-15 * \"Shop\" ; txn:1", LineKind.TRANSACTION_HEADER),
        ("2026-01-15T09:30:00.123456+10:00 \"Shop\" ; txn:1", LineKind.TRANSACTION_HEADER),
        ("2026-01-15T09:30:00Z\t\"Shop\" ; txn:1", LineKind.TRANSACTION_HEADER),
    ],
)
def test_classify_line(line, kind):
    """Each line category is recognized."""
    assert classify_line(line) is kind


@pytest.mark.parametrize(
    "line",
    [
        "accounts assets:cash",
        "2026-01-15",
        "2026-1-15 \"Shop\" ; txn:1",
        "  2026-01-15 \"Shop\" ; txn:1",
        "2026-01-15T09:30 \"Shop\" ; txn:1",
        "\tassets:cash:usd 1 USD",
        "hello world",
    ],
)
def test_classify_line_unrecognized(line):
    """Lines that match no grammar rule are unrecognized."""
    assert classify_line(line) is LineKind.UNRECOGNIZED


def test_tokenize_quoted_and_bare_tokens():
    """Quoted runs form one token, other tokens split on whitespace."""
    assert tokenize('* "Binance" "Buy SOL" ') == ["*", "Binance", "Buy SOL"]
    assert tokenize("Shop  bought   things") == ["Shop", "bought", "things"]


def test_tokenize_escapes():
    """Backslash escapes quote and backslash inside quoted tokens."""
    assert tokenize(r'"Bob \"B\" Jones" "a\\b"') == ['Bob "B" Jones', "a\\b"]
    assert tokenize(r'"a\nb"') == ["a\\nb"]


def test_tokenize_unterminated_quote():
    """An unterminated quote runs to the end of the text."""
    assert tokenize('"open ended') == ["open ended"]


def test_tokenize_empty_quoted_token():
    """An empty quoted string is still a token."""
    assert tokenize('"" "x"') == ["", "x"]


def test_quote_escapes():
    """Quoting escapes backslashes and double quotes."""
    assert quote('Bob "B"') == '"Bob \\"B\\""'
    assert quote("a\\b") == '"a\\\\b"'


def test_looks_like_header():
    """Header detection only needs a YYYY-MM-DD prefix."""
    assert looks_like_header("2026-01-15")
    assert looks_like_header("2026-01-15 anything")
    assert not looks_like_header("2026-01-1")
    assert not looks_like_header("    2026-01-15")
    assert not looks_like_header("account x:y")
