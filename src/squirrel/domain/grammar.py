"""Ledger line grammar: field patterns, line classification, tokenizing."""

import re
from enum import Enum
from typing import Optional

INDENT = "    "

HEADER_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?P<time>T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+-]\d{2}:\d{2})?)?"
    r"\s+",
    re.ASCII,
)
DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+-]\d{2}:\d{2})?)?$",
    re.ASCII,
)
ACCOUNT_RE = re.compile(r"^[A-Za-z0-9_.-]+(?::[A-Za-z0-9_.-]+)+$")
AMOUNT_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$", re.ASCII)
COMMODITY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

STATUS_MARKERS = ("*", "!")
INVALID_LINE = "invalid line: expected transaction header, posting, or directive"


class LineKind(Enum):
    """Category of a single ledger line."""

    BLANK = "blank"
    DIRECTIVE = "directive"
    ACCOUNT_DECLARATION = "account_declaration"
    INDENTED = "indented"
    TRANSACTION_HEADER = "transaction_header"
    UNRECOGNIZED = "unrecognized"


def is_blank(line: str) -> bool:
    return not line.strip()


def is_directive(line: str) -> bool:
    return line.lstrip(" \t").startswith(";")


def strip_comment(line: str) -> str:
    """Return the part of a line before the first ``;``."""
    return line.split(";", 1)[0]


def is_account_declaration(line: str) -> bool:
    tokens = strip_comment(line).split()
    return bool(tokens) and tokens[0] == "account"


def match_header(line: str) -> Optional[re.Match]:
    return HEADER_RE.match(line)


def classify_line(line: str) -> LineKind:
    """Categorize one line of ledger text (without its line terminator).

    Args:
        line: Raw line, trailing carriage return already removed

    Returns:
        The LineKind of the line
    """
    if is_blank(line):
        return LineKind.BLANK
    if is_directive(line):
        return LineKind.DIRECTIVE
    if line.startswith(INDENT):
        return LineKind.INDENTED
    if is_account_declaration(line):
        return LineKind.ACCOUNT_DECLARATION
    if match_header(line):
        return LineKind.TRANSACTION_HEADER
    return LineKind.UNRECOGNIZED


def looks_like_header(line: str) -> bool:
    """Fast check for a ``YYYY-MM-DD`` prefix."""
    return len(line) >= 10 and _is_date_prefix(line[:10])


def _is_date_prefix(text: str) -> bool:
    return (
        text[0:4].isdigit()
        and text[4] == "-"
        and text[5:7].isdigit()
        and text[7] == "-"
        and text[8:10].isdigit()
        and text.isascii()
    )


def tokenize(text: str) -> list[str]:
    """Split header details into tokens.

    A ``"..."`` run is one token, with ``\\"`` and ``\\\\`` escapes; other
    tokens are whitespace-delimited.
    """
    tokens = []
    i = 0
    n = len(text)
    while i < n:
        if text[i].isspace():
            i += 1
            continue
        if text[i] == '"':
            i += 1
            buf = []
            while i < n and text[i] != '"':
                if text[i] == "\\" and i + 1 < n and text[i + 1] in ('"', "\\"):
                    i += 1
                buf.append(text[i])
                i += 1
            # Skip the closing quote, if any.
            i += 1
            tokens.append("".join(buf))
            continue
        start = i
        while i < n and not text[i].isspace():
            i += 1
        tokens.append(text[start:i])
    return tokens


def quote(text: str) -> str:
    """Quote a payee or narration for rendering."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_amount_text(text: str) -> float:
    """Convert an amount token to float, ``0.0`` if it cannot be converted."""
    try:
        return float(text)
    except ValueError:
        return 0.0
