"""Single-pass ledger grammar parser.

The parser folds classified lines through an explicit state machine:

* ``Idle`` - between entities
* ``BuildingTransaction`` - a header was seen, postings are collected
* ``BuildingDeclaration`` - an ``account`` line was seen, sub-declarations
  are collected

It never stops at the first problem; every violation becomes a
``Diagnostic`` and a best-effort result is always returned.
"""

import re
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from squirrel.domain.balances import aggregate_balances
from squirrel.domain.entities import (
    AccountDeclaration,
    Diagnostic,
    ParseResult,
    Posting,
    Transaction,
)
from squirrel.domain.grammar import (
    ACCOUNT_RE,
    AMOUNT_RE,
    COMMODITY_RE,
    INDENT,
    INVALID_LINE,
    STATUS_MARKERS,
    LineKind,
    classify_line,
    match_header,
    parse_amount_text,
    strip_comment,
    tokenize,
)

_TOKEN_RE = re.compile(r"\S+")


@dataclass
class BuildingTransaction:
    """A transaction whose header has been read."""

    line: int
    date: str
    datetime: str
    status: Optional[str] = None
    payee: Optional[str] = None
    narration: Optional[str] = None
    meta: Optional[str] = None
    postings: list[Posting] = field(default_factory=list)

    def freeze(self) -> Transaction:
        return Transaction(
            date=self.date,
            datetime=self.datetime,
            status=self.status,
            payee=self.payee,
            narration=self.narration,
            meta=self.meta,
            postings=tuple(self.postings),
        )


@dataclass
class BuildingDeclaration:
    """An account declaration that may still receive sub-declarations."""

    line: int
    account: str
    default_commodity: Optional[str] = None
    opening: Optional[tuple[str, float]] = None

    def freeze(self) -> AccountDeclaration:
        return AccountDeclaration(
            account=self.account,
            default_commodity=self.default_commodity,
            opening=self.opening,
        )


class Idle:
    """No entity is open."""

    def __repr__(self) -> str:
        return "Idle()"


IDLE = Idle()

ParserState = Union[Idle, BuildingTransaction, BuildingDeclaration]


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


class _Token(NamedTuple):
    text: str
    start: int
    end: int


def _byte_tokens(text: str) -> list[_Token]:
    """Whitespace-delimited tokens with UTF-8 byte offsets."""
    return [
        _Token(m.group(), _byte_len(text[: m.start()]), _byte_len(text[: m.end()]))
        for m in _TOKEN_RE.finditer(text)
    ]


def split_lines(contents: str) -> list[str]:
    """Split ledger text on ``\\n``, dropping ``\\r`` and the final terminator."""
    if not contents:
        return []
    lines = contents.split("\n")
    if contents.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LedgerParser:
    """Parser for ledger text."""

    def __init__(self):
        """Initialize an empty parser."""
        self.state: ParserState = IDLE
        self.diagnostics: list[Diagnostic] = []
        self.transactions: list[Transaction] = []
        self.declarations: list[AccountDeclaration] = []

    def parse(self, contents: str) -> ParseResult:
        """Parse a whole text blob.

        Args:
            contents: Ledger text (``\\n`` or ``\\r\\n`` line endings)

        Returns:
            ParseResult with diagnostics, transactions and balances
        """
        for line_no, line in enumerate(split_lines(contents), start=1):
            self.state = self.step(self.state, line_no, line)
        self.state = self.flush(self.state)

        return ParseResult(
            diagnostics=tuple(self.diagnostics),
            transactions=tuple(self.transactions),
            balances=aggregate_balances(self.transactions, self.declarations),
            declarations=tuple(self.declarations),
        )

    def step(self, state: ParserState, line_no: int, line: str) -> ParserState:
        """Feed one line and return the next state."""
        kind = classify_line(line)

        if kind is LineKind.BLANK:
            return self.flush(state)

        if kind is LineKind.DIRECTIVE:
            return state

        if kind is LineKind.INDENTED:
            if isinstance(state, BuildingTransaction):
                posting = self._parse_posting(line_no, line)
                if posting is not None:
                    state.postings.append(posting)
            elif isinstance(state, BuildingDeclaration):
                self._parse_sub_declaration(state, line_no, line)
            else:
                self._diag(line_no, 0, "unexpected indented line")
            return state

        if kind is LineKind.ACCOUNT_DECLARATION:
            self.flush(state)
            return self._parse_declaration(line_no, line)

        if kind is LineKind.TRANSACTION_HEADER:
            self.flush(state)
            return self._parse_header(line_no, line)

        self._diag(line_no, 0, INVALID_LINE)
        return state

    def flush(self, state: ParserState) -> ParserState:
        """Close whichever entity is open and return to Idle."""
        if isinstance(state, BuildingTransaction):
            if not state.postings:
                self._diag(state.line, 0, "transaction missing postings")
            self.transactions.append(state.freeze())
        elif isinstance(state, BuildingDeclaration):
            self.declarations.append(state.freeze())
        return IDLE

    def _diag(self, line: int, column: int, message: str) -> None:
        self.diagnostics.append(Diagnostic(line=line, column=column, message=message))

    def _parse_header(self, line_no: int, line: str) -> BuildingTransaction:
        match = match_header(line)
        date = match.group("date")
        datetime = date + (match.group("time") or "")

        rest = line[match.end():]
        details, sep, meta = rest.partition(";")
        if not details.strip():
            self._diag(line_no, match.end(), "missing transaction details")
        if not sep:
            self._diag(line_no, 0, "missing meta comment (expected ';')")

        tokens = tokenize(details)
        status = None
        if tokens and tokens[0] in STATUS_MARKERS:
            status = tokens.pop(0)
        payee = tokens.pop(0) if tokens else None
        narration = " ".join(tokens) if tokens else None

        return BuildingTransaction(
            line=line_no,
            date=date,
            datetime=datetime,
            status=status,
            payee=payee,
            narration=narration,
            meta=meta.strip() if sep else None,
        )

    def _parse_posting(self, line_no: int, line: str) -> Optional[Posting]:
        parts = line[len(INDENT):].split()
        column = len(INDENT)

        if not parts:
            self._diag(line_no, column, "missing account")
            return None
        account = parts[0]
        if not ACCOUNT_RE.match(account):
            self._diag(line_no, column, f"invalid account path: {account}")

        column += _byte_len(account) + 1
        if len(parts) < 2:
            self._diag(line_no, column, "missing amount")
            return None
        amount_text = parts[1]
        if not AMOUNT_RE.match(amount_text):
            self._diag(line_no, column, f"invalid amount: {amount_text}")

        column += _byte_len(amount_text) + 1
        if len(parts) < 3:
            self._diag(line_no, column, "missing commodity")
            return None
        commodity = parts[2]
        if not COMMODITY_RE.match(commodity):
            self._diag(line_no, column, f"invalid commodity: {commodity}")

        remainder = " ".join(parts[3:]) or None
        return Posting(
            account=account,
            amount=parse_amount_text(amount_text),
            amount_text=amount_text,
            commodity=commodity,
            remainder=remainder,
        )

    def _parse_declaration(self, line_no: int, line: str) -> ParserState:
        tokens = _byte_tokens(strip_comment(line))

        if len(tokens) < 2:
            self._diag(line_no, tokens[0].end + 1, "missing account name")
            return IDLE

        account = tokens[1].text
        if not ACCOUNT_RE.match(account):
            self._diag(line_no, tokens[1].start, f"invalid account path: {account}")

        default_commodity = None
        if len(tokens) > 2:
            default_commodity = tokens[2].text
            if not COMMODITY_RE.match(default_commodity):
                self._diag(
                    line_no, tokens[2].start, f"invalid commodity: {default_commodity}"
                )
        if len(tokens) > 3:
            self._diag(line_no, tokens[3].start, "unexpected extra tokens")

        return BuildingDeclaration(
            line=line_no, account=account, default_commodity=default_commodity
        )

    def _parse_sub_declaration(
        self, state: BuildingDeclaration, line_no: int, line: str
    ) -> None:
        tokens = _byte_tokens(strip_comment(line))
        if not tokens:
            return

        keyword = tokens[0].text
        if keyword != "opening":
            if ACCOUNT_RE.match(keyword):
                self._diag(
                    line_no,
                    tokens[0].start,
                    "posting is not allowed inside an account declaration",
                )
            else:
                self._diag(
                    line_no, tokens[0].start, f"unknown account sub-declaration: {keyword}"
                )
            return

        if state.opening is not None:
            self._diag(line_no, tokens[0].start, "duplicate opening declaration")
            return

        if len(tokens) < 2:
            self._diag(line_no, tokens[0].end + 1, "missing opening amount")
            return
        amount_text = tokens[1].text
        if not AMOUNT_RE.match(amount_text):
            self._diag(line_no, tokens[1].start, f"invalid amount: {amount_text}")
            return

        if len(tokens) > 2:
            commodity = tokens[2].text
            if not COMMODITY_RE.match(commodity):
                self._diag(line_no, tokens[2].start, f"invalid commodity: {commodity}")
                return
        elif state.default_commodity is not None:
            commodity = state.default_commodity
        else:
            self._diag(
                line_no,
                tokens[1].end + 1,
                "missing opening commodity (and no default commodity declared)",
            )
            return

        if len(tokens) > 3:
            self._diag(line_no, tokens[3].start, "unexpected extra tokens")

        state.opening = (commodity, parse_amount_text(amount_text))


def parse_ledger(contents: str) -> ParseResult:
    """Parse ledger text into diagnostics, transactions and balances."""
    return LedgerParser().parse(contents)
