"""Domain model entities for squirrel.

These are pure data classes representing ledger concepts, independent of
how the ledger is stored on disk. The parser produces them, the store
renders them back to text.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Diagnostic:
    """One parse problem (1-based line, 0-based column)."""

    line: int
    column: int
    message: str


@dataclass(frozen=True)
class Posting:
    """One leg of a transaction."""

    account: str
    amount: float
    amount_text: str
    commodity: str
    remainder: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    date: str
    datetime: str
    status: Optional[str] = None
    payee: Optional[str] = None
    narration: Optional[str] = None
    meta: Optional[str] = None
    postings: tuple[Posting, ...] = ()

    @property
    def year_month(self) -> Optional[str]:
        """Return ``YYYYMM`` taken from the datetime, or None."""
        if len(self.datetime) < 7:
            return None
        year, month = self.datetime[0:4], self.datetime[5:7]
        if year.isdigit() and month.isdigit():
            return f"{year}{month}"
        return None


@dataclass(frozen=True)
class AccountDeclaration:
    """Account declaration with optional default commodity and opening balance."""

    account: str
    default_commodity: Optional[str] = None
    opening: Optional[tuple[str, float]] = None


@dataclass(frozen=True)
class AccountBalance:
    """Aggregated totals of one account, ordered by commodity."""

    account: str
    amounts: tuple[tuple[str, float], ...] = ()

    def as_dict(self) -> dict[str, float]:
        return dict(self.amounts)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a ledger text blob."""

    diagnostics: tuple[Diagnostic, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    balances: tuple[AccountBalance, ...] = ()
    declarations: tuple[AccountDeclaration, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def balance_for(self, account: str) -> Optional[dict[str, float]]:
        """Return the commodity totals of an account, or None if absent."""
        for balance in self.balances:
            if balance.account == account:
                return balance.as_dict()
        return None


@dataclass(frozen=True)
class ImportStats:
    """Counters returned by a source import."""

    imported: int = 0
    skipped_duplicates: int = 0
    archived: int = 0


@dataclass(frozen=True)
class ImportResult:
    """Import counters plus the freshly loaded active ledger."""

    stats: ImportStats
    parse: ParseResult


@dataclass(frozen=True)
class ManualPostingInput:
    """Caller-supplied posting for a manual transaction."""

    account: str
    amount: str
    commodity: str
    remainder: Optional[str] = None


@dataclass(frozen=True)
class ManualTransactionInput:
    """Caller-supplied fields for a manual transaction.

    ``datetime`` is either ``YYYY-MM-DD`` or a full ledger datetime.
    """

    datetime: str
    payee: str
    narration: str
    status: Optional[str] = None
    postings: tuple[ManualPostingInput, ...] = field(default_factory=tuple)
