"""Ledger operations exposed to front-ends.

Each operation returns a structured result or raises a DomainError whose
message is suitable for display.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, Optional

from squirrel.domain.entities import (
    ImportResult,
    ManualTransactionInput,
    ParseResult,
)
from squirrel.domain.errors import NotFoundError, file_unreadable
from squirrel.domain.parser import parse_ledger
from squirrel.domain.store import GeneratedStore


def parse_file(path: str | Path) -> ParseResult:
    """Parse a ledger file without touching the generated store.

    Raises:
        NotFoundError: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise NotFoundError(file_unreadable(str(path), e)) from e
    return parse_ledger(contents)


class LedgerService:
    """Service for the generated ledger operations."""

    def __init__(self, store: GeneratedStore):
        """Initialize ledger service.

        Args:
            store: Generated store instance
        """
        self.store = store

    def parse_file(self, path: str | Path) -> ParseResult:
        return parse_file(path)

    def rotate_ledger(self, now_yyyymm: str) -> Optional[str]:
        """Rotate the active ledger; return the archive path if it moved."""
        return self.store.rotate(now_yyyymm)

    def load_active_ledger(self, now_yyyymm: Optional[str] = None) -> ParseResult:
        """Load the active ledger, rotating it first when a month is given."""
        if now_yyyymm is not None:
            self.store.rotate(now_yyyymm)
        return self.store.load_active_ledger()

    def import_sources(self, now_yyyymm: str, paths: Iterable[str]) -> ImportResult:
        """Import source files and return stats plus the reloaded ledger."""
        stats = self.store.import_source_files(now_yyyymm, paths)
        return ImportResult(stats=stats, parse=self.store.load_active_ledger())

    def add_manual_transaction(
        self, now_yyyymm: str, manual: ManualTransactionInput
    ) -> ParseResult:
        """Append a manual transaction and return the reloaded ledger."""
        self.store.add_manual_transaction(now_yyyymm, manual)
        return self.store.load_active_ledger()

    def add_account_declaration(
        self,
        account: str,
        currency: Optional[str] = None,
        opening_balance: Optional[str] = None,
    ) -> ParseResult:
        """Append an account declaration and return the reloaded ledger."""
        self.store.add_account_declaration(account, currency, opening_balance)
        return self.store.load_active_ledger()


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Convert a ParseResult into JSON-serializable data."""
    return {
        "ok": result.ok,
        "diagnostics": [asdict(d) for d in result.diagnostics],
        "transactions": [
            {
                **{k: v for k, v in asdict(txn).items() if k != "postings"},
                "postings": [asdict(p) for p in txn.postings],
            }
            for txn in result.transactions
        ],
        "balances": [
            {
                "account": balance.account,
                "amounts": [
                    {"commodity": commodity, "amount": amount}
                    for commodity, amount in balance.amounts
                ],
            }
            for balance in result.balances
        ],
    }


def import_result_to_dict(result: ImportResult) -> dict[str, Any]:
    """Convert an ImportResult into JSON-serializable data."""
    return {"stats": asdict(result.stats), "parse": result_to_dict(result.parse)}
