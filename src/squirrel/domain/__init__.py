"""Domain layer for squirrel."""

from squirrel.domain.parser import parse_ledger
from squirrel.domain.store import GeneratedStore
from squirrel.domain.ledger_service import LedgerService, parse_file

__all__ = [
    "parse_ledger",
    "parse_file",
    "GeneratedStore",
    "LedgerService",
]
