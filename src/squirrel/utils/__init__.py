"""Utility functions for squirrel."""

from squirrel.utils.date_parser import (
    current_year_month,
    parse_date,
    parse_ledger_datetime,
    parse_year_month,
)
from squirrel.utils.amount_parser import parse_amount, to_ledger_amount

__all__ = [
    "current_year_month",
    "parse_date",
    "parse_ledger_datetime",
    "parse_year_month",
    "parse_amount",
    "to_ledger_amount",
]
