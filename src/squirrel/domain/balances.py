"""Per-account, per-commodity balance aggregation."""

from collections import defaultdict
from typing import Iterable

from squirrel.domain.entities import AccountBalance, AccountDeclaration, Transaction


def aggregate_balances(
    transactions: Iterable[Transaction],
    declarations: Iterable[AccountDeclaration] = (),
) -> tuple[AccountBalance, ...]:
    """Fold postings and declared openings into account totals.

    Declared accounts appear even without postings. Output is ordered by
    account, then by commodity.

    Args:
        transactions: Parsed transactions
        declarations: Parsed account declarations

    Returns:
        Tuple of AccountBalance
    """
    totals: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))

    for txn in transactions:
        for posting in txn.postings:
            totals[posting.account][posting.commodity] += posting.amount

    for declaration in declarations:
        amounts = totals[declaration.account]
        if declaration.opening is not None:
            commodity, amount = declaration.opening
            amounts[commodity] += amount

    return tuple(
        AccountBalance(account=account, amounts=tuple(sorted(totals[account].items())))
        for account in sorted(totals)
    )
