"""Transaction identifiers embedded in the meta comment as ``txn:<id>``."""

import itertools
import os
import re
import time
import uuid
from abc import ABC, abstractmethod
from typing import Optional

TXN_PREFIX = "txn:"

_TXN_ID_RE = re.compile(r"txn:([^,\s]*)")


def extract_txn_id(meta: Optional[str]) -> Optional[str]:
    """Return the identifier after the first ``txn:`` in a meta comment.

    The identifier ends at a comma or whitespace. Returns None when there is
    no ``txn:`` token or it is empty.
    """
    if not meta:
        return None
    match = _TXN_ID_RE.search(meta)
    if match is None or not match.group(1):
        return None
    return match.group(1)


class TxnIdGenerator(ABC):
    """Source of fresh transaction identifiers."""

    @abstractmethod
    def new_id(self) -> str:
        """Return a new identifier."""
        pass


class ClockTxnIdGenerator(TxnIdGenerator):
    """Identifiers from process id and wall-clock nanoseconds.

    Successive identifiers from one instance are strictly increasing even
    when the clock does not advance between calls.
    """

    def __init__(self):
        self._pid = os.getpid()
        self._last = 0

    def new_id(self) -> str:
        nanos = max(time.time_ns(), self._last + 1)
        self._last = nanos
        return f"gen-{self._pid:x}-{nanos:x}"


class UuidTxnIdGenerator(TxnIdGenerator):
    """Random UUID4 identifiers."""

    def new_id(self) -> str:
        return uuid.uuid4().hex


class CounterTxnIdGenerator(TxnIdGenerator):
    """Deterministic ``<prefix>-<n>`` identifiers."""

    def __init__(self, prefix: str = "gen", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


def ensure_txn_id(meta: Optional[str], generator: TxnIdGenerator) -> tuple[str, str]:
    """Return ``(txn_id, meta)``, injecting a fresh identifier if absent.

    Args:
        meta: Existing meta comment text, or None
        generator: Identifier source used when meta has no ``txn:`` token

    Returns:
        Tuple of identifier and the meta text to persist
    """
    existing = extract_txn_id(meta)
    if existing is not None:
        return existing, meta

    txn_id = generator.new_id()
    if meta and meta.strip():
        return txn_id, f"{meta.strip()}, {TXN_PREFIX}{txn_id}"
    return txn_id, f"{TXN_PREFIX}{txn_id}"
