"""Shared pytest fixtures for squirrel tests."""

from pathlib import Path
import pytest

from squirrel.domain.identity import CounterTxnIdGenerator
from squirrel.domain.ledger_service import LedgerService
from squirrel.domain.store import GeneratedStore
from squirrel.storage.local import LocalFileStore
from squirrel.storage.memory import MemoryFileStore


BUY_SOL = (
    '2026-01-15 * "Binance" "Buy SOL" ; txn:abc\n'
    "    assets:exchange:binance:sol    10.000000 SOL\n"
    "    assets:cash:usd              -230.10 USD\n"
)


@pytest.fixture
def buy_sol():
    """Ledger text of one Binance trade with identifier abc."""
    return BUY_SOL


@pytest.fixture
def id_generator():
    """Deterministic identifiers: test-1, test-2, ..."""
    return CounterTxnIdGenerator(prefix="test")


@pytest.fixture
def memory_files():
    """Create an empty in-memory file store."""
    return MemoryFileStore()


@pytest.fixture
def store(memory_files, id_generator):
    """Create a GeneratedStore over an in-memory file store."""
    return GeneratedStore(memory_files, id_generator=id_generator)


@pytest.fixture
def base_dir(tmp_path):
    """Return a not-yet-created generated store directory."""
    return tmp_path / "generated"


@pytest.fixture
def local_store(base_dir, id_generator):
    """Create a GeneratedStore over a temporary directory."""
    return GeneratedStore(LocalFileStore(base_dir), id_generator=id_generator)


@pytest.fixture
def service(store):
    """Create a LedgerService over the in-memory store."""
    return LedgerService(store)


@pytest.fixture
def write_source(tmp_path):
    """Write a ledger source file and return its path as a string."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / "sources" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
