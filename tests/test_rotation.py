"""Tests for monthly rotation of the active ledger."""

from squirrel.domain.rotation import (
    LEDGER_PATH,
    ledger_year_month,
    rotate_ledger_if_needed,
    unique_archive_path,
)
from squirrel.storage.memory import MemoryFileStore

DECEMBER = (
    '2025-12-30 * "Employer" "Salary" ; txn:s1\n'
    "    assets:bank:checking 5000.00 USD\n"
    "    income:salary -5000.00 USD\n"
)


def test_ledger_year_month_uses_first_dated_line():
    """Comments, blanks and declarations are skipped."""
    text = "; generated\n\naccount assets:bank USD\n    opening 1\n" + DECEMBER

    assert ledger_year_month(text) == "202512"


def test_ledger_year_month_none_without_dates():
    """No dated line means no month."""
    assert ledger_year_month("account assets:bank USD\n") is None
    assert ledger_year_month("") is None


def test_rotate_without_ledger_is_noop():
    """A missing ledger is left missing."""
    files = MemoryFileStore()

    assert rotate_ledger_if_needed(files, "202601") is None
    assert files.files == {}


def test_rotate_empty_ledger_is_noop():
    """Whitespace-only ledgers are not archived."""
    files = MemoryFileStore({LEDGER_PATH: "  \n\n"})

    assert rotate_ledger_if_needed(files, "202601") is None
    assert files.files == {LEDGER_PATH: "  \n\n"}


def test_rotate_same_month_is_noop():
    """A ledger of the current month stays in place."""
    files = MemoryFileStore({LEDGER_PATH: DECEMBER})

    assert rotate_ledger_if_needed(files, "202512") is None
    assert files.read_text(LEDGER_PATH) == DECEMBER


def test_rotate_moves_previous_month():
    """A ledger of an earlier month moves to its archive file."""
    files = MemoryFileStore({LEDGER_PATH: DECEMBER})

    destination = rotate_ledger_if_needed(files, "202601")

    assert destination == "archive/ledger-202512.transactions"
    assert files.read_text(destination) == DECEMBER
    assert files.read_text(LEDGER_PATH) == ""

    # Rotating again in the same month does nothing
    assert rotate_ledger_if_needed(files, "202601") is None
    assert files.list_dir("archive") == ["ledger-202512.transactions"]


def test_rotate_moves_whole_file_with_mixed_months():
    """Rotation is file-level: later entries move along with the first."""
    text = DECEMBER + "\n" + '2026-01-02 "Rent" ; txn:r1\n    expenses:rent 1 USD\n'
    files = MemoryFileStore({LEDGER_PATH: text})

    rotate_ledger_if_needed(files, "202601")

    assert files.read_text("archive/ledger-202512.transactions") == text


def test_rotate_disambiguates_existing_archive():
    """An occupied archive name gets a numeric suffix."""
    files = MemoryFileStore(
        {
            LEDGER_PATH: DECEMBER,
            "archive/ledger-202512.transactions": "old",
            "archive/ledger-202512-2.transactions": "older",
        }
    )

    destination = rotate_ledger_if_needed(files, "202601")

    assert destination == "archive/ledger-202512-3.transactions"
    assert files.read_text("archive/ledger-202512.transactions") == "old"


def test_rotate_unknown_month():
    """A ledger without dated lines is archived as 'unknown'."""
    files = MemoryFileStore({LEDGER_PATH: "account assets:bank USD\n"})

    destination = rotate_ledger_if_needed(files, "202601")

    assert destination == "archive/ledger-unknown.transactions"


def test_unique_archive_path_free():
    """A free name is used as is."""
    files = MemoryFileStore()

    assert unique_archive_path(files, "archive/ledger-202601.transactions") == (
        "archive/ledger-202601.transactions"
    )


def test_rotate_on_disk(tmp_path):
    """Rotation works against the local filesystem."""
    from squirrel.storage.local import LocalFileStore

    base = tmp_path / "generated"
    base.mkdir()
    (base / "ledger.transactions").write_text(DECEMBER, encoding="utf-8")

    rotate_ledger_if_needed(LocalFileStore(base), "202601")

    assert (base / "ledger.transactions").read_text(encoding="utf-8") == ""
    assert (base / "archive" / "ledger-202512.transactions").read_text(
        encoding="utf-8"
    ) == DECEMBER
