"""Monthly rotation of the active ledger into the archive directory."""

from typing import Optional

import structlog

from squirrel.storage.base import FileStore

logger = structlog.get_logger(__name__)

LEDGER_PATH = "ledger.transactions"
ARCHIVE_DIR = "archive"
INDEX_PATH = "index.json"
SOURCES_PATH = "sources.json"
UNKNOWN_MONTH = "unknown"


def archive_path(year_month: str) -> str:
    return f"{ARCHIVE_DIR}/ledger-{year_month}.transactions"


def _is_month_prefix(line: str) -> bool:
    return (
        len(line) >= 7
        and line[0:4].isdigit()
        and line[4] == "-"
        and line[5:7].isdigit()
        and line[:7].isascii()
    )


def ledger_year_month(contents: str) -> Optional[str]:
    """Return ``YYYYMM`` of the first date-like line in a ledger.

    Blank lines, comment lines and lines without a date prefix (such as
    account declarations and postings) are skipped.
    """
    for raw_line in contents.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(";"):
            continue
        if _is_month_prefix(line):
            return line[0:4] + line[5:7]
    return None


def unique_archive_path(files: FileStore, desired: str) -> str:
    """Return desired, or ``<stem>-2``, ``<stem>-3``... if it is taken."""
    if not files.exists(desired):
        return desired

    stem = desired.removesuffix(".transactions")
    i = 2
    while True:
        candidate = f"{stem}-{i}.transactions"
        if not files.exists(candidate):
            return candidate
        i += 1


def rotate_ledger_if_needed(files: FileStore, now_yyyymm: str) -> Optional[str]:
    """Archive the active ledger when it belongs to another month.

    The whole file moves, regardless of whether every entry shares the
    month of its first dated line. The active ledger is then reset to
    empty content.

    Args:
        files: File store of the generated ledger
        now_yyyymm: Current month, e.g. ``"202601"``

    Returns:
        Archive path the ledger was moved to, or None if nothing moved
    """
    files.makedirs()

    if not files.exists(LEDGER_PATH):
        return None

    contents = files.read_text(LEDGER_PATH)
    if not contents.strip():
        return None

    ledger_month = ledger_year_month(contents) or UNKNOWN_MONTH
    if ledger_month == now_yyyymm:
        return None

    files.makedirs(ARCHIVE_DIR)
    destination = unique_archive_path(files, archive_path(ledger_month))
    files.rename(LEDGER_PATH, destination)
    files.write_text(LEDGER_PATH, "")

    logger.info(
        "ledger_rotated",
        ledger_month=ledger_month,
        now=now_yyyymm,
        destination=files.describe(destination),
    )
    return destination
