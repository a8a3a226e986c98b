"""Generated ledger store.

Owns the active ledger, its monthly archives and two side indexes (seen
transaction identifiers and imported source paths) under one base
directory. Every operation reads and rewrites the files it touches; there
is no caching between calls and no locking, so one writer at a time is
assumed. Multi-file updates are not atomic as a group.
"""

from typing import Iterable, Optional

import structlog

from squirrel.domain.entities import (
    ImportStats,
    ManualTransactionInput,
    ParseResult,
    Posting,
    Transaction,
)
from squirrel.domain.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    file_unreadable,
    invalid_manual_field,
    source_unreadable,
    txn_id_collision,
)
from squirrel.domain.grammar import (
    ACCOUNT_RE,
    AMOUNT_RE,
    COMMODITY_RE,
    DATETIME_RE,
    STATUS_MARKERS,
    parse_amount_text,
)
from squirrel.domain.identity import (
    ClockTxnIdGenerator,
    TxnIdGenerator,
    ensure_txn_id,
)
from squirrel.domain.normalizer import normalize_blank_lines
from squirrel.domain.parser import parse_ledger
from squirrel.domain.rendering import account_declaration_to_text, transaction_to_text
from squirrel.domain.rotation import (
    INDEX_PATH,
    LEDGER_PATH,
    SOURCES_PATH,
    archive_path,
    rotate_ledger_if_needed,
)
from squirrel.storage.base import FileStore
from squirrel.storage.mappers import (
    CorruptDocument,
    index_from_json,
    index_to_json,
    sources_from_json,
    sources_to_json,
)

logger = structlog.get_logger(__name__)


def _read_source(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise NotFoundError(source_unreadable(path, e)) from e


class GeneratedStore:
    """Store for the generated ledger and its archives."""

    def __init__(self, files: FileStore, id_generator: Optional[TxnIdGenerator] = None):
        """Initialize generated store.

        Args:
            files: File store rooted at the base directory
            id_generator: Source of new transaction identifiers
                (defaults to ClockTxnIdGenerator)
        """
        self.files = files
        self.id_generator = id_generator or ClockTxnIdGenerator()

    # Side indexes
    def _read_document(self, path: str, decode, default):
        if not self.files.exists(path):
            return default
        try:
            return decode(self.files.read_text(path))
        except OSError as e:
            raise StorageError(file_unreadable(self.files.describe(path), e)) from e
        except (UnicodeDecodeError, CorruptDocument) as e:
            logger.warning(
                "side_index_corrupt_reset", path=self.files.describe(path), error=str(e)
            )
            return default

    def read_seen_ids(self) -> set[str]:
        """Return every transaction identifier ever imported or added."""
        return self._read_document(INDEX_PATH, index_from_json, set())

    def read_sources(self) -> list[str]:
        """Return every source path ever imported."""
        return self._read_document(SOURCES_PATH, sources_from_json, [])

    def _write(self, path: str, text: str) -> None:
        try:
            self.files.write_text(path, text)
        except OSError as e:
            raise StorageError(f"failed to write {self.files.describe(path)}: {e}") from e

    def _read(self, path: str) -> str:
        try:
            return self.files.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(file_unreadable(self.files.describe(path), e)) from e

    # Ledger files
    def append_text(self, path: str, text: str) -> None:
        """Append an entry, keeping one blank line before it.

        Existing content is normalized first.
        """
        if not self.files.exists(path):
            self._write(path, text)
            return

        existing = normalize_blank_lines(self._read(path)).rstrip("\n")
        if existing:
            existing += "\n\n"
        self._write(path, existing + text)

    def _destination(self, txn: Transaction, now_yyyymm: str) -> str:
        year_month = txn.year_month or now_yyyymm
        if year_month == now_yyyymm:
            return LEDGER_PATH
        return archive_path(year_month)

    def rotate(self, now_yyyymm: str) -> Optional[str]:
        """Archive the active ledger if it belongs to another month."""
        try:
            return rotate_ledger_if_needed(self.files, now_yyyymm)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"rotate failed: {e}") from e

    # Operations
    def import_source_files(self, now_yyyymm: str, paths: Iterable[str]) -> ImportStats:
        """Import transactions from ledger source files.

        Transactions whose identifier was already seen are skipped;
        transactions without postings are ignored. Each imported entry goes
        to the active ledger when it is dated in ``now_yyyymm``, otherwise
        to the archive file of its own month.

        Args:
            now_yyyymm: Current month, e.g. ``"202601"``
            paths: Source file paths

        Returns:
            ImportStats with imported, skipped_duplicates and archived counts

        Raises:
            NotFoundError: If a source file cannot be read
            StorageError: If the store cannot be read or written
        """
        self.rotate(now_yyyymm)

        seen = self.read_seen_ids()
        sources = self.read_sources()

        imported = 0
        skipped_duplicates = 0
        archived = 0

        for path in paths:
            path = str(path)
            if path not in sources:
                sources.append(path)

            result = parse_ledger(_read_source(path))
            for txn in result.transactions:
                if not txn.postings:
                    continue

                txn_id, meta = ensure_txn_id(txn.meta, self.id_generator)
                if txn_id in seen:
                    skipped_duplicates += 1
                    logger.debug("import_duplicate_skipped", txn_id=txn_id, source=path)
                    continue

                destination = self._destination(txn, now_yyyymm)
                if destination != LEDGER_PATH:
                    archived += 1

                self.append_text(destination, transaction_to_text(txn, meta))
                seen.add(txn_id)
                imported += 1

        self._write(SOURCES_PATH, sources_to_json(sources))
        self._write(INDEX_PATH, index_to_json(seen))

        stats = ImportStats(
            imported=imported, skipped_duplicates=skipped_duplicates, archived=archived
        )
        logger.info(
            "sources_imported",
            sources=len(sources),
            imported=stats.imported,
            skipped_duplicates=stats.skipped_duplicates,
            archived=stats.archived,
        )
        return stats

    def add_manual_transaction(
        self, now_yyyymm: str, manual: ManualTransactionInput
    ) -> str:
        """Append a transaction built from caller-supplied fields.

        Args:
            now_yyyymm: Current month, e.g. ``"202601"``
            manual: Transaction fields

        Returns:
            The identifier assigned to the new transaction

        Raises:
            ValidationError: If a field does not match the ledger grammar
            ConflictError: If the generated identifier was already seen
        """
        txn = manual_to_transaction(manual)
        self.files.makedirs()

        seen = self.read_seen_ids()
        txn_id, meta = ensure_txn_id(None, self.id_generator)
        if txn_id in seen:
            raise ConflictError(txn_id_collision(txn_id))

        destination = self._destination(txn, now_yyyymm)
        self.append_text(destination, transaction_to_text(txn, meta))
        seen.add(txn_id)
        self._write(INDEX_PATH, index_to_json(seen))

        logger.info(
            "manual_transaction_added",
            txn_id=txn_id,
            destination=self.files.describe(destination),
        )
        return txn_id

    def add_account_declaration(
        self,
        account: str,
        currency: Optional[str] = None,
        opening_balance: Optional[str] = None,
    ) -> None:
        """Append an account declaration to the active ledger.

        Declarations bypass the identifier index and are not deduplicated.

        Raises:
            ValidationError: If the account name, currency or opening
                balance does not match the ledger grammar
        """
        account = account.strip()
        if not account:
            raise ValidationError("Account name cannot be empty")
        if not ACCOUNT_RE.fullmatch(account):
            raise ValidationError(invalid_manual_field("account", account))
        currency = currency or None
        if currency is not None and not COMMODITY_RE.fullmatch(currency):
            raise ValidationError(invalid_manual_field("currency", currency))
        if opening_balance is not None and not AMOUNT_RE.fullmatch(opening_balance):
            raise ValidationError(invalid_manual_field("opening balance", opening_balance))
        self.files.makedirs()

        text = account_declaration_to_text(account, currency, opening_balance)
        self.append_text(LEDGER_PATH, text)
        logger.info("account_declared", account=account, currency=currency)

    def load_active_ledger(self) -> ParseResult:
        """Parse the active ledger, normalizing its blank lines on disk.

        Returns:
            ParseResult of the normalized text (empty if there is no ledger)
        """
        if not self.files.exists(LEDGER_PATH):
            return ParseResult()

        contents = self._read(LEDGER_PATH)
        normalized = normalize_blank_lines(contents)
        if normalized != contents:
            self._write(LEDGER_PATH, normalized)
            logger.debug("ledger_normalized", path=self.files.describe(LEDGER_PATH))
        return parse_ledger(normalized)


_LINE_BREAKS = ("\n", "\r")


def _check_header_text(field_name: str, value: Optional[str]) -> None:
    # Header text ends at the first ';' and at the end of the line
    if value is not None and any(c in value for c in (";",) + _LINE_BREAKS):
        raise ValidationError(invalid_manual_field(field_name, value))


def manual_to_transaction(manual: ManualTransactionInput) -> Transaction:
    """Build a Transaction from manual input, validating each field.

    Raises:
        ValidationError: If a field is invalid or there are no postings
    """
    datetime = manual.datetime.strip()
    if not DATETIME_RE.fullmatch(datetime):
        raise ValidationError(invalid_manual_field("date", manual.datetime))
    if manual.status is not None and manual.status not in STATUS_MARKERS:
        raise ValidationError(invalid_manual_field("status", manual.status))
    _check_header_text("payee", manual.payee)
    _check_header_text("narration", manual.narration)
    if not manual.postings:
        raise ValidationError("Transaction needs at least one posting")

    postings = []
    for p in manual.postings:
        if not ACCOUNT_RE.fullmatch(p.account):
            raise ValidationError(invalid_manual_field("account", p.account))
        if not AMOUNT_RE.fullmatch(p.amount):
            raise ValidationError(invalid_manual_field("amount", p.amount))
        if not COMMODITY_RE.fullmatch(p.commodity):
            raise ValidationError(invalid_manual_field("commodity", p.commodity))
        if p.remainder is not None and any(c in p.remainder for c in _LINE_BREAKS):
            raise ValidationError(invalid_manual_field("remainder", p.remainder))
        postings.append(
            Posting(
                account=p.account,
                amount=parse_amount_text(p.amount),
                amount_text=p.amount,
                commodity=p.commodity,
                remainder=p.remainder,
            )
        )

    return Transaction(
        date=datetime[:10],
        datetime=datetime,
        status=manual.status,
        payee=manual.payee,
        narration=manual.narration,
        postings=tuple(postings),
    )
