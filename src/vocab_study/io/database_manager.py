"""SQLite-backed vocabulary persistence behind a single guarded connection."""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from vocab_study.core import (
    ImportReport,
    ImportTransactionError,
    RowDecodeError,
    SkippedLine,
    StoreClosedError,
    StoreQueryError,
    VocabularyEntry,
)
from vocab_study.io.tsv_parser import TSV_COLUMNS, ParsedLine, parse_tsv

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = (
    "vocab_id",
    "english",
    "furigana",
    "japanese",
    "times_seen",
    "recently_missed_percent",
    "flag",
    "public_notes",
    "personal_notes",
    "book",
    "chapter",
    "section",
    "word_category",
)

_TEXT_COLUMNS = (
    "english",
    "furigana",
    "japanese",
    "public_notes",
    "personal_notes",
    "book",
    "word_category",
)

SELECT_ENTRIES_SQL = f"SELECT {', '.join(ENTRY_COLUMNS)} FROM vocabulary"

INSERT_ENTRY_SQL = (
    f"INSERT INTO vocabulary ({', '.join(TSV_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in TSV_COLUMNS)})"
)


class DatabaseManager:
    """Owns the SQLite connection, the vocabulary schema and its operations.

    Exactly one connection exists and every operation runs under the same
    lock, so reads, imports and flag updates are serialized against each
    other. The connection is opened in autocommit mode; the bulk import
    manages its own transaction explicitly.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.connection: Optional[sqlite3.Connection] = sqlite3.connect(
            self.db_path,
            check_same_thread=False,
            isolation_level=None,
        )
        self.connection.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    @contextmanager
    def _exclusive(self) -> Iterator[sqlite3.Connection]:
        """Hold the store lock for the duration of one operation."""
        with self._lock:
            if self.connection is None:
                raise StoreClosedError(
                    f"Vocabulary database is closed: {self.db_path}"
                )
            yield self.connection

    def ensure_schema(self) -> None:
        """Create the vocabulary table if it does not exist."""
        with self._exclusive() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS vocabulary (
                    vocab_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    english TEXT,
                    furigana TEXT,
                    japanese TEXT,
                    times_seen INTEGER NOT NULL DEFAULT 0,
                    recently_missed_percent REAL NOT NULL DEFAULT 0.0,
                    flag INTEGER NOT NULL DEFAULT 0,
                    public_notes TEXT,
                    personal_notes TEXT,
                    book TEXT,
                    chapter INTEGER,
                    section INTEGER,
                    word_category TEXT
                );
                """
            )

    def list_entries(self) -> List[VocabularyEntry]:
        """Return every entry in the storage engine's natural scan order.

        Raises:
            StoreClosedError: If the store has been closed.
            StoreQueryError: If the query fails.
            RowDecodeError: If any row cannot be decoded; the listing is abandoned.
        """
        with self._exclusive() as conn:
            try:
                rows = conn.execute(SELECT_ENTRIES_SQL).fetchall()
            except sqlite3.Error as e:
                raise StoreQueryError(f"Failed to query vocabulary: {e}") from e
            return [self._row_to_entry(row) for row in rows]

    def import_tsv(self, tsv_data: str) -> ImportReport:
        """Insert every well-formed data line of ``tsv_data`` in one transaction.

        Malformed lines and rows the database refuses are recorded in the
        report and do not abort the batch.

        Raises:
            StoreClosedError: If the store has been closed.
            ImportTransactionError: If the transaction cannot begin, the insert
                statement cannot be prepared, or the commit fails. Nothing is
                persisted in that case.
        """
        report = ImportReport()
        with self._exclusive() as conn:
            try:
                conn.execute("BEGIN")
            except sqlite3.Error as e:
                raise ImportTransactionError(
                    f"Failed to begin import transaction: {e}"
                ) from e

            try:
                self._prepare_insert(conn)
                for item in parse_tsv(tsv_data):
                    if isinstance(item, ParsedLine):
                        self._insert_line(conn, item, report)
                    else:
                        logger.warning(
                            "Skipping TSV line %d: %s", item.line_number, item.reason
                        )
                        report.skipped.append(item)
                try:
                    conn.execute("COMMIT")
                except sqlite3.Error as e:
                    raise ImportTransactionError(
                        f"Failed to commit import transaction: {e}"
                    ) from e
            except BaseException:
                self._rollback(conn)
                raise

        logger.info(
            "Imported %d vocabulary entries, skipped %d lines",
            report.inserted,
            report.skipped_count,
        )
        return report

    def set_flag(self, vocab_id: int, flag_value: int) -> None:
        """Set ``flag`` on the entry with ``vocab_id``.

        An unknown ``vocab_id`` matches no rows and is not an error.

        Raises:
            StoreClosedError: If the store has been closed.
            StoreQueryError: If the update fails.
        """
        with self._exclusive() as conn:
            try:
                cur = conn.execute(
                    "UPDATE vocabulary SET flag = ? WHERE vocab_id = ?",
                    (flag_value, vocab_id),
                )
            except (sqlite3.Error, OverflowError) as e:
                raise StoreQueryError(
                    f"Failed to set flag for vocabulary entry {vocab_id}: {e}"
                ) from e
            if cur.rowcount == 0:
                logger.debug("set_flag matched no entry with vocab_id=%s", vocab_id)

    def close(self) -> None:
        with self._lock:
            if self.connection is not None:
                self.connection.close()
                self.connection = None

    @staticmethod
    def _prepare_insert(conn: sqlite3.Connection) -> None:
        # EXPLAIN compiles the statement without running it.
        try:
            conn.execute(f"EXPLAIN {INSERT_ENTRY_SQL}", (None,) * len(TSV_COLUMNS))
        except sqlite3.Error as e:
            raise ImportTransactionError(
                f"Failed to prepare vocabulary insert: {e}"
            ) from e

    @staticmethod
    def _insert_line(
        conn: sqlite3.Connection, item: ParsedLine, report: ImportReport
    ) -> None:
        try:
            conn.execute(INSERT_ENTRY_SQL, item.row.as_params())
        except sqlite3.Error as e:
            logger.warning("Failed to insert TSV line %d: %s", item.line_number, e)
            report.skipped.append(
                SkippedLine(line_number=item.line_number, reason=str(e))
            )
            return
        report.inserted += 1

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            logger.error("Rollback of import transaction failed: %s", e)

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> VocabularyEntry:
        vocab_id = row["vocab_id"]
        if not _is_int(vocab_id):
            raise RowDecodeError(f"Invalid vocab_id in vocabulary row: {vocab_id!r}")

        for column in _TEXT_COLUMNS:
            value = row[column]
            if value is not None and not isinstance(value, str):
                raise RowDecodeError(
                    f"Invalid {column} for vocabulary entry {vocab_id}: "
                    f"expected text, found {type(value).__name__}"
                )
        for column in ("times_seen", "flag"):
            if not _is_int(row[column]):
                raise RowDecodeError(
                    f"Invalid {column} for vocabulary entry {vocab_id}: "
                    f"expected integer, found {row[column]!r}"
                )
        for column in ("chapter", "section"):
            if row[column] is not None and not _is_int(row[column]):
                raise RowDecodeError(
                    f"Invalid {column} for vocabulary entry {vocab_id}: "
                    f"expected integer, found {row[column]!r}"
                )
        missed = row["recently_missed_percent"]
        if not (_is_int(missed) or isinstance(missed, float)):
            raise RowDecodeError(
                f"Invalid recently_missed_percent for vocabulary entry {vocab_id}: "
                f"expected real, found {missed!r}"
            )

        return VocabularyEntry(
            vocab_id=vocab_id,
            english=row["english"],
            furigana=row["furigana"],
            japanese=row["japanese"],
            times_seen=row["times_seen"],
            recently_missed_percent=float(missed),
            flag=row["flag"],
            public_notes=row["public_notes"],
            personal_notes=row["personal_notes"],
            book=row["book"],
            chapter=row["chapter"],
            section=row["section"],
            word_category=row["word_category"],
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
