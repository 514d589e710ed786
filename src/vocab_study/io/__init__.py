"""I/O layer - Data access for persistence and TSV parsing."""

from .app_paths import DB_FILENAME, open_vocabulary_store, resolve_data_dir
from .database_manager import DatabaseManager
from .tsv_parser import FIELD_COUNT, TSV_COLUMNS, ParsedLine, ParsedRow, parse_tsv

__all__ = [
    "DatabaseManager",
    "DB_FILENAME",
    "open_vocabulary_store",
    "resolve_data_dir",
    "FIELD_COUNT",
    "TSV_COLUMNS",
    "ParsedLine",
    "ParsedRow",
    "parse_tsv",
]
