"""Domain layer - vocabulary entities and store errors."""

from .errors import (
    ImportTransactionError,
    RowDecodeError,
    StoreClosedError,
    StoreQueryError,
    StoreStartupError,
    VocabularyStoreError,
)
from .vocabulary_entry import ImportReport, SkippedLine, VocabularyEntry

__all__ = [
    "VocabularyEntry",
    "ImportReport",
    "SkippedLine",
    "VocabularyStoreError",
    "StoreClosedError",
    "StoreQueryError",
    "RowDecodeError",
    "ImportTransactionError",
    "StoreStartupError",
]
