"""
Vocab Study - a local-first vocabulary study backend.

This package provides the data layer behind a vocabulary study front-end:
- SQLite storage of English/Japanese vocabulary entries
- Bulk import of tab-separated text
- Flag updates for review marking
"""

__version__ = "0.1.0"

# Make key components available at package level
from vocab_study.core import ImportReport, VocabularyEntry
from vocab_study.io import DatabaseManager
from vocab_study.services import CommandResult, VocabularyService

__all__ = [
    "VocabularyEntry",
    "ImportReport",
    "DatabaseManager",
    "VocabularyService",
    "CommandResult",
]
