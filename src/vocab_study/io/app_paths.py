"""Startup-time resolution of the per-user data directory and store file.

Failures here are fatal: the application cannot run without its store.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QStandardPaths

from vocab_study.core import StoreStartupError
from vocab_study.io.database_manager import DatabaseManager

logger = logging.getLogger(__name__)

DB_FILENAME = "data.db"


def _platform_data_location() -> str:
    # Depends on the application/organization names set on QCoreApplication.
    return QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppDataLocation
    )


def resolve_data_dir(override: Optional[Path] = None) -> Path:
    """Return the directory holding the vocabulary database.

    Args:
        override: Explicit directory, bypassing the platform location.

    Raises:
        StoreStartupError: If no per-user application data location exists.
    """
    if override is not None:
        return Path(override).expanduser()

    location = _platform_data_location()
    if not location:
        raise StoreStartupError("Failed to determine the application data directory")
    return Path(location)


def open_vocabulary_store(data_dir: Path) -> DatabaseManager:
    """Create ``data_dir`` if needed, then open (or create) the store inside it.

    Raises:
        StoreStartupError: If the directory or database cannot be created or opened.
    """
    data_dir = Path(data_dir)
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreStartupError(
            f"Failed to create data directory {data_dir}: {e}"
        ) from e

    db_path = data_dir / DB_FILENAME
    try:
        db = DatabaseManager(db_path)
        db.ensure_schema()
    except sqlite3.Error as e:
        raise StoreStartupError(f"Failed to open DB at {db_path}: {e}") from e

    logger.info("DB path: %s", db_path)
    return db
