"""Settings Manager - Handles data directory and logging configuration."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"


class SettingsManager:
    """
    Manages application shell settings.

    Reads VOCAB_STUDY_DATA_DIR and VOCAB_STUDY_LOG_LEVEL from the .env file
    in the project root (or the process environment).
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_data_dir(self) -> Optional[Path]:
        """Data directory override, or None to use the platform location."""
        value = os.getenv("VOCAB_STUDY_DATA_DIR")
        return Path(value.strip()).expanduser() if value and value.strip() else None

    def get_log_level(self) -> int:
        """Logging level from environment; unknown names fall back to INFO."""
        name = (os.getenv("VOCAB_STUDY_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
