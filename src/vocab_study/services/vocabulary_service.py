"""Vocabulary Service - the command surface the front-end invokes."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from vocab_study.core import ImportReport, VocabularyStoreError
from vocab_study.io import DatabaseManager

logger = logging.getLogger(__name__)


class InvalidArgumentError(TypeError):
    """A command argument has the wrong type or value."""


@dataclass
class CommandResult:
    """Result of one front-end command: a JSON-compatible value or an error message."""

    value: Any = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """True if the command failed."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        if self.is_error:
            return {"ok": False, "error": self.error}
        return {"ok": True, "value": self.value}


class VocabularyService:
    """Application service exposing the vocabulary store as named commands.

    Depends on DatabaseManager for persistence. The typed methods raise
    VocabularyStoreError; ``invoke`` turns those into error results.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db
        self._commands: Dict[str, Callable[..., Any]] = {
            "get_vocabulary": self.get_vocabulary,
            "add_vocabulary_entries_tsv": self.add_vocabulary_entries_tsv,
            "set_vocabulary_flag": self._set_vocabulary_flag_command,
        }

    @property
    def command_names(self) -> List[str]:
        return sorted(self._commands)

    def get_vocabulary(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._db.list_entries()]

    def import_report(self, tsv_data: str) -> ImportReport:
        """Import TSV text and return the full report, every skipped line included."""
        return self._db.import_tsv(tsv_data)

    def add_vocabulary_entries_tsv(self, tsv_data: str) -> str:
        """Import TSV text (header line first) and return a status message.

        Args:
            tsv_data: Header line followed by 12-field tab-separated data lines.

        Returns:
            Insert and skip counts, with a sample of skipped line numbers.

        Raises:
            InvalidArgumentError: If tsv_data is not a string.
            ImportTransactionError: If the batch could not be committed as a whole.
        """
        if not isinstance(tsv_data, str):
            raise InvalidArgumentError(f"tsv_data must be a string, got {type(tsv_data).__name__}")
        return self.import_report(tsv_data).summary()

    def set_vocabulary_flag(self, vocab_id: int, flag_value: int) -> None:
        """Set the flag of one entry. Unknown ids succeed without effect."""
        _require_int("vocab_id", vocab_id)
        _require_int("flag_value", flag_value)
        self._db.set_flag(vocab_id, flag_value)

    def _set_vocabulary_flag_command(self, id: int, flag_value: int) -> None:
        # Front-end argument names: { id, flag_value }.
        self.set_vocabulary_flag(id, flag_value)

    def invoke(self, command: str, **arguments: Any) -> CommandResult:
        """Run a command by name, reporting any failure as a message string."""
        handler = self._commands.get(command)
        if handler is None:
            return CommandResult(error=f"Unknown command: {command}")

        try:
            inspect.signature(handler).bind(**arguments)
        except TypeError as e:
            return CommandResult(error=f"Invalid arguments for {command}: {e}")

        try:
            return CommandResult(value=handler(**arguments))
        except InvalidArgumentError as e:
            return CommandResult(error=f"Invalid arguments for {command}: {e}")
        except VocabularyStoreError as e:
            logger.error("Command %s failed: %s", command, e)
            return CommandResult(error=str(e))


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
