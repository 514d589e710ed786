"""Services layer - command surface, background workers and settings."""

from vocab_study.services.vocabulary_service import (
	CommandResult,
	InvalidArgumentError,
	VocabularyService,
)
from vocab_study.services.command_workers import CommandWorker, WorkerSignals
from vocab_study.services.settings_manager import SettingsManager

__all__ = [
	"CommandResult",
	"InvalidArgumentError",
	"VocabularyService",
	"CommandWorker",
	"WorkerSignals",
	"SettingsManager",
]
