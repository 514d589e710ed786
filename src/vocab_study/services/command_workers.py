"""Workers for running store commands off the caller's thread using Qt threading."""

from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from vocab_study.services.vocabulary_service import VocabularyService


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(str)
    result = Signal(object)  # CommandResult


class CommandWorker(QRunnable):
    """
    Worker that runs one vocabulary command in a background thread.

    Several workers may run at once on a QThreadPool; the store's lock
    serializes their access to the database.
    """

    def __init__(
        self,
        service: VocabularyService,
        command: str,
        arguments: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()
        self.service = service
        self.command = command
        self.arguments = dict(arguments or {})
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the command and emit its CommandResult."""
        try:
            result = self.service.invoke(self.command, **self.arguments)
            self.signals.result.emit(result)
        except Exception as e:
            # Catch any unexpected exceptions not handled by the service
            self.signals.error.emit(f"Unexpected error running {self.command}: {str(e)}")
        finally:
            self.signals.finished.emit()
