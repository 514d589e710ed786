"""Vocabulary entities shared by persistence, import and the command surface."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

# Number of skipped line numbers quoted in an import status message.
SKIPPED_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class VocabularyEntry:
    """One stored vocabulary record.

    Attributes:
        vocab_id: Store-assigned identity, never supplied by callers.
        english: English gloss.
        furigana: Kana reading of the Japanese form.
        japanese: Japanese form.
        times_seen: Study counter.
        recently_missed_percent: Recent miss ratio.
        flag: Caller-defined marker (e.g. 1 = needs review).
        public_notes: Shareable notes.
        personal_notes: Private notes.
        book: Source textbook.
        chapter: Chapter number within the book.
        section: Section number within the chapter.
        word_category: Classification such as "greeting" or "verb".
    """

    vocab_id: int
    english: Optional[str]
    furigana: Optional[str]
    japanese: Optional[str]
    times_seen: int
    recently_missed_percent: float
    flag: int
    public_notes: Optional[str]
    personal_notes: Optional[str]
    book: Optional[str]
    chapter: Optional[int]
    section: Optional[int]
    word_category: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SkippedLine:
    line_number: int
    reason: str


@dataclass
class ImportReport:
    """Outcome of a bulk TSV import.

    ``skipped`` holds every rejected line with its reason; only the status
    message returned to the front-end is truncated.
    """

    inserted: int = 0
    skipped: List[SkippedLine] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def skipped_line_numbers(self) -> List[int]:
        return [item.line_number for item in self.skipped]

    def summary(self) -> str:
        """Human-readable status line for the import."""
        message = (
            f"Inserted {self.inserted} entries, "
            f"skipped {self.skipped_count} lines."
        )
        if not self.skipped:
            return message

        sample = self.skipped_line_numbers[:SKIPPED_SAMPLE_SIZE]
        message += " First skipped lines: " + ", ".join(str(n) for n in sample)
        if self.skipped_count > SKIPPED_SAMPLE_SIZE:
            message += ", ..."
        return message
