"""Parsing of tab-separated vocabulary text pasted by the user.

Rules:
- The first line is a header and is skipped without validation
- Blank lines are ignored entirely
- Each data line must hold exactly 12 tab-separated fields
- Line numbers are 1-based and include the header
"""

import math
import re
from dataclasses import astuple, dataclass
from typing import Iterator, List, Optional, Tuple, Union

from vocab_study.core import SkippedLine

FIELD_COUNT = 12

# Column order of a data line. Also the column order of the INSERT statement.
TSV_COLUMNS = (
    "english",
    "furigana",
    "japanese",
    "chapter",
    "word_category",
    "times_seen",
    "recently_missed_percent",
    "flag",
    "public_notes",
    "personal_notes",
    "book",
    "section",
)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class ParsedRow:
    english: Optional[str]
    furigana: Optional[str]
    japanese: Optional[str]
    chapter: Optional[int]
    word_category: Optional[str]
    times_seen: int
    recently_missed_percent: float
    flag: int
    public_notes: Optional[str]
    personal_notes: Optional[str]
    book: Optional[str]
    section: Optional[int]

    def as_params(self) -> Tuple:
        """Values in TSV_COLUMNS order, ready for a parameterised INSERT."""
        return astuple(self)


@dataclass(frozen=True)
class ParsedLine:
    line_number: int
    row: ParsedRow


def parse_text(value: str) -> Optional[str]:
    """Empty fields are stored as NULL, everything else verbatim."""
    return value if value != "" else None


def parse_optional_int(value: str) -> Optional[int]:
    """Parse a signed 64-bit integer, returning None when it does not parse."""
    if not _INTEGER_RE.fullmatch(value):
        return None
    number = int(value)
    if number < _INT64_MIN or number > _INT64_MAX:
        return None
    return number


def parse_int_or_zero(value: str) -> int:
    number = parse_optional_int(value)
    return number if number is not None else 0


def parse_float_or_zero(value: str) -> float:
    """Parse a finite float; anything else (including nan/inf) becomes 0.0."""
    if not _FLOAT_RE.fullmatch(value):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def parse_fields(fields: List[str]) -> ParsedRow:
    """Build a row from exactly FIELD_COUNT raw fields."""
    (
        english,
        furigana,
        japanese,
        chapter,
        word_category,
        times_seen,
        recently_missed_percent,
        flag,
        public_notes,
        personal_notes,
        book,
        section,
    ) = fields
    return ParsedRow(
        english=parse_text(english),
        furigana=parse_text(furigana),
        japanese=parse_text(japanese),
        chapter=parse_optional_int(chapter),
        word_category=parse_text(word_category),
        times_seen=parse_int_or_zero(times_seen),
        recently_missed_percent=parse_float_or_zero(recently_missed_percent),
        flag=parse_int_or_zero(flag),
        public_notes=parse_text(public_notes),
        personal_notes=parse_text(personal_notes),
        book=parse_text(book),
        section=parse_optional_int(section),
    )


def iter_data_lines(tsv_data: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, line) for every non-blank line after the header."""
    for index, line in enumerate(tsv_data.split("\n")):
        if index == 0:
            continue
        line = line.rstrip("\r")
        if not line.strip():
            continue
        yield index + 1, line


def parse_tsv(tsv_data: str) -> Iterator[Union[ParsedLine, SkippedLine]]:
    """Parse every data line, yielding a ParsedLine or a SkippedLine for each.

    Malformed lines never stop the parse; the caller decides what to do
    with the rejects.
    """
    for line_number, line in iter_data_lines(tsv_data):
        fields = line.split("\t")
        if len(fields) != FIELD_COUNT:
            yield SkippedLine(
                line_number=line_number,
                reason=f"expected {FIELD_COUNT} fields, found {len(fields)}",
            )
            continue
        yield ParsedLine(line_number=line_number, row=parse_fields(fields))
