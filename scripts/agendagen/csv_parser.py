"""Session CSV parsing.

Turns the raw text of an agenda CSV (comma or semicolon separated, optional
BOM, any line-ending convention) into an ordered list of :class:`Session`
records. Contiguous rows sharing a ``Session Title`` are merged into one
session; every row with any topic content contributes a :class:`Topic`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .errors import EmptyInputError, MissingRequiredColumnError
from .models import (
    FIELD_CHAIRPERSONS,
    FIELD_SESSION_NO,
    FIELD_SESSION_TIME,
    FIELD_SESSION_TITLE,
    FIELD_SPEAKER,
    FIELD_TIME,
    FIELD_TOPIC_TITLE,
    FIELD_VOCABULARY,
    AvailableFields,
    Session,
    Topic,
)
from .text import normalize_newlines

BOM = "\ufeff"


@dataclass(frozen=True)
class ParseResult:
    sessions: list[Session]
    available_fields: AvailableFields
    delimiter: str
    headers: list[str]


@dataclass
class _SessionDraft:
    title: str
    time: str = ""
    no: str = ""
    chairs: str = ""
    topics: list[Topic] = field(default_factory=list)

    def backfill(self, time: str, no: str, chairs: str) -> None:
        if not self.time and time:
            self.time = time
        if not self.no and no:
            self.no = no
        if not self.chairs and chairs:
            self.chairs = chairs

    def freeze(self) -> Session:
        return Session(
            title=self.title,
            time=self.time,
            no=self.no,
            chairs=self.chairs,
            topics=tuple(self.topics),
        )


def detect_delimiter(header_line: str) -> str:
    """Comma unless semicolons strictly outnumber commas."""
    return ";" if header_line.count(";") > header_line.count(",") else ","


def split_line(line: str, delimiter: str) -> list[str]:
    """Tokenize one physical line.

    Any ``"`` toggles quoting, wherever it sits in the field, and ``""``
    inside quotes is a literal quote. Delimiters inside quotes are kept.
    """
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current))
    return cells


def parse_csv_text(raw: str) -> ParseResult:
    text = raw[1:] if raw.startswith(BOM) else raw
    lines = normalize_newlines(text).split("\n")

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines):
        raise EmptyInputError()

    header_line = lines[start]
    delimiter = detect_delimiter(header_line)
    headers = [h.strip() for h in split_line(header_line, delimiter)]

    columns: Dict[str, int] = {}
    for idx, name in enumerate(headers):
        if name in FIELD_VOCABULARY and name not in columns:
            columns[name] = idx
    available = {name: name in columns for name in FIELD_VOCABULARY}

    if FIELD_SESSION_TITLE not in columns:
        raise MissingRequiredColumnError(delimiter, headers)

    sessions: list[Session] = []
    current: Optional[_SessionDraft] = None
    last_title: Optional[str] = None

    for line in lines[start + 1 :]:
        if not line.strip():
            continue
        cells = split_line(line, delimiter)
        if len(cells) < len(headers):
            cells.extend([""] * (len(headers) - len(cells)))

        def value(name: str) -> str:
            idx = columns.get(name)
            if idx is None or idx >= len(cells):
                return ""
            return cells[idx].strip()

        title = value(FIELD_SESSION_TITLE)
        if current is None or title != last_title:
            if current is not None:
                sessions.append(current.freeze())
            current = _SessionDraft(title=title)
            last_title = title
        current.backfill(value(FIELD_SESSION_TIME), value(FIELD_SESSION_NO), value(FIELD_CHAIRPERSONS))

        topic = Topic(time=value(FIELD_TIME), title=value(FIELD_TOPIC_TITLE), speaker=value(FIELD_SPEAKER))
        if topic.time or topic.title or topic.speaker:
            current.topics.append(topic)

    if current is not None:
        sessions.append(current.freeze())

    return ParseResult(sessions=sessions, available_fields=available, delimiter=delimiter, headers=headers)


def parse_csv_file(path: Path) -> ParseResult:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"CSV file not found: {path}") from exc
    return parse_csv_text(raw)
