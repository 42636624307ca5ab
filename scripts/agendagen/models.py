"""Data records shared by the parser, the filler and the report writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .text import split_chairs

FIELD_SESSION_TITLE = "Session Title"
FIELD_SESSION_TIME = "Session Time"
FIELD_SESSION_NO = "Session No"
FIELD_CHAIRPERSONS = "Chairpersons"
FIELD_TIME = "Time"
FIELD_TOPIC_TITLE = "Topic Title"
FIELD_SPEAKER = "Speaker"

FIELD_VOCABULARY = (
    FIELD_SESSION_TITLE,
    FIELD_SESSION_TIME,
    FIELD_SESSION_NO,
    FIELD_CHAIRPERSONS,
    FIELD_TIME,
    FIELD_TOPIC_TITLE,
    FIELD_SPEAKER,
)

AvailableFields = Dict[str, bool]


@dataclass(frozen=True)
class Topic:
    time: str = ""
    title: str = ""
    speaker: str = ""


@dataclass(frozen=True)
class Session:
    title: str
    time: str = ""
    no: str = ""
    chairs: str = ""
    topics: tuple[Topic, ...] = ()

    @property
    def chair_names(self) -> list[str]:
        return split_chairs(self.chairs)


@dataclass(frozen=True)
class NameMatchResult:
    found: bool
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    search_attempts: tuple[str, ...] = ()


@dataclass
class FailedImage:
    name: str
    attempts: list[str] = field(default_factory=list)


@dataclass
class ImageResults:
    """Image automation tally for one generation run."""

    enabled: bool = False
    folder: str = ""
    successful: list[str] = field(default_factory=list)
    failed: list[FailedImage] = field(default_factory=list)
    total_attempted: int = 0

    def activate(self, folder: str) -> None:
        self.enabled = True
        self.folder = folder


@dataclass(frozen=True)
class FillWarning:
    step: str
    label: str
    message: str

    def __str__(self) -> str:
        return f"{self.step} [{self.label}]: {self.message}"


@dataclass
class FillResult:
    session_title: str
    filled: list[str] = field(default_factory=list)
    warnings: list[FillWarning] = field(default_factory=list)
    chair_clones: int = 0
    topic_rows: int = 0
    complete: bool = True


@dataclass(frozen=True)
class PageFailure:
    page: int
    session_title: str
    message: str


@dataclass(frozen=True)
class OversetFinding:
    page: int
    label: str

    @property
    def location(self) -> str:
        return f"Page {self.page}, {self.label or 'unnamed'} text frame"


@dataclass
class RunContext:
    """State carried across the sessions of a single generation run."""

    image_results: ImageResults = field(default_factory=ImageResults)
    fill_results: list[FillResult] = field(default_factory=list)
    failures: list[PageFailure] = field(default_factory=list)
    overset: list[OversetFinding] = field(default_factory=list)

    @property
    def warnings(self) -> list[FillWarning]:
        return [w for result in self.fill_results for w in result.warnings]
