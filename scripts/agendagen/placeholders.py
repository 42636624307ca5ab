"""Placeholder labels and their page-wide resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import NoPlaceholdersFoundError
from .host import KIND_GROUP, KIND_TABLE, Page, PageElement

SESSION_TITLE = "sessionTitle"
SESSION_TIME = "sessionTime"
SESSION_NO = "sessionNo"
CHAIRPERSONS = "chairpersons"
TOPICS_TABLE = "topicsTable"
TOPIC_TIME = "topicTime"
TOPIC_TITLE = "topicTitle"
TOPIC_SPEAKER = "topicSpeaker"
CHAIR_AVATAR = "chairAvatar"
CHAIR_FLAG = "chairFlag"

KNOWN_LABELS = (
    SESSION_TITLE,
    SESSION_TIME,
    SESSION_NO,
    CHAIRPERSONS,
    TOPICS_TABLE,
    TOPIC_TIME,
    TOPIC_TITLE,
    TOPIC_SPEAKER,
)

CHAIR_CLONE = "chairClone"
TOPIC_CLONE_GROUP = "topicCloneGroup"
TOPIC_CLONE_PREFIX = "topicClone_"


def is_generated(label: str) -> bool:
    return label == CHAIR_CLONE or label == TOPIC_CLONE_GROUP or label.startswith(TOPIC_CLONE_PREFIX)


@dataclass(frozen=True)
class TextPlaceholder:
    label: str
    element: PageElement


@dataclass(frozen=True)
class TablePlaceholder:
    label: str
    element: PageElement


@dataclass(frozen=True)
class ImagePlaceholder:
    label: str
    element: PageElement


@dataclass(frozen=True)
class PlaceholderSet:
    session_title: Optional[TextPlaceholder] = None
    session_time: Optional[TextPlaceholder] = None
    session_no: Optional[TextPlaceholder] = None
    chairpersons: Optional[TextPlaceholder] = None
    topics_table: Optional[TablePlaceholder] = None
    topic_time: Optional[TextPlaceholder] = None
    topic_title: Optional[TextPlaceholder] = None
    topic_speaker: Optional[TextPlaceholder] = None
    chair_avatar: Optional[ImagePlaceholder] = None
    chair_flag: Optional[ImagePlaceholder] = None

    @property
    def topic_frames(self) -> dict[str, Optional[TextPlaceholder]]:
        return {TOPIC_TIME: self.topic_time, TOPIC_TITLE: self.topic_title, TOPIC_SPEAKER: self.topic_speaker}

    @property
    def missing_topic_frames(self) -> list[str]:
        return [label for label, ph in self.topic_frames.items() if ph is None]

    @property
    def supports_table(self) -> bool:
        return self.topics_table is not None

    @property
    def supports_independent(self) -> bool:
        return not self.missing_topic_frames

    @property
    def image_automation_available(self) -> bool:
        return self.chair_avatar is not None or self.chair_flag is not None

    @property
    def found_labels(self) -> list[str]:
        fields = (
            self.session_title,
            self.session_time,
            self.session_no,
            self.chairpersons,
            self.topics_table,
            self.topic_time,
            self.topic_title,
            self.topic_speaker,
        )
        return [ph.label for ph in fields if ph is not None]


def _template_elements(page: Page) -> Iterator[PageElement]:
    """Every element on the page that is not part of a generated clone."""

    def walk(elements: list[PageElement]) -> Iterator[PageElement]:
        for element in elements:
            if is_generated(element.label):
                continue
            yield element
            yield from walk(element.children())

    yield from walk(page.top_level())


def _first(page_elements: list[PageElement], label: str, *, text_only: bool = False) -> Optional[PageElement]:
    for element in page_elements:
        if element.label != label:
            continue
        if text_only and not element.is_text_capable:
            continue
        return element
    return None


def resolve_placeholders(page: Page, *, require_any: bool = True) -> PlaceholderSet:
    """Look up every known label once for ``page``."""
    elements = list(_template_elements(page))

    def text(label: str) -> Optional[TextPlaceholder]:
        element = _first(elements, label, text_only=True)
        return TextPlaceholder(label, element) if element is not None else None

    def image(label: str) -> Optional[ImagePlaceholder]:
        element = _first(elements, label)
        return ImagePlaceholder(label, element) if element is not None else None

    table_el = None
    for element in elements:
        if element.label == TOPICS_TABLE and (element.kind == KIND_TABLE or element.is_text_capable):
            table_el = element
            break

    placeholders = PlaceholderSet(
        session_title=text(SESSION_TITLE),
        session_time=text(SESSION_TIME),
        session_no=text(SESSION_NO),
        chairpersons=text(CHAIRPERSONS),
        topics_table=TablePlaceholder(TOPICS_TABLE, table_el) if table_el is not None else None,
        topic_time=text(TOPIC_TIME),
        topic_title=text(TOPIC_TITLE),
        topic_speaker=text(TOPIC_SPEAKER),
        chair_avatar=image(CHAIR_AVATAR),
        chair_flag=image(CHAIR_FLAG),
    )
    if require_any and not placeholders.found_labels:
        raise NoPlaceholdersFoundError(KNOWN_LABELS)
    return placeholders


@dataclass(frozen=True)
class TemplateAnalysis:
    found_labels: tuple[str, ...]
    supports_table: bool
    supports_independent: bool
    image_automation_available: bool
    chair_prototype_is_group: bool

    @property
    def compatibility(self) -> str:
        return "Good" if self.supports_table or self.supports_independent else "Limited"

    @property
    def suggested_topic_mode(self) -> str:
        if self.supports_table:
            return "table"
        if self.supports_independent:
            return "independent"
        return "table"

    @property
    def suggested_chair_mode(self) -> str:
        return "inline"

    def summary_lines(self) -> list[str]:
        return [
            f"Placeholders: {', '.join(self.found_labels) or '(none)'}",
            f"Table topics: {'yes' if self.supports_table else 'no'}",
            f"Independent topics: {'yes' if self.supports_independent else 'no'}",
            f"Image automation: {'yes' if self.image_automation_available else 'no'}",
            f"Chair grid images: {'yes' if self.chair_prototype_is_group else 'no (chairpersons frame is not grouped)'}",
            f"Compatibility: {self.compatibility}",
            f"Suggested topic mode: {self.suggested_topic_mode}",
            f"Suggested chair mode: {self.suggested_chair_mode}",
        ]


def analyze_template(page: Page) -> TemplateAnalysis:
    placeholders = resolve_placeholders(page, require_any=False)
    chair = placeholders.chairpersons
    return TemplateAnalysis(
        found_labels=tuple(placeholders.found_labels),
        supports_table=placeholders.supports_table,
        supports_independent=placeholders.supports_independent,
        image_automation_available=placeholders.image_automation_available,
        chair_prototype_is_group=bool(chair and chair.element.parent and chair.element.parent.kind == KIND_GROUP),
    )
