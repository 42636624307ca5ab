"""Page object model the filler works against.

The filler never touches a document library directly. A host binding
(``pptx_host`` for PowerPoint files, an in-memory one in the tests)
implements these interfaces. Geometry is always page space, in points.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterator, Optional

from .layout import Bounds

KIND_TEXT = "text"
KIND_GROUP = "group"
KIND_TABLE = "table"
KIND_IMAGE = "image"
KIND_SHAPE = "shape"


class TextTarget(ABC):
    """Anything holding paragraphs: a text frame or a table cell."""

    @property
    @abstractmethod
    def text(self) -> str: ...

    @text.setter
    @abstractmethod
    def text(self, value: str) -> None: ...


class TableHandle(ABC):
    @property
    @abstractmethod
    def row_count(self) -> int: ...

    @property
    @abstractmethod
    def column_count(self) -> int: ...

    @abstractmethod
    def add_row(self) -> None: ...

    @abstractmethod
    def remove_last_row(self) -> None: ...

    @abstractmethod
    def add_column(self) -> None: ...

    @abstractmethod
    def remove_last_column(self) -> None: ...

    @abstractmethod
    def set_header_rows(self, count: int) -> None: ...

    @abstractmethod
    def set_column_widths(self, fractions: list[float]) -> None: ...

    @abstractmethod
    def apply_table_style(self, name: str) -> None: ...

    @abstractmethod
    def cell(self, row: int, col: int) -> TextTarget: ...


class PageElement(TextTarget):
    @property
    @abstractmethod
    def label(self) -> str: ...

    @label.setter
    @abstractmethod
    def label(self, value: str) -> None: ...

    @property
    @abstractmethod
    def kind(self) -> str: ...

    @property
    @abstractmethod
    def bounds(self) -> Bounds: ...

    @property
    @abstractmethod
    def visible(self) -> bool: ...

    @visible.setter
    @abstractmethod
    def visible(self, value: bool) -> None: ...

    @property
    @abstractmethod
    def parent(self) -> Optional["PageElement"]:
        """Enclosing group, or None for a top-level element."""

    @abstractmethod
    def children(self) -> list["PageElement"]: ...

    @abstractmethod
    def duplicate(self) -> "PageElement":
        """Copy this element as a new top-level element at the same page position."""

    @abstractmethod
    def move_by(self, dx: float, dy: float) -> None: ...

    @abstractmethod
    def remove(self) -> None: ...

    @abstractmethod
    def table(self) -> Optional[TableHandle]: ...

    @abstractmethod
    def place_image(self, path: Path, fitting: str) -> "PageElement":
        """Put the picture at ``path`` into this frame; return the element now carrying the label."""

    @abstractmethod
    def overflows(self) -> bool: ...

    @property
    def is_text_capable(self) -> bool:
        return self.kind == KIND_TEXT

    def descendants(self) -> Iterator["PageElement"]:
        for child in self.children():
            yield child
            yield from child.descendants()

    def find_descendant(self, label: str) -> Optional["PageElement"]:
        for element in self.descendants():
            if element.label == label:
                return element
        return None

    def ancestors(self) -> Iterator["PageElement"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def move_to(self, x: float, y: float) -> None:
        b = self.bounds
        self.move_by(x - b.left, y - b.top)


class Page(ABC):
    @property
    @abstractmethod
    def bounds(self) -> Bounds: ...

    @abstractmethod
    def top_level(self) -> list[PageElement]: ...

    @abstractmethod
    def create_table(self, frame: PageElement, rows: int, cols: int) -> PageElement:
        """Replace ``frame`` by a table element with the same label and geometry."""

    def all_elements(self) -> Iterator[PageElement]:
        for element in self.top_level():
            yield element
            yield from element.descendants()

    def find_item(self, label: str) -> Optional[PageElement]:
        for element in self.all_elements():
            if element.label == label:
                return element
        return None


StyleCallback = Callable[[TextTarget, str], None]


def no_styles(target: TextTarget, style_name: str) -> None:
    if style_name:
        raise KeyError(f"No style catalog available for '{style_name}'")
