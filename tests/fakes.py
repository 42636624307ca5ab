"""In-memory page model used by the filler tests."""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Optional

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from agendagen.host import KIND_GROUP, KIND_IMAGE, KIND_TABLE, KIND_TEXT, Page, PageElement, TableHandle, TextTarget  # noqa: E402
from agendagen.layout import Bounds  # noqa: E402


class FakeCell(TextTarget):
    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value


class FakeTable(TableHandle):
    def __init__(self, rows: int, cols: int):
        self.rows = [[FakeCell() for _ in range(cols)] for _ in range(rows)]
        self.header_rows = 0
        self.widths: list[float] = []
        self.style = ""

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def add_row(self) -> None:
        self.rows.append([FakeCell() for _ in range(self.column_count or 1)])

    def remove_last_row(self) -> None:
        self.rows.pop()

    def add_column(self) -> None:
        for row in self.rows:
            row.append(FakeCell())

    def remove_last_column(self) -> None:
        for row in self.rows:
            row.pop()

    def set_header_rows(self, count: int) -> None:
        self.header_rows = count

    def set_column_widths(self, fractions: list[float]) -> None:
        self.widths = list(fractions)

    def apply_table_style(self, name: str) -> None:
        if name == "Broken":
            raise KeyError("Unknown table style 'Broken'")
        self.style = name

    def cell(self, row: int, col: int) -> FakeCell:
        return self.rows[row][col]

    def texts(self) -> list[list[str]]:
        return [[c.text for c in row] for row in self.rows]


class FakeElement(PageElement):
    def __init__(
        self,
        label: str,
        bounds: Bounds,
        *,
        kind: str = KIND_TEXT,
        text: str = "",
        children: Optional[list["FakeElement"]] = None,
        table: Optional[FakeTable] = None,
    ):
        self._label = label
        self._bounds = bounds
        self._kind = kind
        self._text = text
        self._visible = True
        self._parent: Optional[FakeElement] = None
        self._children: list[FakeElement] = []
        self._table = table
        self.page: Optional[FakePage] = None
        self.placed_images: list[tuple[str, str]] = []
        self.fail_on_text = False
        self.overflowing = False
        for child in children or []:
            self.add_child(child)

    def __repr__(self) -> str:
        return f"<FakeElement {self._kind} '{self._label}'>"

    def add_child(self, child: "FakeElement") -> None:
        child._parent = self
        self._children.append(child)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        self._label = value

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self._visible = value

    @property
    def parent(self) -> Optional["FakeElement"]:
        return self._parent

    def children(self) -> list["FakeElement"]:
        return list(self._children)

    @property
    def text(self) -> str:
        if self._kind != KIND_TEXT:
            raise TypeError(f"'{self._label}' has no text frame")
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if self._kind != KIND_TEXT or self.fail_on_text:
            raise TypeError(f"'{self._label}' has no text frame")
        self._text = value

    def duplicate(self) -> "FakeElement":
        clone = self._copy()
        clone._parent = None
        self.page.add(clone)
        return clone

    def _copy(self) -> "FakeElement":
        clone = FakeElement(self._label, self._bounds, kind=self._kind, text=self._text, table=copy.deepcopy(self._table))
        clone._visible = self._visible
        for child in self._children:
            clone.add_child(child._copy())
        return clone

    def move_by(self, dx: float, dy: float) -> None:
        b = self._bounds
        self._bounds = Bounds(b.left + dx, b.top + dy, b.width, b.height)
        for child in self._children:
            child.move_by(dx, dy)

    def remove(self) -> None:
        if self._parent is not None:
            self._parent._children.remove(self)
        else:
            self.page.elements.remove(self)

    def table(self) -> Optional[FakeTable]:
        return self._table

    def place_image(self, path: Path, fitting: str) -> "FakeElement":
        self.placed_images.append((Path(path).name, fitting))
        self._kind = KIND_IMAGE
        return self

    def overflows(self) -> bool:
        return self.overflowing


class FakePage(Page):
    def __init__(self, elements: list[FakeElement], width: float = 800.0, height: float = 600.0):
        self.elements: list[FakeElement] = []
        self._bounds = Bounds(0.0, 0.0, width, height)
        for element in elements:
            self.add(element)

    def add(self, element: FakeElement) -> None:
        def attach(el: FakeElement) -> None:
            el.page = self
            for child in el._children:
                attach(child)

        attach(element)
        self.elements.append(element)

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def top_level(self) -> list[FakeElement]:
        return list(self.elements)

    def create_table(self, frame: PageElement, rows: int, cols: int) -> FakeElement:
        element = FakeElement(frame.label, frame.bounds, kind=KIND_TABLE, table=FakeTable(rows, cols))
        self.add(element)
        frame.remove()
        return element

    def labelled(self, label: str) -> list[FakeElement]:
        return [el for el in self.elements if el.label == label]


def text_frame(label: str, left: float = 0, top: float = 0, width: float = 100, height: float = 20, text: str = "") -> FakeElement:
    return FakeElement(label, Bounds(left, top, width, height), text=text)


def group(label: str, children: list[FakeElement], left: float, top: float, width: float, height: float) -> FakeElement:
    return FakeElement(label, Bounds(left, top, width, height), kind=KIND_GROUP, children=children)


def table_frame(label: str, rows: int, cols: int) -> FakeElement:
    return FakeElement(label, Bounds(50, 300, 600, 200), kind=KIND_TABLE, table=FakeTable(rows, cols))


class RecordingStyles:
    def __init__(self, known: tuple[str, ...] = ("Title", "Body", "Cell")):
        self.known = known
        self.calls: list[tuple[str, str]] = []

    def __call__(self, target: TextTarget, style_name: str) -> None:
        if style_name not in self.known:
            raise KeyError(f"Unknown paragraph style '{style_name}'")
        self.calls.append((target.text, style_name))
