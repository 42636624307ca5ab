"""Geometry for chairperson grids and independent topic rows.

All values are points. Callers convert configured spacings with
:func:`to_points` before handing them in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

UNIT_TO_POINTS = {
    "pt": 1.0,
    "mm": 2.834645669,
    "cm": 28.34645669,
    # 96 dpi screen pixels to 72 dpi points.
    "px": 0.75,
}


@dataclass(frozen=True)
class Bounds:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Point:
    x: float
    y: float


def to_points(value: Any, units: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number * UNIT_TO_POINTS.get(units, 1.0)


def parse_value_with_unit(raw: Any, default_units: str = "pt") -> tuple[float, str]:
    """Split ``"8pt"`` / ``"5 mm"`` into ``(8.0, "pt")`` / ``(5.0, "mm")``.

    Unknown or missing units fall back to ``default_units``; an unparseable
    number is 0.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw), default_units
    text = str(raw or "").strip().lower()
    units = default_units
    for unit in UNIT_TO_POINTS:
        if text.endswith(unit):
            units = unit
            text = text[: -len(unit)].strip()
            break
    try:
        return float(text), units
    except ValueError:
        return 0.0, units


def grid_dimensions(total: int, order: str, columns: int, rows: int) -> tuple[int, int]:
    """Return ``(rows, cols)`` for ``total`` chairs."""
    if total <= 0:
        return 0, 0
    if order == "col":
        r = max(1, int(rows))
        return r, int(math.ceil(total / r))
    c = max(1, int(columns))
    return int(math.ceil(total / c)), c


def grid_cell(index: int, order: str, rows: int, cols: int) -> tuple[int, int]:
    """Return ``(row, col)`` of item ``index``."""
    if order == "col":
        return index % rows, index // rows
    return index // cols, index % cols


def centered_start_x(total: int, cols: int, item_width: float, col_spacing: float, container: Bounds) -> float:
    used = min(cols, total)
    width = (used - 1) * col_spacing + used * item_width
    return container.left + (container.width - width) / 2


def chair_grid_positions(
    total: int,
    *,
    order: str,
    columns: int,
    rows: int,
    col_spacing: float,
    row_spacing: float,
    prototype: Bounds,
    container: Bounds,
    center: bool = False,
) -> list[Point]:
    """Top-left target for each of ``total`` chair clones."""
    n_rows, n_cols = grid_dimensions(total, order, columns, rows)
    if not total:
        return []
    start_x = prototype.left
    if center:
        start_x = centered_start_x(total, n_cols, prototype.width, col_spacing, container)
    start_y = prototype.top

    positions: list[Point] = []
    for i in range(total):
        r, c = grid_cell(i, order, n_rows, n_cols)
        positions.append(
            Point(
                x=start_x + c * (prototype.width + col_spacing),
                y=start_y + r * (prototype.height + row_spacing),
            )
        )
    return positions


def topic_row_offsets(count: int, row_height: float, spacing: float) -> list[float]:
    """Vertical offset of each topic row relative to the prototype row."""
    return [i * (row_height + spacing) for i in range(max(0, count))]


def union_bounds(items: Iterable[Bounds]) -> Bounds:
    items = list(items)
    if not items:
        return Bounds(0.0, 0.0, 0.0, 0.0)
    left = min(b.left for b in items)
    top = min(b.top for b in items)
    right = max(b.right for b in items)
    bottom = max(b.bottom for b in items)
    return Bounds(left, top, right - left, bottom - top)
