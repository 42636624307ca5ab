"""Typed agenda settings and their JSON shape.

The JSON tree keeps the key names of the settings files users already
have (``chairOptions``, ``topicOptions``, ``lineBreakOptions``,
``stylesOptions``, ``reportOptions``). Missing keys take the defaults below.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .layout import to_points
from .validation import LINE_BREAK_FIELDS, validate_settings, validate_settings_file


@dataclass
class ChairLayoutConfig:
    mode: str = "inline"
    inline_separator: str = "comma"
    order: str = "row"
    columns: int = 2
    rows: int = 2
    col_spacing: float = 8.0
    row_spacing: float = 4.0
    units: str = "pt"
    center_grid: bool = False
    enable_images: bool = False
    image_folder: str = ""
    image_fitting: str = "Use Template Default"

    @property
    def col_spacing_pt(self) -> float:
        return to_points(self.col_spacing, self.units)

    @property
    def row_spacing_pt(self) -> float:
        return to_points(self.row_spacing, self.units)

    @property
    def images_active(self) -> bool:
        return self.enable_images and bool(self.image_folder.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChairLayoutConfig":
        d = cls()
        return cls(
            mode=data.get("mode", d.mode),
            inline_separator=data.get("inlineSeparator", d.inline_separator),
            order=data.get("order", d.order),
            columns=_clamp_count(data.get("columns", d.columns)),
            rows=_clamp_count(data.get("rows", d.rows)),
            col_spacing=float(data.get("colSpacing", d.col_spacing)),
            row_spacing=float(data.get("rowSpacing", d.row_spacing)),
            units=data.get("units", d.units),
            center_grid=bool(data.get("centerGrid", d.center_grid)),
            enable_images=bool(data.get("enableImages", d.enable_images)),
            image_folder=data.get("imageFolder", d.image_folder) or "",
            image_fitting=data.get("imageFitting", d.image_fitting),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "inlineSeparator": self.inline_separator,
            "order": self.order,
            "columns": self.columns,
            "rows": self.rows,
            "colSpacing": self.col_spacing,
            "rowSpacing": self.row_spacing,
            "colSpacingPt": self.col_spacing_pt,
            "rowSpacingPt": self.row_spacing_pt,
            "units": self.units,
            "centerGrid": self.center_grid,
            "enableImages": self.enable_images,
            "imageFolder": self.image_folder,
            "imageFitting": self.image_fitting,
        }


@dataclass
class TopicLayoutConfig:
    mode: Optional[str] = None
    include_header: bool = True
    vertical_spacing: float = 4.0
    units: str = "pt"

    @property
    def vertical_spacing_pt(self) -> float:
        return to_points(self.vertical_spacing, self.units)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopicLayoutConfig":
        d = cls()
        return cls(
            mode=data.get("mode", d.mode),
            include_header=bool(data.get("includeHeader", d.include_header)),
            vertical_spacing=float(data.get("verticalSpacing", d.vertical_spacing)),
            units=data.get("units", d.units),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "includeHeader": self.include_header,
            "verticalSpacing": self.vertical_spacing,
            "verticalSpacingPt": self.vertical_spacing_pt,
            "units": self.units,
        }


@dataclass
class LineBreakRule:
    enabled: bool = False
    character: str = "|"

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.character)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineBreakRule":
        return cls(enabled=bool(data.get("enabled", False)), character=str(data.get("character", "|")))

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "character": self.character}


@dataclass
class ParagraphStyle:
    font: Optional[str] = None
    size: Optional[float] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    color: Optional[str] = None
    align: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParagraphStyle":
        size = data.get("size")
        return cls(
            font=data.get("font"),
            size=float(size) if size is not None else None,
            bold=data.get("bold"),
            italic=data.get("italic"),
            color=data.get("color"),
            align=data.get("align"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in ("font", "size", "bold", "italic", "color", "align"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class StylesConfig:
    table_style: str = ""
    cell_style: str = ""
    session_title: str = ""
    session_time: str = ""
    session_no: str = ""
    chair: str = ""
    topic_time: str = ""
    topic_title: str = ""
    topic_speaker: str = ""
    paragraph_styles: Dict[str, ParagraphStyle] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StylesConfig":
        table = data.get("table") or {}
        session = data.get("session") or {}
        chair = data.get("chair") or {}
        topics = data.get("topicsIndependent") or {}
        catalog = data.get("paragraphStyles") or {}
        return cls(
            table_style=table.get("tableStyle", "") or "",
            cell_style=table.get("cellStyle", "") or "",
            session_title=session.get("titlePara", "") or "",
            session_time=session.get("timePara", "") or "",
            session_no=session.get("noPara", "") or "",
            chair=chair.get("style", "") or "",
            topic_time=topics.get("timePara", "") or "",
            topic_title=topics.get("titlePara", "") or "",
            topic_speaker=topics.get("speakerPara", "") or "",
            paragraph_styles={name: ParagraphStyle.from_dict(spec) for name, spec in catalog.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": {"tableStyle": self.table_style, "cellStyle": self.cell_style},
            "session": {
                "titlePara": self.session_title,
                "timePara": self.session_time,
                "noPara": self.session_no,
            },
            "chair": {"style": self.chair},
            "topicsIndependent": {
                "timePara": self.topic_time,
                "titlePara": self.topic_title,
                "speakerPara": self.topic_speaker,
            },
            "paragraphStyles": {name: style.to_dict() for name, style in self.paragraph_styles.items()},
        }


@dataclass
class ReportOptions:
    include_overset: bool = True
    include_images: bool = True
    include_counts: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportOptions":
        return cls(
            include_overset=bool(data.get("includeOverset", True)),
            include_images=bool(data.get("includeImages", True)),
            include_counts=bool(data.get("includeCounts", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "includeImages": self.include_images,
            "includeOverset": self.include_overset,
            "includeCounts": self.include_counts,
        }


def _default_line_breaks() -> Dict[str, LineBreakRule]:
    return {key: LineBreakRule() for key in LINE_BREAK_FIELDS}


def _clamp_count(value: Any) -> int:
    return max(1, min(99, int(value)))


@dataclass
class AgendaSettings:
    chair: ChairLayoutConfig = field(default_factory=ChairLayoutConfig)
    topic: TopicLayoutConfig = field(default_factory=TopicLayoutConfig)
    line_breaks: Dict[str, LineBreakRule] = field(default_factory=_default_line_breaks)
    styles: StylesConfig = field(default_factory=StylesConfig)
    report: ReportOptions = field(default_factory=ReportOptions)

    def line_break(self, key: str) -> LineBreakRule:
        return self.line_breaks.get(key) or LineBreakRule()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgendaSettings":
        validate_settings(data)
        line_breaks = _default_line_breaks()
        raw_breaks = (data.get("lineBreakOptions") or {}).get("lineBreaks") or {}
        for key, rule in raw_breaks.items():
            line_breaks[key] = LineBreakRule.from_dict(rule)
        return cls(
            chair=ChairLayoutConfig.from_dict(data.get("chairOptions") or {}),
            topic=TopicLayoutConfig.from_dict(data.get("topicOptions") or {}),
            line_breaks=line_breaks,
            styles=StylesConfig.from_dict(data.get("stylesOptions") or {}),
            report=ReportOptions.from_dict(data.get("reportOptions") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chairOptions": self.chair.to_dict(),
            "topicOptions": self.topic.to_dict(),
            "lineBreakOptions": {"lineBreaks": {k: v.to_dict() for k, v in self.line_breaks.items()}},
            "stylesOptions": self.styles.to_dict(),
            "reportOptions": self.report.to_dict(),
        }


def default_settings() -> AgendaSettings:
    return AgendaSettings()


def load_settings(path: Path) -> AgendaSettings:
    data = validate_settings_file(Path(path))
    return AgendaSettings.from_dict(data)


def save_settings(settings: AgendaSettings, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
