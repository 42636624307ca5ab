"""python-pptx binding of the page object model.

A template page is a slide, a placeholder label is the shape name (the
name shown in PowerPoint's Selection Pane), and groups, tables and pictures
map onto python-pptx group shapes, graphic-frame tables and pictures.
python-pptx has no public API for copying slides or shapes, adding table
rows, or hiding shapes, so those operations edit the slide XML directly.
"""

from __future__ import annotations

import copy
import math
import re
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from PIL import Image
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_AUTO_SIZE, PP_ALIGN
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.shapes.group import GroupShape
from pptx.shapes.picture import Picture
from pptx.util import Emu, Pt

from .errors import TemplateError
from .host import (
    KIND_GROUP,
    KIND_IMAGE,
    KIND_SHAPE,
    KIND_TABLE,
    KIND_TEXT,
    Page,
    PageElement,
    TableHandle,
    TextTarget,
)
from .layout import Bounds
from .settings import ParagraphStyle

EMU_PER_POINT = 12700

FIT_TEMPLATE_DEFAULT = "Use Template Default"
FIT_FILL = "Fill Frame"
FIT_PROPORTIONAL = "Fit Proportionally"
FIT_CONTENT = "Fit Content to Frame"
FIT_CENTER = "Center Content"

# Built-in PowerPoint table styles addressable by name.
TABLE_STYLE_IDS = {
    "Medium Style 2 - Accent 1": "{5C22544A-7EE6-4342-B048-85BDC9FD1C3A}",
    "No Style, No Grid": "{2D5ABB26-0587-4C30-8999-92F81FD0307C}",
    "No Style, Table Grid": "{5940675A-B579-460E-94D1-54222C63F5DA}",
}

ALIGNMENTS = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
    "justify": PP_ALIGN.JUSTIFY,
}

_SHAPE_TAGS = {qn("p:sp"), qn("p:grpSp"), qn("p:graphicFrame"), qn("p:cxnSp"), qn("p:pic"), qn("p:contentPart")}
_REL_ATTRS = (qn("r:embed"), qn("r:link"), qn("r:id"))
# characters XML 1.0 rejects; written in the same _xHHHH_ form python-pptx uses
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

DEFAULT_FONT_PT = 18.0
DEFAULT_INSET_PT = 7.2
LINE_HEIGHT_FACTOR = 1.2
AVG_GLYPH_WIDTH_EM = 0.5


def _pt(emu: Any) -> float:
    return int(emu or 0) / EMU_PER_POINT


def _emu(points: float) -> int:
    return int(round(points * EMU_PER_POINT))


def parse_rgb_color(value: Any) -> Optional[RGBColor]:
    if isinstance(value, RGBColor):
        return value
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None

    if raw.startswith("#"):
        raw = raw[1:]
    if re.fullmatch(r"[0-9A-Fa-f]{6}", raw):
        return RGBColor(int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))

    rgb_match = re.match(r"^rgb\((\d+)\s*,\s*(\d+)\s*,\s*(\d+)\)$", raw, re.IGNORECASE)
    if rgb_match:
        r, g, b = (int(rgb_match.group(i)) for i in range(1, 4))
        return RGBColor(max(0, min(r, 255)), max(0, min(g, 255)), max(0, min(b, 255)))

    return None


# -- XML helpers ------------------------------------------------------


def _xfrm(el):
    found = el.xpath("./p:spPr/a:xfrm | ./p:grpSpPr/a:xfrm | ./p:xfrm")
    return found[0] if found else None


def _ensure_xfrm(el, x: int, y: int, cx: int, cy: int):
    xfrm = _xfrm(el)
    if xfrm is None:
        props = el.find(qn("p:spPr"))
        if props is None:
            props = el.find(qn("p:grpSpPr"))
        if props is None:
            raise TemplateError(f"Shape element <{el.tag}> has no geometry container")
        xfrm = OxmlElement("a:xfrm")
        props.insert(0, xfrm)
    off = xfrm.find(qn("a:off"))
    if off is None:
        off = OxmlElement("a:off")
        xfrm.insert(0, off)
    ext = xfrm.find(qn("a:ext"))
    if ext is None:
        ext = OxmlElement("a:ext")
        off.addnext(ext)
    off.set("x", str(int(x)))
    off.set("y", str(int(y)))
    ext.set("cx", str(int(cx)))
    ext.set("cy", str(int(cy)))
    return xfrm


def _group_transform(grp_el) -> tuple[float, float, float, float, float, float]:
    """``(offX, offY, chOffX, chOffY, scaleX, scaleY)`` mapping child space to parent space."""
    xfrm = _xfrm(grp_el)
    if xfrm is None:
        return 0.0, 0.0, 0.0, 0.0, 1.0, 1.0

    def pair(tag: str, a: str, b: str, default: tuple[float, float]) -> tuple[float, float]:
        node = xfrm.find(qn(tag))
        if node is None:
            return default
        return float(node.get(a, 0)), float(node.get(b, 0))

    ox, oy = pair("a:off", "x", "y", (0.0, 0.0))
    cx, cy = pair("a:ext", "cx", "cy", (0.0, 0.0))
    chx, chy = pair("a:chOff", "x", "y", (ox, oy))
    chcx, chcy = pair("a:chExt", "cx", "cy", (cx, cy))
    sx = cx / chcx if chcx else 1.0
    sy = cy / chcy if chcy else 1.0
    return ox, oy, chx, chy, sx, sy


def read_text_body(tx_body) -> str:
    paragraphs = []
    for p in tx_body.findall(qn("a:p")):
        parts = []
        for node in p:
            if node.tag in (qn("a:r"), qn("a:fld")):
                t = node.find(qn("a:t"))
                parts.append((t.text or "") if t is not None else "")
            elif node.tag == qn("a:br"):
                parts.append("\v")
        paragraphs.append("".join(parts))
    return "\n".join(paragraphs)


def write_text_body(tx_body, text: str) -> None:
    """Replace the paragraphs of ``tx_body`` with ``text``, one paragraph per line.

    The first paragraph's properties and first run's character properties
    are carried over to every new paragraph so template formatting survives.
    A vertical tab becomes a line break inside the paragraph. The old
    paragraphs are only removed once the new ones are built.
    """
    paragraphs = tx_body.findall(qn("a:p"))
    p_pr = r_pr = end_pr = None
    if paragraphs:
        first = paragraphs[0]
        p_pr = first.find(qn("a:pPr"))
        run = first.find(qn("a:r"))
        if run is not None:
            r_pr = run.find(qn("a:rPr"))
        end_pr = first.find(qn("a:endParaRPr"))
        if r_pr is None and end_pr is not None:
            r_pr = end_pr

    def char_props():
        rpr_copy = copy.deepcopy(r_pr)
        rpr_copy.tag = qn("a:rPr")
        return rpr_copy

    new_paragraphs = []
    for line in (text or "").split("\n"):
        p = OxmlElement("a:p")
        if p_pr is not None:
            p.append(copy.deepcopy(p_pr))
        for idx, segment in enumerate(line.split("\v")):
            if idx:
                br = OxmlElement("a:br")
                if r_pr is not None:
                    br.append(char_props())
                p.append(br)
            if not segment:
                continue
            r = OxmlElement("a:r")
            if r_pr is not None:
                r.append(char_props())
            t = OxmlElement("a:t")
            t.text = _escape_xml_invalid(segment)
            r.append(t)
            p.append(r)
        if end_pr is not None:
            p.append(copy.deepcopy(end_pr))
        new_paragraphs.append(p)

    for p in paragraphs:
        tx_body.remove(p)
    for p in new_paragraphs:
        tx_body.append(p)


def _escape_xml_invalid(value: str) -> str:
    return _XML_INVALID_CHARS.sub(lambda m: "_x%04X_" % ord(m.group()), value)


def _remap_rel_ids(el, rid_map: Dict[str, str]) -> None:
    for node in el.iter():
        for attr in _REL_ATTRS:
            value = node.get(attr)
            if value is not None and value in rid_map:
                node.set(attr, rid_map[value])


def _image_size(path: Path) -> tuple[int, int]:
    with Image.open(path) as im:
        return im.size


def compute_contain_geometry(iw: int, ih: int, x: int, y: int, cx: int, cy: int) -> tuple[int, int, int, int]:
    if cx <= 0 or cy <= 0 or iw <= 0 or ih <= 0:
        return x, y, cx, cy
    ratio = iw / ih
    box_ratio = cx / cy
    if ratio >= box_ratio:
        w = cx
        h = cx / ratio
    else:
        h = cy
        w = cy * ratio
    return int(x + (cx - w) / 2), int(y + (cy - h) / 2), int(w), int(h)


def compute_cover_crop(iw: int, ih: int, cx: int, cy: int) -> tuple[float, float]:
    """Horizontal and vertical crop fraction (per side) for a cover fit."""
    if cx <= 0 or cy <= 0 or iw <= 0 or ih <= 0:
        return 0.0, 0.0
    ratio = iw / ih
    box_ratio = cx / cy
    if ratio > box_ratio:
        return (1 - box_ratio / ratio) / 2, 0.0
    if ratio < box_ratio:
        return 0.0, (1 - ratio / box_ratio) / 2
    return 0.0, 0.0


# -- page model -------------------------------------------------------


class PptxCell(TextTarget):
    def __init__(self, cell):
        self._cell = cell

    @property
    def text_frame(self):
        return self._cell.text_frame

    @property
    def text(self) -> str:
        return read_text_body(self._cell.text_frame._txBody)

    @text.setter
    def text(self, value: str) -> None:
        write_text_body(self._cell.text_frame._txBody, value)


class PptxTable(TableHandle):
    def __init__(self, owner: "PptxElement"):
        self._owner = owner
        self._frame = owner.shape
        self._table = owner.shape.table

    @property
    def _tbl(self):
        return self._table._tbl

    def _rows(self) -> list:
        return self._tbl.findall(qn("a:tr"))

    def _grid(self):
        return self._tbl.find(qn("a:tblGrid"))

    @property
    def row_count(self) -> int:
        return len(self._rows())

    @property
    def column_count(self) -> int:
        return len(self._grid().findall(qn("a:gridCol")))

    def _blank(self, tc) -> None:
        tx_body = tc.find(qn("a:txBody"))
        if tx_body is not None:
            write_text_body(tx_body, "")

    def _sync_height(self) -> None:
        total = sum(int(tr.get("h", 0)) for tr in self._rows())
        if total > 0:
            self._frame.height = Emu(total)

    def add_row(self) -> None:
        rows = self._rows()
        if not rows:
            raise TemplateError("Cannot add a row to a table without rows")
        new_row = copy.deepcopy(rows[-1])
        for tc in new_row.findall(qn("a:tc")):
            self._blank(tc)
        rows[-1].addnext(new_row)
        self._sync_height()

    def remove_last_row(self) -> None:
        rows = self._rows()
        if rows:
            self._tbl.remove(rows[-1])
            self._sync_height()

    def add_column(self) -> None:
        grid = self._grid()
        cols = grid.findall(qn("a:gridCol"))
        cols[-1].addnext(copy.deepcopy(cols[-1]))
        for tr in self._rows():
            cells = tr.findall(qn("a:tc"))
            new_cell = copy.deepcopy(cells[-1])
            self._blank(new_cell)
            cells[-1].addnext(new_cell)

    def remove_last_column(self) -> None:
        grid = self._grid()
        cols = grid.findall(qn("a:gridCol"))
        if len(cols) <= 1:
            return
        grid.remove(cols[-1])
        for tr in self._rows():
            cells = tr.findall(qn("a:tc"))
            tr.remove(cells[-1])

    def set_header_rows(self, count: int) -> None:
        self._table.first_row = bool(count)

    def set_column_widths(self, fractions: list[float]) -> None:
        total = int(self._frame.width)
        for idx, fraction in enumerate(fractions[: len(self._table.columns)]):
            self._table.columns[idx].width = Emu(int(total * fraction))

    def apply_table_style(self, name: str) -> None:
        style_id = name if name.startswith("{") else TABLE_STYLE_IDS.get(name)
        if style_id is None:
            raise KeyError(f"Unknown table style '{name}' (use a style GUID or one of: {', '.join(TABLE_STYLE_IDS)})")
        tbl_pr = self._tbl.find(qn("a:tblPr"))
        if tbl_pr is None:
            tbl_pr = OxmlElement("a:tblPr")
            self._tbl.insert(0, tbl_pr)
        node = tbl_pr.find(qn("a:tableStyleId"))
        if node is None:
            node = OxmlElement("a:tableStyleId")
            tbl_pr.append(node)
        node.text = style_id

    def cell(self, row: int, col: int) -> PptxCell:
        return PptxCell(self._table.cell(row, col))


class PptxElement(PageElement):
    def __init__(self, page: "PptxPage", shape, parent: Optional["PptxElement"] = None):
        self._page = page
        self._shape = shape
        self._parent = parent

    def __repr__(self) -> str:
        return f"<PptxElement {self.kind} '{self.label}'>"

    @property
    def shape(self):
        return self._shape

    @property
    def element(self):
        return self._shape._element

    def _cnvpr(self):
        return self.element.xpath("./*[1]/p:cNvPr")[0]

    @property
    def label(self) -> str:
        return self._cnvpr().get("name", "")

    @label.setter
    def label(self, value: str) -> None:
        self._cnvpr().set("name", value)

    @property
    def kind(self) -> str:
        if isinstance(self._shape, GroupShape):
            return KIND_GROUP
        if getattr(self._shape, "has_table", False):
            return KIND_TABLE
        if isinstance(self._shape, Picture):
            return KIND_IMAGE
        if getattr(self._shape, "has_text_frame", False):
            return KIND_TEXT
        return KIND_SHAPE

    def _raw_geometry(self) -> tuple[int, int, int, int]:
        s = self._shape
        return int(s.left or 0), int(s.top or 0), int(s.width or 0), int(s.height or 0)

    def _page_scale(self) -> tuple[float, float]:
        sx = sy = 1.0
        node = self._parent
        while node is not None:
            *_, gx, gy = _group_transform(node.element)
            sx *= gx
            sy *= gy
            node = node._parent
        return sx, sy

    @property
    def bounds(self) -> Bounds:
        x, y, w, h = (float(v) for v in self._raw_geometry())
        node = self._parent
        while node is not None:
            ox, oy, chx, chy, sx, sy = _group_transform(node.element)
            x, y, w, h = ox + (x - chx) * sx, oy + (y - chy) * sy, w * sx, h * sy
            node = node._parent
        return Bounds(_pt(x), _pt(y), _pt(w), _pt(h))

    @property
    def visible(self) -> bool:
        return self._cnvpr().get("hidden") not in ("1", "true")

    @visible.setter
    def visible(self, value: bool) -> None:
        cnvpr = self._cnvpr()
        if value:
            cnvpr.attrib.pop("hidden", None)
        else:
            cnvpr.set("hidden", "1")

    @property
    def parent(self) -> Optional["PptxElement"]:
        return self._parent

    def children(self) -> list["PptxElement"]:
        if not isinstance(self._shape, GroupShape):
            return []
        return [PptxElement(self._page, child, self) for child in self._shape.shapes]

    def duplicate(self) -> "PptxElement":
        new_el = copy.deepcopy(self.element)
        if self._parent is not None or _xfrm(new_el) is None:
            b = self.bounds
            _ensure_xfrm(new_el, _emu(b.left), _emu(b.top), _emu(b.width), _emu(b.height))
        self._page.insert_element(new_el)
        return self._page.wrap(new_el)

    def move_by(self, dx: float, dy: float) -> None:
        sx, sy = self._page_scale()
        xfrm = _xfrm(self.element)
        if xfrm is None:
            xfrm = _ensure_xfrm(self.element, *self._raw_geometry())
        off = xfrm.find(qn("a:off"))
        off.set("x", str(int(off.get("x", 0)) + _emu(dx / sx)))
        off.set("y", str(int(off.get("y", 0)) + _emu(dy / sy)))

    def remove(self) -> None:
        el = self.element
        parent = el.getparent()
        if parent is not None:
            parent.remove(el)

    def table(self) -> Optional[PptxTable]:
        if getattr(self._shape, "has_table", False):
            return PptxTable(self)
        return None

    @property
    def text_frame(self):
        if not getattr(self._shape, "has_text_frame", False):
            raise TypeError(f"'{self.label}' has no text frame")
        return self._shape.text_frame

    @property
    def text(self) -> str:
        return read_text_body(self.text_frame._txBody)

    @text.setter
    def text(self, value: str) -> None:
        write_text_body(self.text_frame._txBody, value)

    def place_image(self, path: Path, fitting: str) -> "PptxElement":
        x, y, cx, cy = self._raw_geometry()
        shapes = self._page.slide.shapes
        crop = (0.0, 0.0)

        if fitting == FIT_CENTER:
            pic = shapes.add_picture(str(path), 0, 0)
            sx, sy = self._page_scale()
            w, h = int(pic.width / sx), int(pic.height / sy)
            pic.left, pic.top = Emu(int(x + (cx - w) / 2)), Emu(int(y + (cy - h) / 2))
            pic.width, pic.height = Emu(w), Emu(h)
        else:
            left, top, w, h = x, y, cx, cy
            if fitting == FIT_PROPORTIONAL:
                left, top, w, h = compute_contain_geometry(*_image_size(path), x, y, cx, cy)
            elif fitting == FIT_FILL:
                crop = compute_cover_crop(*_image_size(path), cx, cy)
            pic = shapes.add_picture(str(path), Emu(left), Emu(top), Emu(w), Emu(h))

        crop_x, crop_y = crop
        if crop_x:
            pic.crop_left = pic.crop_right = crop_x
        if crop_y:
            pic.crop_top = pic.crop_bottom = crop_y

        placed = PptxElement(self._page, pic, self._parent)
        placed.label = self.label
        self.element.addprevious(pic._element)
        self.remove()
        return placed

    def overflows(self) -> bool:
        """Estimate whether the text needs more height than the frame offers.

        PowerPoint does not store layout results, so this uses an average glyph
        width and line height instead of measured text.
        """
        if not getattr(self._shape, "has_text_frame", False):
            return False
        tf = self._shape.text_frame
        if tf.auto_size in (MSO_AUTO_SIZE.SHAPE_TO_FIT_TEXT, MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE):
            return False
        text = self.text
        if not text.strip():
            return False

        size_pt = DEFAULT_FONT_PT
        for p in tf.paragraphs:
            sizes = [r.font.size.pt for r in p.runs if r.font.size is not None]
            if sizes:
                size_pt = max(sizes)
                break

        b = self.bounds
        inner_w = max(1.0, b.width - 2 * DEFAULT_INSET_PT)
        inner_h = max(0.0, b.height - DEFAULT_INSET_PT)
        chars_per_line = max(1, int(inner_w / (size_pt * AVG_GLYPH_WIDTH_EM)))
        lines = 0
        for paragraph in text.replace("\v", "\n").split("\n"):
            lines += max(1, math.ceil(len(paragraph) / chars_per_line))
        return lines * size_pt * LINE_HEIGHT_FACTOR > inner_h


class PptxPage(Page):
    def __init__(self, slide, width: int, height: int):
        self.slide = slide
        self._width = width
        self._height = height

    @property
    def bounds(self) -> Bounds:
        return Bounds(0.0, 0.0, _pt(self._width), _pt(self._height))

    def top_level(self) -> list[PptxElement]:
        return [PptxElement(self, shape) for shape in self.slide.shapes]

    @property
    def _sp_tree(self):
        return self.slide.shapes._spTree

    def insert_element(self, el) -> None:
        ids = [int(v) for v in self._sp_tree.xpath("//p:cNvPr/@id") if str(v).isdigit()]
        next_id = max(ids, default=0) + 1
        for cnvpr in el.iter(qn("p:cNvPr")):
            cnvpr.set("id", str(next_id))
            next_id += 1
        self._sp_tree.insert_element_before(el, "p:extLst")

    def wrap(self, el) -> PptxElement:
        for shape in self.slide.shapes:
            if shape._element is el:
                return PptxElement(self, shape)
        raise LookupError("Inserted element is not a top-level shape of the slide")

    def create_table(self, frame: PageElement, rows: int, cols: int) -> PptxElement:
        b = frame.bounds
        graphic_frame = self.slide.shapes.add_table(
            rows, cols, Emu(_emu(b.left)), Emu(_emu(b.top)), Emu(_emu(b.width)), Emu(_emu(b.height))
        )
        element = PptxElement(self, graphic_frame)
        element.label = frame.label
        if isinstance(frame, PptxElement) and frame.parent is None:
            frame.element.addprevious(graphic_frame._element)
        frame.remove()
        return element


class PptxStyleBook:
    """Applies named paragraph styles from the settings catalog."""

    def __init__(self, catalog: Dict[str, ParagraphStyle]):
        self.catalog = dict(catalog)

    def __call__(self, target: TextTarget, style_name: str) -> None:
        if not style_name:
            return
        style = self.catalog.get(style_name)
        if style is None:
            raise KeyError(f"Unknown paragraph style '{style_name}'")
        text_frame = getattr(target, "text_frame", None)
        if text_frame is None:
            raise TypeError("Styles can only be applied to text frames and table cells")

        color = parse_rgb_color(style.color)
        for paragraph in text_frame.paragraphs:
            if style.align:
                paragraph.alignment = ALIGNMENTS[style.align]
            for run in paragraph.runs:
                font = run.font
                if style.font:
                    font.name = style.font
                if style.size:
                    font.size = Pt(style.size)
                if style.bold is not None:
                    font.bold = style.bold
                if style.italic is not None:
                    font.italic = style.italic
                if color is not None:
                    font.color.rgb = color


class PptxDocument:
    """A template presentation plus the pages generated from it."""

    def __init__(self, template_path: Path, template_slide: int = 0):
        self.template_path = Path(template_path)
        if not self.template_path.exists():
            raise FileNotFoundError(f"Template not found: {self.template_path}")
        self.prs = Presentation(str(self.template_path))
        self._original_slides = list(self.prs.slides)
        if not self._original_slides:
            raise TemplateError(f"Template has no slides: {self.template_path}")
        if not 0 <= template_slide < len(self._original_slides):
            raise TemplateError(
                f"Template slide {template_slide + 1} does not exist (template has {len(self._original_slides)})"
            )
        self.template_slide = self._original_slides[template_slide]

    def _page(self, slide) -> PptxPage:
        return PptxPage(slide, int(self.prs.slide_width), int(self.prs.slide_height))

    def template_page(self) -> PptxPage:
        return self._page(self.template_slide)

    def pages(self) -> Iterator[PptxPage]:
        for slide in self.prs.slides:
            yield self._page(slide)

    def new_page(self) -> PptxPage:
        """Append a copy of the template slide and return it as a page."""
        source = self.template_slide
        slide = self.prs.slides.add_slide(source.slide_layout)
        for shape in list(slide.shapes):
            shape._element.getparent().remove(shape._element)

        rid_map: Dict[str, str] = {}
        for rid, rel in source.part.rels.items():
            if rel.reltype in (RT.SLIDE_LAYOUT, RT.NOTES_SLIDE):
                continue
            if rel.is_external:
                rid_map[rid] = slide.part.relate_to(rel.target_ref, rel.reltype, is_external=True)
            else:
                rid_map[rid] = slide.part.relate_to(rel.target_part, rel.reltype)

        src_csld = source._element.find(qn("p:cSld"))
        dst_csld = slide._element.find(qn("p:cSld"))
        background = src_csld.find(qn("p:bg"))
        if background is not None:
            bg_copy = copy.deepcopy(background)
            _remap_rel_ids(bg_copy, rid_map)
            dst_csld.insert(0, bg_copy)

        dst_tree = slide.shapes._spTree
        for el in source.shapes._spTree.iterchildren():
            if el.tag not in _SHAPE_TAGS:
                continue
            el_copy = copy.deepcopy(el)
            _remap_rel_ids(el_copy, rid_map)
            dst_tree.insert_element_before(el_copy, "p:extLst")
        return self._page(slide)

    def remove_original_slides(self, *, keep_others: bool = False) -> None:
        doomed = [self.template_slide] if keep_others else self._original_slides
        doomed_ids = {slide.slide_id for slide in doomed}
        # python-pptx has no public delete API; remove slide relationships directly.
        slide_id_list = self.prs.slides._sldIdLst  # type: ignore[attr-defined]
        for slide_id in list(slide_id_list):
            if slide_id.id in doomed_ids:
                self.prs.part.drop_rel(slide_id.rId)
                slide_id_list.remove(slide_id)

    def save(self, output_path: Path) -> Path:
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        self.prs.save(str(output))
        return output
