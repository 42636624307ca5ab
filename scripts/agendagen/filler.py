"""Populate one template page from one session.

The filler resolves the page's placeholders once, writes the session
fields, lays out the chairpersons and emits the topic rows. Steps other
than placeholder resolution and the independent-topics frame check never
abort the page: a failing step becomes a :class:`FillWarning` on the
returned :class:`FillResult` and the fill moves on.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import MissingTopicFramesError
from .host import KIND_GROUP, Page, PageElement, StyleCallback, TextTarget, no_styles
from .images import ChairImageOutcome, process_chair_images, record_outcome
from .layout import chair_grid_positions, topic_row_offsets, union_bounds
from .models import FillResult, FillWarning, RunContext, Session, Topic
from .names import extract_clean_name
from .placeholders import (
    CHAIR_CLONE,
    CHAIRPERSONS,
    TOPIC_CLONE_GROUP,
    TOPIC_CLONE_PREFIX,
    TOPIC_SPEAKER,
    TOPIC_TIME,
    TOPIC_TITLE,
    TOPICS_TABLE,
    PlaceholderSet,
    TablePlaceholder,
    resolve_placeholders,
)
from .settings import AgendaSettings
from .text import apply_line_breaks, join_inline

TABLE_HEADERS = ("Time", "Topic", "Speaker")
TABLE_COLUMN_FRACTIONS = [0.2, 0.5, 0.3]

# label -> (clone suffix, Topic attribute, line-break key)
_TOPIC_FIELDS = {
    TOPIC_TIME: ("Time", "time", "topicTime"),
    TOPIC_TITLE: ("Topic", "title", "topicTitle"),
    TOPIC_SPEAKER: ("Speaker", "speaker", "topicSpeaker"),
}


def resolve_topic_mode(settings: AgendaSettings, placeholders: PlaceholderSet) -> str:
    if settings.topic.mode:
        return settings.topic.mode
    if placeholders.supports_table:
        return "table"
    if placeholders.supports_independent:
        return "independent"
    return "table"


def remove_clones(page: Page, predicate: Callable[[str], bool]) -> int:
    removed = 0
    for element in list(page.top_level()):
        if predicate(element.label):
            element.remove()
            removed += 1
    return removed


class PlaceholderFiller:
    """Fill template pages according to one set of agenda settings."""

    def __init__(
        self,
        settings: AgendaSettings,
        *,
        context: Optional[RunContext] = None,
        apply_style: StyleCallback = no_styles,
    ):
        self.settings = settings
        self.context = context if context is not None else RunContext()
        self.apply_style = apply_style

    def fill(self, page: Page, session: Session) -> FillResult:
        placeholders = resolve_placeholders(page)
        result = FillResult(session_title=session.title)
        styles = self.settings.styles

        session_fields = (
            (placeholders.session_title, session.title, styles.session_title, "SessionTitle"),
            (placeholders.session_time, session.time, styles.session_time, "SessionTime"),
            (placeholders.session_no, session.no, styles.session_no, "SessionNo"),
        )
        for placeholder, value, style, rule_key in session_fields:
            if placeholder is not None and value:
                self._write(result, placeholder.element, placeholder.label, value, style, rule_key)

        if placeholders.chairpersons is not None:
            self._guard(
                result,
                "chairpersons",
                CHAIRPERSONS,
                lambda: self.fill_chairs(page, placeholders.chairpersons.element, session, result),
            )

        mode = resolve_topic_mode(self.settings, placeholders)
        if mode == "independent":
            if not placeholders.supports_independent:
                # keep the warnings of the fields already written on this page
                result.complete = False
                self.context.fill_results.append(result)
                raise MissingTopicFramesError(placeholders.missing_topic_frames)
            self._guard(
                result,
                "topics",
                TOPIC_CLONE_GROUP,
                lambda: self.fill_topics_independent(page, placeholders, session.topics, result),
            )
        elif placeholders.topics_table is not None:
            self._guard(
                result,
                "topics",
                TOPICS_TABLE,
                lambda: self.fill_topics_table(page, placeholders.topics_table, session.topics, result),
            )

        self.context.fill_results.append(result)
        return result

    def _guard(self, result: FillResult, step: str, label: str, action: Callable[[], None]) -> bool:
        try:
            action()
            return True
        except Exception as exc:
            result.warnings.append(FillWarning(step=step, label=label, message=str(exc) or type(exc).__name__))
            return False

    def _write(
        self,
        result: FillResult,
        target: TextTarget,
        label: str,
        value: str,
        style: str,
        rule_key: Optional[str],
    ) -> bool:
        def set_text() -> None:
            target.text = value

        if not self._guard(result, "set text", label, set_text):
            return False
        result.filled.append(label)

        if style:
            self._guard(result, "apply style", label, lambda: self.apply_style(target, style))

        rule = self.settings.line_break(rule_key) if rule_key else None
        if rule is not None and rule.active:

            def break_lines() -> None:
                target.text = apply_line_breaks(target.text, rule.character)

            self._guard(result, "line breaks", label, break_lines)
        return True

    # -- chairpersons -------------------------------------------------

    def fill_chairs(self, page: Page, frame: PageElement, session: Session, result: FillResult) -> None:
        remove_clones(page, lambda label: label == CHAIR_CLONE)
        cfg = self.settings.chair
        style = self.settings.styles.chair
        names = session.chair_names

        if cfg.mode != "grid":
            self._write(result, frame, CHAIRPERSONS, join_inline(names, cfg.inline_separator), style, "Chairpersons")
            return

        parent = frame.parent
        is_group = parent is not None and parent.kind == KIND_GROUP
        prototype = parent if is_group else frame
        if is_group:
            prototype.visible = False
        else:
            frame.text = ""
        if not names:
            return

        with_images = is_group and cfg.images_active
        if with_images:
            self.context.image_results.activate(cfg.image_folder)

        positions = chair_grid_positions(
            len(names),
            order=cfg.order,
            columns=cfg.columns,
            rows=cfg.rows,
            col_spacing=cfg.col_spacing_pt,
            row_spacing=cfg.row_spacing_pt,
            prototype=prototype.bounds,
            container=page.bounds,
            center=cfg.center_grid,
        )

        for name, target in zip(names, positions):
            clone = prototype.duplicate()
            clone.label = CHAIR_CLONE
            clone.visible = True
            text_frame = clone.find_descendant(CHAIRPERSONS) if is_group else clone
            if text_frame is not None:
                self._write(result, text_frame, CHAIRPERSONS, name, style, "Chairpersons")
            if with_images:
                self._place_chair_images(clone, name, result)
            clone.move_to(target.x, target.y)
            result.chair_clones += 1

    def _place_chair_images(self, clone: PageElement, name: str, result: FillResult) -> None:
        cfg = self.settings.chair
        try:
            outcome = process_chair_images(clone, name, cfg.image_folder, cfg.image_fitting)
        except Exception as exc:
            result.warnings.append(FillWarning(step="chair images", label=name, message=str(exc)))
            outcome = ChairImageOutcome(
                raw_name=name,
                clean_name=extract_clean_name(name),
                attempts=[f"Image placement failed: {exc}"],
            )
        record_outcome(self.context.image_results, outcome)

    # -- topics -------------------------------------------------------

    def fill_topics_table(
        self,
        page: Page,
        placeholder: TablePlaceholder,
        topics: tuple[Topic, ...],
        result: FillResult,
    ) -> None:
        element = placeholder.element
        header_rows = 1 if self.settings.topic.include_header else 0
        needed = header_rows + len(topics)

        table = element.table()
        if table is None:
            element = page.create_table(element, max(needed, 1), len(TABLE_HEADERS))
            table = element.table()
        if needed == 0:
            element.visible = False
            return
        element.visible = True

        styles = self.settings.styles
        if styles.table_style:
            self._guard(result, "table style", TOPICS_TABLE, lambda: table.apply_table_style(styles.table_style))
        table.set_header_rows(header_rows)

        while table.column_count > len(TABLE_HEADERS):
            table.remove_last_column()
        while table.column_count < len(TABLE_HEADERS):
            table.add_column()
        while table.row_count > needed:
            table.remove_last_row()
        while table.row_count < needed:
            table.add_row()
        self._guard(
            result, "column widths", TOPICS_TABLE, lambda: table.set_column_widths(TABLE_COLUMN_FRACTIONS)
        )

        if header_rows:
            for col, heading in enumerate(TABLE_HEADERS):
                self._write(result, table.cell(0, col), f"{TOPICS_TABLE}[0,{col}]", heading, styles.cell_style, None)

        for idx, topic in enumerate(topics):
            row = header_rows + idx
            for col, (_, attr, rule_key) in enumerate(_TOPIC_FIELDS.values()):
                self._write(
                    result,
                    table.cell(row, col),
                    f"{TOPICS_TABLE}[{row},{col}]",
                    getattr(topic, attr),
                    styles.cell_style,
                    rule_key,
                )
        result.topic_rows = len(topics)

    def fill_topics_independent(
        self,
        page: Page,
        placeholders: PlaceholderSet,
        topics: tuple[Topic, ...],
        result: FillResult,
    ) -> None:
        remove_clones(page, lambda label: label == TOPIC_CLONE_GROUP or label.startswith(TOPIC_CLONE_PREFIX))
        frames = {label: ph.element for label, ph in placeholders.topic_frames.items() if ph is not None}
        spacing = self.settings.topic.vertical_spacing_pt
        style_for = {
            TOPIC_TIME: self.settings.styles.topic_time,
            TOPIC_TITLE: self.settings.styles.topic_title,
            TOPIC_SPEAKER: self.settings.styles.topic_speaker,
        }

        parents = [el.parent for el in frames.values()]
        common = parents[0]
        shared_group = common is not None and common.kind == KIND_GROUP and all(p is common for p in parents)

        if shared_group:
            offsets = topic_row_offsets(len(topics), common.bounds.height, spacing)
            for topic, dy in zip(topics, offsets):
                clone = common.duplicate()
                clone.label = TOPIC_CLONE_GROUP
                clone.visible = True
                for label, (_, attr, rule_key) in _TOPIC_FIELDS.items():
                    target = clone.find_descendant(label)
                    if target is not None:
                        self._write(result, target, label, getattr(topic, attr), style_for[label], rule_key)
                clone.move_by(0, dy)
            common.visible = False
        else:
            row_height = union_bounds(el.bounds for el in frames.values()).height
            offsets = topic_row_offsets(len(topics), row_height, spacing)
            for topic, dy in zip(topics, offsets):
                for label, (suffix, attr, rule_key) in _TOPIC_FIELDS.items():
                    clone = frames[label].duplicate()
                    clone.label = f"{TOPIC_CLONE_PREFIX}{suffix}"
                    clone.visible = True
                    self._write(result, clone, label, getattr(topic, attr), style_for[label], rule_key)
                    clone.move_by(0, dy)
            for element in frames.values():
                element.visible = False
        result.topic_rows = len(topics)
