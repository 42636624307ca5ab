from __future__ import annotations

from pathlib import Path

import pytest
from fakes import FakeElement, FakePage, RecordingStyles, group, table_frame, text_frame

from agendagen import AgendaSettings, MissingTopicFramesError, NoPlaceholdersFoundError, PlaceholderFiller
from agendagen.filler import resolve_topic_mode
from agendagen.host import KIND_SHAPE, KIND_TABLE
from agendagen.layout import Bounds
from agendagen.models import RunContext, Session, Topic
from agendagen.placeholders import resolve_placeholders

TOPICS = (
    Topic(time="09:00", title="Opening", speaker="Ann Lee"),
    Topic(time="09:20", title="Vision|Part 2", speaker="Bo Chen"),
)


def _settings(**sections) -> AgendaSettings:
    return AgendaSettings.from_dict(sections)


def _session_page() -> FakePage:
    return FakePage(
        [
            text_frame("sessionTitle", 40, 20, 500, 40),
            text_frame("sessionTime", 40, 60, 200, 20),
            text_frame("sessionNo", 300, 60, 100, 20, text="keep"),
            text_frame("chairpersons", 40, 100, 120, 20),
        ]
    )


def test_session_fields_are_written_and_empty_values_skipped() -> None:
    page = _session_page()
    settings = _settings(lineBreakOptions={"lineBreaks": {"SessionTitle": {"enabled": True, "character": "/"}}})
    result = PlaceholderFiller(settings).fill(page, Session(title="Cardio/Update", time="09:00", chairs="Dr. A||Dr. B"))

    assert page.find_item("sessionTitle").text == "Cardio\nUpdate"
    assert page.find_item("sessionTime").text == "09:00"
    assert page.find_item("sessionNo").text == "keep"
    assert page.find_item("chairpersons").text == "Dr. A, Dr. B"
    assert result.filled == ["sessionTitle", "sessionTime", "chairpersons"]
    assert result.warnings == []


def test_inline_chairs_with_linebreak_separator_and_affiliation_breaks() -> None:
    page = _session_page()
    settings = _settings(
        chairOptions={"inlineSeparator": "linebreak"},
        lineBreakOptions={"lineBreaks": {"Chairpersons": {"enabled": True, "character": "|"}}},
    )
    PlaceholderFiller(settings).fill(page, Session(title="T", chairs="Ann Lee|Oslo||Bo Chen"))
    assert page.find_item("chairpersons").text == "Ann Lee\nOslo\nBo Chen"


def test_no_placeholders_raises() -> None:
    page = FakePage([text_frame("somethingElse")])
    with pytest.raises(NoPlaceholdersFoundError):
        PlaceholderFiller(_settings()).fill(page, Session(title="T"))


def _grid_page() -> tuple[FakePage, FakeElement]:
    prototype = group("chairBlock", [text_frame("chairpersons", 20, 100, 80, 20)], 20, 100, 100, 40)
    page = FakePage([text_frame("sessionTitle"), prototype])
    return page, prototype


GRID = {"mode": "grid", "columns": 2, "rows": 1, "colSpacing": 10, "rowSpacing": 5, "units": "pt"}


def test_grid_chairs_clone_group_prototype() -> None:
    page, prototype = _grid_page()
    result = PlaceholderFiller(_settings(chairOptions=GRID)).fill(
        page, Session(title="T", chairs="Dr. A||Dr. B||Dr. C")
    )

    clones = page.labelled("chairClone")
    assert [(c.bounds.left, c.bounds.top) for c in clones] == [(20, 100), (130, 100), (20, 145)]
    assert [c.find_descendant("chairpersons").text for c in clones] == ["Dr. A", "Dr. B", "Dr. C"]
    assert all(c.visible for c in clones)
    assert prototype.visible is False
    assert result.chair_clones == 3


def test_refilling_a_page_replaces_previous_clones() -> None:
    page, _ = _grid_page()
    filler = PlaceholderFiller(_settings(chairOptions=GRID))
    session = Session(title="T", chairs="Dr. A||Dr. B||Dr. C")
    filler.fill(page, session)
    filler.fill(page, session)
    assert len(page.labelled("chairClone")) == 3
    assert len(filler.context.fill_results) == 2


def test_grid_chairs_from_lone_frame_blank_the_prototype() -> None:
    page = _session_page()
    PlaceholderFiller(_settings(chairOptions=GRID)).fill(page, Session(title="T", chairs="Dr. A||Dr. B"))
    assert page.find_item("chairpersons").text == ""
    assert [c.text for c in page.labelled("chairClone")] == ["Dr. A", "Dr. B"]


def test_grid_chairs_without_names_only_hide_prototype() -> None:
    page, prototype = _grid_page()
    PlaceholderFiller(_settings(chairOptions=GRID)).fill(page, Session(title="T"))
    assert page.labelled("chairClone") == []
    assert prototype.visible is False


def test_grid_chairs_place_images_and_tally_results(tmp_path: Path) -> None:
    (tmp_path / "Ann Lee.png").write_bytes(b"")
    avatar = FakeElement("chairAvatar", Bounds(20, 60, 40, 40), kind=KIND_SHAPE)
    prototype = group("chairBlock", [avatar, text_frame("chairpersons", 20, 100, 80, 20)], 20, 60, 100, 60)
    page = FakePage([prototype])
    chair = dict(GRID, enableImages=True, imageFolder=str(tmp_path), imageFitting="Fill Frame")
    context = RunContext()

    PlaceholderFiller(_settings(chairOptions=chair), context=context).fill(
        page, Session(title="T", chairs="Prof. Ann Lee||Bo Chen")
    )

    images = context.image_results
    assert images.enabled and images.folder == str(tmp_path)
    assert images.total_attempted == 2
    assert images.successful == ["Ann Lee -> Ann Lee.png"]
    assert [f.name for f in images.failed] == ["Bo Chen"]
    first = page.labelled("chairClone")[0]
    assert first.find_descendant("chairAvatar").placed_images == [("Ann Lee.png", "Fill Frame")]
    assert avatar.placed_images == []


def test_table_topics_reuse_and_resize_existing_table() -> None:
    page = FakePage([text_frame("sessionTitle"), table_frame("topicsTable", 5, 4)])
    settings = _settings(
        topicOptions={"mode": "table"},
        lineBreakOptions={"lineBreaks": {"topicTitle": {"enabled": True, "character": "|"}}},
    )
    result = PlaceholderFiller(settings).fill(page, Session(title="T", topics=TOPICS))

    table = page.find_item("topicsTable").table()
    assert table.texts() == [
        ["Time", "Topic", "Speaker"],
        ["09:00", "Opening", "Ann Lee"],
        ["09:20", "Vision\nPart 2", "Bo Chen"],
    ]
    assert table.header_rows == 1
    assert table.widths == [0.2, 0.5, 0.3]
    assert result.topic_rows == 2


def test_table_topics_without_header() -> None:
    page = FakePage([table_frame("topicsTable", 1, 3)])
    PlaceholderFiller(_settings(topicOptions={"includeHeader": False})).fill(page, Session(title="T", topics=TOPICS))
    table = page.find_item("topicsTable").table()
    assert table.row_count == 2
    assert table.header_rows == 0
    assert table.cell(0, 0).text == "09:00"


def test_table_is_created_from_a_text_frame() -> None:
    page = FakePage([text_frame("sessionTitle"), text_frame("topicsTable", 50, 300, 600, 100)])
    PlaceholderFiller(_settings()).fill(page, Session(title="T", topics=TOPICS[:1]))
    created = page.find_item("topicsTable")
    assert created.kind == KIND_TABLE
    assert created.bounds == Bounds(50, 300, 600, 100)
    assert created.table().row_count == 2


def test_table_needing_no_rows_is_hidden() -> None:
    page = FakePage([table_frame("topicsTable", 3, 3)])
    PlaceholderFiller(_settings(topicOptions={"includeHeader": False})).fill(page, Session(title="T"))
    assert page.find_item("topicsTable").visible is False


def test_unknown_table_style_is_a_warning() -> None:
    page = FakePage([table_frame("topicsTable", 2, 3)])
    settings = _settings(stylesOptions={"table": {"tableStyle": "Broken"}})
    result = PlaceholderFiller(settings).fill(page, Session(title="T", topics=TOPICS))
    assert [w.step for w in result.warnings] == ["table style"]
    assert page.find_item("topicsTable").table().cell(1, 1).text == "Opening"


def _topic_frames(parent_group: bool) -> list[FakeElement]:
    frames = [
        text_frame("topicTime", 50, 200, 80, 20),
        text_frame("topicTitle", 140, 205, 300, 30),
        text_frame("topicSpeaker", 450, 200, 100, 20),
    ]
    if parent_group:
        return [group("topicRow", frames, 50, 200, 500, 30)]
    return frames


def test_independent_topics_clone_the_shared_group() -> None:
    page = FakePage([text_frame("sessionTitle"), *_topic_frames(parent_group=True)])
    settings = _settings(topicOptions={"mode": "independent", "verticalSpacing": 4})
    result = PlaceholderFiller(settings).fill(page, Session(title="T", topics=TOPICS))

    clones = page.labelled("topicCloneGroup")
    assert [c.bounds.top for c in clones] == [200, 234]
    assert [c.find_descendant("topicTitle").text for c in clones] == ["Opening", "Vision|Part 2"]
    assert page.labelled("topicRow")[0].visible is False
    assert result.topic_rows == 2


def test_independent_topics_fallback_clones_each_frame() -> None:
    page = FakePage(_topic_frames(parent_group=False))
    settings = _settings(topicOptions={"mode": "independent", "verticalSpacing": 4})
    PlaceholderFiller(settings).fill(page, Session(title="T", topics=TOPICS))

    titles = page.labelled("topicClone_Topic")
    # union of the three frames is 35pt tall
    assert [c.bounds.top for c in titles] == [205, 244]
    assert [c.text for c in titles] == ["Opening", "Vision|Part 2"]
    assert [c.text for c in page.labelled("topicClone_Speaker")] == ["Ann Lee", "Bo Chen"]
    assert [c.bounds.top for c in page.labelled("topicClone_Time")] == [200, 239]
    assert all(not page.find_item(label).visible for label in ("topicTime", "topicTitle", "topicSpeaker"))


def test_independent_refill_is_idempotent() -> None:
    page = FakePage(_topic_frames(parent_group=False))
    filler = PlaceholderFiller(_settings(topicOptions={"mode": "independent"}))
    filler.fill(page, Session(title="T", topics=TOPICS))
    filler.fill(page, Session(title="T", topics=TOPICS))
    assert len(page.labelled("topicClone_Time")) == 2


def test_independent_mode_requires_all_three_frames() -> None:
    page = FakePage([text_frame("sessionTitle"), text_frame("topicTime")])
    with pytest.raises(MissingTopicFramesError) as exc:
        PlaceholderFiller(_settings(topicOptions={"mode": "independent"})).fill(page, Session(title="T"))
    assert exc.value.missing == ["topicTitle", "topicSpeaker"]


def test_failed_independent_page_keeps_its_field_warnings() -> None:
    def broken_styles(target, style_name: str) -> None:
        raise ValueError(f"no style {style_name}")

    context = RunContext()
    settings = _settings(
        topicOptions={"mode": "independent"},
        stylesOptions={"session": {"titlePara": "Heading"}},
    )
    page = FakePage([text_frame("sessionTitle"), text_frame("topicTime")])
    with pytest.raises(MissingTopicFramesError):
        PlaceholderFiller(settings, context=context, apply_style=broken_styles).fill(page, Session(title="T"))

    assert len(context.fill_results) == 1
    result = context.fill_results[0]
    assert not result.complete
    assert result.filled == ["sessionTitle"]
    assert [str(w) for w in context.warnings] == ["apply style [sessionTitle]: no style Heading"]


def test_topic_mode_auto_detection() -> None:
    table_page = FakePage([table_frame("topicsTable", 1, 3), *_topic_frames(parent_group=False)])
    frames_page = FakePage(_topic_frames(parent_group=False))
    bare_page = FakePage([text_frame("sessionTitle")])
    settings = _settings()
    assert resolve_topic_mode(settings, resolve_placeholders(table_page)) == "table"
    assert resolve_topic_mode(settings, resolve_placeholders(frames_page)) == "independent"
    assert resolve_topic_mode(settings, resolve_placeholders(bare_page)) == "table"
    forced = _settings(topicOptions={"mode": "table"})
    assert resolve_topic_mode(forced, resolve_placeholders(frames_page)) == "table"


def test_styles_apply_and_unknown_styles_become_warnings() -> None:
    page = _session_page()
    settings = _settings(
        stylesOptions={
            "session": {"titlePara": "Title", "timePara": "Heading"},
            "paragraphStyles": {"Title": {}, "Heading": {}},
        }
    )
    styles = RecordingStyles(known=("Title",))
    result = PlaceholderFiller(settings, apply_style=styles).fill(page, Session(title="Keynote", time="09:00"))

    assert styles.calls == [("Keynote", "Title")]
    assert page.find_item("sessionTime").text == "09:00"
    assert [(w.step, w.label) for w in result.warnings] == [("apply style", "sessionTime")]
    assert "Heading" in result.warnings[0].message


def test_failing_step_is_recorded_and_fill_continues() -> None:
    page = _session_page()
    page.find_item("sessionTime").fail_on_text = True
    result = PlaceholderFiller(_settings()).fill(page, Session(title="Keynote", time="09:00", no="S1"))

    assert [(w.step, w.label) for w in result.warnings] == [("set text", "sessionTime")]
    assert "sessionTime" not in result.filled
    assert page.find_item("sessionNo").text == "S1"
    assert str(result.warnings[0]) == "set text [sessionTime]: 'sessionTime' has no text frame"
