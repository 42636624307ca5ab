from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from agendagen import AgendaSettings, default_settings, load_settings, save_settings, write_settings  # noqa: E402

SAMPLE = Path(__file__).resolve().parents[1] / "assets" / "sample_settings.json"


def test_defaults_match_documented_values() -> None:
    settings = default_settings()
    assert settings.chair.mode == "inline"
    assert settings.chair.inline_separator == "comma"
    assert (settings.chair.columns, settings.chair.rows) == (2, 2)
    assert (settings.chair.col_spacing_pt, settings.chair.row_spacing_pt) == (8.0, 4.0)
    assert settings.topic.mode is None
    assert settings.topic.include_header is True
    assert settings.topic.vertical_spacing_pt == 4.0
    assert set(settings.line_breaks) == {
        "SessionTitle",
        "SessionTime",
        "SessionNo",
        "Chairpersons",
        "topicTime",
        "topicTitle",
        "topicSpeaker",
    }
    assert all(not r.enabled and r.character == "|" for r in settings.line_breaks.values())


def test_sample_settings_load() -> None:
    settings = load_settings(SAMPLE)
    assert settings.chair.mode == "grid"
    assert settings.chair.units == "mm"
    assert settings.topic.mode == "table"
    assert settings.line_break("Chairpersons").active
    assert "Session Heading" in settings.styles.paragraph_styles


def test_settings_round_trip_through_json() -> None:
    original = load_settings(SAMPLE)
    encoded = json.dumps(original.to_dict())
    restored = AgendaSettings.from_dict(json.loads(encoded))
    assert restored == original
    assert restored.to_dict() == original.to_dict()


def test_partial_settings_fill_in_defaults() -> None:
    settings = AgendaSettings.from_dict({"chairOptions": {"mode": "grid", "units": "mm", "colSpacing": 10}})
    assert settings.chair.mode == "grid"
    assert settings.chair.col_spacing_pt == pytest.approx(28.34645669)
    assert settings.chair.order == "row"
    assert settings.report.include_counts is True


def test_images_need_both_switch_and_folder() -> None:
    settings = AgendaSettings.from_dict({"chairOptions": {"enableImages": True, "imageFolder": "  "}})
    assert settings.chair.images_active is False
    settings.chair.image_folder = "photos"
    assert settings.chair.images_active is True


def test_unknown_line_break_key_falls_back_to_inactive_rule() -> None:
    assert default_settings().line_break("Nope").active is False


def test_save_and_load_settings(tmp_path: Path) -> None:
    settings = default_settings()
    settings.chair.mode = "grid"
    settings.line_breaks["Chairpersons"].enabled = True
    path = save_settings(settings, tmp_path / "nested" / "settings.json")
    assert path.read_text(encoding="utf-8").endswith("\n")
    assert load_settings(path) == settings


def test_write_settings_accepts_plain_dicts(tmp_path: Path) -> None:
    path = write_settings({"topicOptions": {"mode": "independent"}}, tmp_path / "s.json")
    assert load_settings(path).topic.mode == "independent"
