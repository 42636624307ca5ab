"""Settings validation for the agenda generator JSON input."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

from .errors import ConfigValidationError
from .legacy_adapter import adapt_legacy_settings, is_legacy_settings

CHAIR_MODES = ("inline", "grid")
INLINE_SEPARATOR_KEYS = ("comma", "linebreak")
GRID_ORDERS = ("row", "col")
UNITS = ("pt", "mm", "cm", "px")
TOPIC_MODES = ("table", "independent")
IMAGE_FITTINGS = (
    "Use Template Default",
    "Fill Frame",
    "Fit Proportionally",
    "Fit Content to Frame",
    "Center Content",
)
LINE_BREAK_FIELDS = (
    "SessionTitle",
    "SessionTime",
    "SessionNo",
    "Chairpersons",
    "topicTime",
    "topicTitle",
    "topicSpeaker",
)
ALIGNMENTS = ("left", "center", "right", "justify")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_choice(section: Dict[str, Any], key: str, allowed: Iterable[str], prefix: str, issues: list[str]) -> None:
    if key not in section:
        return
    value = section.get(key)
    allowed = tuple(allowed)
    if value not in allowed:
        issues.append(f"{prefix}.{key} '{value}' is unsupported (supported: {', '.join(allowed)})")


def _check_bool(section: Dict[str, Any], key: str, prefix: str, issues: list[str]) -> None:
    if key in section and not isinstance(section.get(key), bool):
        issues.append(f"{prefix}.{key} must be a boolean when provided")


def _check_str(section: Dict[str, Any], key: str, prefix: str, issues: list[str]) -> None:
    if key in section and not isinstance(section.get(key), str):
        issues.append(f"{prefix}.{key} must be a string when provided")


def _check_spacing(section: Dict[str, Any], key: str, prefix: str, issues: list[str]) -> None:
    if key not in section:
        return
    value = section.get(key)
    if not _is_number(value):
        issues.append(f"{prefix}.{key} must be a number when provided")
    elif value < 0:
        issues.append(f"{prefix}.{key} must not be negative")


def _check_chair_options(chair: Any, issues: list[str]) -> None:
    prefix = "chairOptions"
    if not isinstance(chair, dict):
        issues.append(f"{prefix} must be an object when provided")
        return
    _check_choice(chair, "mode", CHAIR_MODES, prefix, issues)
    _check_choice(chair, "inlineSeparator", INLINE_SEPARATOR_KEYS, prefix, issues)
    _check_choice(chair, "order", GRID_ORDERS, prefix, issues)
    _check_choice(chair, "units", UNITS, prefix, issues)
    _check_choice(chair, "imageFitting", IMAGE_FITTINGS, prefix, issues)
    for key in ("columns", "rows"):
        if key not in chair:
            continue
        value = chair.get(key)
        if not isinstance(value, int) or isinstance(value, bool):
            issues.append(f"{prefix}.{key} must be an integer when provided")
        elif not 1 <= value <= 99:
            issues.append(f"{prefix}.{key} must be between 1 and 99")
    for key in ("colSpacing", "rowSpacing", "colSpacingPt", "rowSpacingPt"):
        _check_spacing(chair, key, prefix, issues)
    for key in ("centerGrid", "enableImages"):
        _check_bool(chair, key, prefix, issues)
    _check_str(chair, "imageFolder", prefix, issues)


def _check_topic_options(topic: Any, issues: list[str]) -> None:
    prefix = "topicOptions"
    if not isinstance(topic, dict):
        issues.append(f"{prefix} must be an object when provided")
        return
    if topic.get("mode") is not None:
        _check_choice(topic, "mode", TOPIC_MODES, prefix, issues)
    _check_bool(topic, "includeHeader", prefix, issues)
    _check_spacing(topic, "verticalSpacing", prefix, issues)
    _check_spacing(topic, "verticalSpacingPt", prefix, issues)
    _check_choice(topic, "units", UNITS, prefix, issues)


def _check_line_breaks(options: Any, issues: list[str]) -> None:
    prefix = "lineBreakOptions"
    if not isinstance(options, dict):
        issues.append(f"{prefix} must be an object when provided")
        return
    rules = options.get("lineBreaks")
    if rules is None:
        return
    if not isinstance(rules, dict):
        issues.append(f"{prefix}.lineBreaks must be an object keyed by field")
        return
    for key, rule in rules.items():
        rp = f"{prefix}.lineBreaks.{key}"
        if key not in LINE_BREAK_FIELDS:
            issues.append(f"{rp} is not a known field (known: {', '.join(LINE_BREAK_FIELDS)})")
            continue
        if not isinstance(rule, dict):
            issues.append(f"{rp} must be an object with enabled + character")
            continue
        _check_bool(rule, "enabled", rp, issues)
        character = rule.get("character", "|")
        if not isinstance(character, str):
            issues.append(f"{rp}.character must be a string")
        elif rule.get("enabled") and len(character) != 1:
            issues.append(f"{rp}.character must be a single character when enabled")


def _check_paragraph_styles(catalog: Any, prefix: str, issues: list[str]) -> None:
    if not isinstance(catalog, dict):
        issues.append(f"{prefix} must be an object keyed by style name")
        return
    for name, spec in catalog.items():
        sp = f"{prefix}.{name}"
        if not isinstance(spec, dict):
            issues.append(f"{sp} must be an object")
            continue
        _check_str(spec, "font", sp, issues)
        _check_str(spec, "color", sp, issues)
        _check_bool(spec, "bold", sp, issues)
        _check_bool(spec, "italic", sp, issues)
        if "size" in spec and not (_is_number(spec.get("size")) and spec.get("size") > 0):
            issues.append(f"{sp}.size must be a positive number when provided")
        _check_choice(spec, "align", ALIGNMENTS, sp, issues)


def _check_styles(styles: Any, issues: list[str]) -> None:
    prefix = "stylesOptions"
    if not isinstance(styles, dict):
        issues.append(f"{prefix} must be an object when provided")
        return
    slots = {
        "table": ("tableStyle", "cellStyle"),
        "session": ("titlePara", "timePara", "noPara"),
        "chair": ("style",),
        "topicsIndependent": ("timePara", "titlePara", "speakerPara"),
    }
    catalog = styles.get("paragraphStyles") or {}
    if "paragraphStyles" in styles:
        _check_paragraph_styles(styles.get("paragraphStyles"), f"{prefix}.paragraphStyles", issues)
    for section, keys in slots.items():
        value = styles.get(section)
        if value is None:
            continue
        if not isinstance(value, dict):
            issues.append(f"{prefix}.{section} must be an object when provided")
            continue
        for key in keys:
            _check_str(value, key, f"{prefix}.{section}", issues)
            name = value.get(key)
            if section == "table" and key == "tableStyle":
                continue
            if isinstance(name, str) and name and isinstance(catalog, dict) and name not in catalog:
                issues.append(f"{prefix}.{section}.{key} refers to unknown paragraph style '{name}'")


def _check_report(report: Any, issues: list[str]) -> None:
    prefix = "reportOptions"
    if not isinstance(report, dict):
        issues.append(f"{prefix} must be an object when provided")
        return
    for key in ("includeImages", "includeOverset", "includeCounts"):
        _check_bool(report, key, prefix, issues)


def validate_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a settings dict and return it unchanged."""
    if not isinstance(config, dict):
        raise ConfigValidationError(["Root JSON value must be an object"])

    issues: list[str] = []
    if "chairOptions" in config:
        _check_chair_options(config.get("chairOptions"), issues)
    if "topicOptions" in config:
        _check_topic_options(config.get("topicOptions"), issues)
    if "lineBreakOptions" in config:
        _check_line_breaks(config.get("lineBreakOptions"), issues)
    if "stylesOptions" in config:
        _check_styles(config.get("stylesOptions"), issues)
    if "reportOptions" in config:
        _check_report(config.get("reportOptions"), issues)

    if issues:
        raise ConfigValidationError(issues)

    return config


def validate_settings_file(path: Path) -> Dict[str, Any]:
    """Load and validate a JSON settings file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigValidationError([f"Settings file not found: {path}"]) from exc
    except json.JSONDecodeError as exc:
        raise ConfigValidationError([f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"]) from exc

    if is_legacy_settings(data):
        data = adapt_legacy_settings(data)
    return validate_settings(data)
