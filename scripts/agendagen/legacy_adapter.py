"""Compatibility adapter for flat (single-level) settings files."""

from __future__ import annotations

from typing import Any, Dict

# flat key -> (section, nested key)
_FLAT_KEYS = {
    "chairMode": ("chairOptions", "mode"),
    "chairInlineSeparator": ("chairOptions", "inlineSeparator"),
    "chairOrder": ("chairOptions", "order"),
    "chairColumns": ("chairOptions", "columns"),
    "chairRows": ("chairOptions", "rows"),
    "chairColSpacing": ("chairOptions", "colSpacing"),
    "chairRowSpacing": ("chairOptions", "rowSpacing"),
    "chairUnits": ("chairOptions", "units"),
    "chairCenterGrid": ("chairOptions", "centerGrid"),
    "chairEnableImages": ("chairOptions", "enableImages"),
    "chairImageFolder": ("chairOptions", "imageFolder"),
    "chairImageFitting": ("chairOptions", "imageFitting"),
    "topicMode": ("topicOptions", "mode"),
    "topicIncludeHeader": ("topicOptions", "includeHeader"),
    "topicVerticalSpacing": ("topicOptions", "verticalSpacing"),
    "topicUnits": ("topicOptions", "units"),
}

# Old whole-group switches, used only when no per-field rules are given.
_GROUP_LINE_BREAKS = {
    ("chairApplyLineBreaks", "chairLineBreakChar"): ("Chairpersons",),
    ("topicApplyLineBreaks", "topicLineBreakChar"): ("topicTime", "topicTitle", "topicSpeaker"),
}


def is_legacy_settings(data: Any) -> bool:
    """True when ``data`` uses flat keys instead of the sectioned layout."""
    if not isinstance(data, dict):
        return False
    return any(key in data for key in _FLAT_KEYS) or ("lineBreaks" in data and "lineBreakOptions" not in data)


def adapt_legacy_settings(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a flat settings payload to the sectioned settings schema."""
    out: Dict[str, Any] = {}
    for section in ("chairOptions", "topicOptions", "stylesOptions", "reportOptions"):
        if isinstance(data.get(section), dict):
            out[section] = dict(data[section])

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[key] = data[flat_key]

    rules = data.get("lineBreaks")
    if isinstance(rules, dict):
        line_breaks = {k: dict(v) if isinstance(v, dict) else v for k, v in rules.items()}
    else:
        line_breaks = {}
        for (flag_key, char_key), fields in _GROUP_LINE_BREAKS.items():
            if data.get(flag_key) is True:
                for field in fields:
                    line_breaks[field] = {"enabled": True, "character": str(data.get(char_key) or "|")}
    if line_breaks:
        out["lineBreakOptions"] = {"lineBreaks": line_breaks}

    return out
