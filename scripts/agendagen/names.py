"""Chairperson name cleanup and filename variant generation."""

from __future__ import annotations

import re

_PREFIX_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^Prof\.?\s+Dr\.?\s+Med\.?\s+",
        r"^Prof\.?\s+Dr\.?\s+",
        r"^Assoc\.?\s+Prof\.?\s+",
        r"^Associate\s+Prof\.?\s+",
        r"^Prof\.?\s+",
        r"^Dr\.?\s+",
        r"^Mr\.?\s+",
        r"^Mrs\.?\s+",
        r"^Ms\.?\s+",
        r"^Miss\.?\s+",
    )
]

_SUFFIX_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r",?\s+MD\.?$",
        r",?\s+Ph\.?D\.?$",
        r",?\s+M\.?D\.?$",
    )
]

_TITLE_WORD = re.compile(r"\w\S*")


def extract_clean_name(raw: str) -> str:
    """Return the bare person name from a chairperson cell entry.

    Anything after the first ``|`` (affiliation, country) is dropped, then
    academic prefixes and medical suffixes are stripped in a fixed order.
    """
    if not raw:
        return ""
    name = raw.split("|", 1)[0].strip()
    for pattern in _PREFIX_PATTERNS:
        name = pattern.sub("", name)
    for pattern in _SUFFIX_PATTERNS:
        name = pattern.sub("", name)
    return name.strip()


def _title_case(name: str) -> str:
    return _TITLE_WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), name)


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


def name_variants(name: str) -> list[str]:
    if not name:
        return []
    lower = name.lower()
    collapsed = re.sub(r"\s+", " ", lower).strip()
    title = _title_case(name)
    return _dedupe(
        [
            name,
            lower,
            name.upper(),
            collapsed.replace(" ", ""),
            collapsed.replace(" ", "_"),
            collapsed.replace(" ", "-"),
            title,
            re.sub(r"\s+", "_", title),
            re.sub(r"\s+", "-", title),
        ]
    )


def flag_variants(name: str) -> list[str]:
    """Twelve flag filename stems for every name variant, in search order."""
    out: list[str] = []
    for n in name_variants(name):
        out.extend(
            [
                f"flag-{n}",
                f"{n}-flag",
                f"flag_{n}",
                f"{n}_flag",
                f"flag{n}",
                f"{n}flag",
                f"flag {n}",
                f"{n} flag",
                f"Flag {n}",
                f"{n} Flag",
                f"FLAG {n}",
                f"{n} FLAG",
            ]
        )
    return out
