"""String transforms applied to field values before they reach a frame."""

from __future__ import annotations

import re
from typing import Iterable

# Paragraph separator understood by the host text setter.
PARAGRAPH_BREAK = "\n"

CHAIR_SEPARATOR = "||"

INLINE_SEPARATORS = {
    "comma": ", ",
    "linebreak": PARAGRAPH_BREAK,
}


def apply_line_breaks(text: str, delimiter: str) -> str:
    """Replace every literal occurrence of ``delimiter`` with a paragraph break."""
    if not text or not delimiter:
        return text or ""
    return re.sub(re.escape(delimiter), PARAGRAPH_BREAK, text)


def split_chairs(raw: str) -> list[str]:
    """Split a raw chairperson field on ``||`` into trimmed, non-empty names.

    A single ``|`` is not a separator: it is the in-name break marker handled
    by :func:`apply_line_breaks` and by the name normalizer.
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(CHAIR_SEPARATOR) if part.strip()]


def join_inline(names: Iterable[str], separator: str) -> str:
    return INLINE_SEPARATORS.get(separator, INLINE_SEPARATORS["comma"]).join(names)


def normalize_newlines(text: str) -> str:
    if not text:
        return ""
    return text.replace("\r\n", "\n").replace("\r", "\n")
