"""Plain-text import report written after a generation run."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .models import ImageResults, OversetFinding, PageFailure, RunContext, Session
from .settings import ReportOptions

MAX_LISTED_ATTEMPTS = 10


def _header(sessions: Sequence[Session], context: RunContext, generated_at: datetime) -> list[str]:
    lines = [
        "AGENDA IMPORT REPORT",
        "====================",
        f"Date: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Sessions imported: {len(sessions)}",
    ]
    if context.failures:
        lines.append(f"Pages with errors: {len(context.failures)}")
        for failure in context.failures:
            lines.append(f"  Page {failure.page} ({failure.session_title or '[No title]'}): {failure.message}")
    warnings = context.warnings
    if warnings:
        lines.append(f"Fill warnings: {len(warnings)}")
        for warning in warnings:
            lines.append(f"  {warning}")
    return lines


def _overset_section(findings: Sequence[OversetFinding]) -> list[str]:
    lines = ["*** OVERSET TEXT CHECK ***"]
    if not findings:
        lines.append("GOOD NEWS: No overset text errors found in the document.")
        return lines
    lines.append(f"!!! ATTENTION: FOUND {len(findings)} OVERSET TEXT ERRORS !!!")
    lines.append("Please check the following text frames:")
    for idx, finding in enumerate(findings, start=1):
        lines.append(f"{idx}. {finding.location}")
    return lines


def _image_section(results: ImageResults) -> list[str]:
    lines = [
        "IMAGE PLACEMENT REPORT:",
        "-----------------------",
        f"Image folder: {results.folder}",
        f"Total chairpersons processed: {results.total_attempted}",
        f"Successfully placed: {len(results.successful)}/{results.total_attempted}",
        f"Missing images: {len(results.failed)}",
    ]
    if results.successful:
        lines.append("")
        lines.append("Successfully placed images:")
        for message in results.successful:
            lines.append(f"  [SUCCESS] {message}")
    if results.failed:
        lines.append("")
        lines.append("Missing images:")
        for failed in results.failed:
            lines.append(f"  [MISSING] {failed.name}")
            if failed.attempts:
                lines.append("    Searched for:")
                for attempt in failed.attempts[:MAX_LISTED_ATTEMPTS]:
                    lines.append(f"      - {attempt}")
                extra = len(failed.attempts) - MAX_LISTED_ATTEMPTS
                if extra > 0:
                    lines.append(f"      ... and {extra} more variations")
    return lines


def _sessions_section(sessions: Sequence[Session]) -> list[str]:
    lines = ["SESSIONS REPORT:", "----------------"]
    for idx, session in enumerate(sessions, start=1):
        lines.append(f"SESSION {idx}:")
        lines.append(f"  Title: {session.title or '[None]'}")
        lines.append(f"  Time: {session.time or '[None]'}")
        lines.append(f"  Session No: {session.no or '[None]'}")
        lines.append(f"  Chairpersons: {', '.join(session.chair_names) or '[None]'}")
        lines.append(f"  Topics: {len(session.topics)}")
        for t_idx, topic in enumerate(session.topics, start=1):
            lines.append(f"    {t_idx}. {topic.title or '[No title]'}")
            lines.append(f"       Time: {topic.time or '[None]'}")
            lines.append(f"       Speaker: {topic.speaker or '[None]'}")
        lines.append("")
    return lines


def build_report(
    sessions: Sequence[Session],
    context: RunContext,
    options: Optional[ReportOptions] = None,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    options = options or ReportOptions()
    sections = [_header(sessions, context, generated_at or datetime.now())]
    if options.include_overset:
        sections.append(_overset_section(context.overset))
    if options.include_images and context.image_results.enabled:
        sections.append(_image_section(context.image_results))
    if options.include_counts:
        sections.append(_sessions_section(sessions))
    return "\n\n".join("\n".join(lines) for lines in sections).rstrip() + "\n"


def write_report(text: str, path: Path) -> Path:
    path = Path(path)
    if path.suffix.lower() != ".txt":
        path = path.with_suffix(".txt")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
