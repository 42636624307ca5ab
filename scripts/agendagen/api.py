"""Public API helpers for programmatic agenda generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .models import RunContext
from .settings import AgendaSettings, save_settings


def generate_agenda_from_files(
    *,
    generator_cls,
    template_path: Path,
    csv_path: Path,
    output_path: Path,
    settings_path: Optional[Path] = None,
    report_path: Optional[Path] = None,
    template_slide: int = 0,
    keep_template_slides: bool = False,
) -> tuple[Path, RunContext]:
    """Generate an agenda PPTX via the provided generator class.

    Returns the saved path and the run context (fill warnings, page
    failures, image results, overset findings).
    """
    generator = generator_cls(
        str(template_path),
        str(csv_path),
        str(settings_path) if settings_path else None,
        template_slide=template_slide,
        keep_template_slides=keep_template_slides,
    )
    context = generator.generate()
    saved = generator.save(str(output_path))
    if report_path:
        generator.write_report(str(report_path))
    return saved, context


def write_settings(settings: Union[AgendaSettings, Dict[str, Any]], path: Path) -> Path:
    """Write a settings tree to disk and return the path."""
    if not isinstance(settings, AgendaSettings):
        settings = AgendaSettings.from_dict(settings)
    return save_settings(settings, Path(path))
