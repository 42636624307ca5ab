"""Agenda Generator - Builds one slide per conference session from a CSV.

This module provides an AgendaGenerator class that reads a session CSV,
duplicates a labelled template slide once per session and fills the copies
(session fields, chairpersons, topics and optional chairperson images).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from agendagen.csv_parser import ParseResult, parse_csv_file
from agendagen.errors import NoSessionsError, TemplateError
from agendagen.filler import PlaceholderFiller
from agendagen.models import PageFailure, RunContext
from agendagen.placeholders import TemplateAnalysis, analyze_template, resolve_placeholders
from agendagen.pptx_host import PptxDocument, PptxStyleBook
from agendagen.qa_pipeline import scan_overset
from agendagen.report import build_report, write_report
from agendagen.settings import AgendaSettings, default_settings, load_settings


class AgendaGenerator:
    """Generate agenda PPTX files from a template and a session CSV."""

    def __init__(
        self,
        template_path: str,
        csv_path: str,
        settings_path: Optional[str] = None,
        *,
        template_slide: int = 0,
        keep_template_slides: bool = False,
        image_folder: Optional[str] = None,
        topic_mode: Optional[str] = None,
    ):
        settings = load_settings(Path(settings_path)) if settings_path else default_settings()
        self._init_run(
            settings,
            template_path,
            csv_path,
            template_slide=template_slide,
            keep_template_slides=keep_template_slides,
            image_folder=image_folder,
            topic_mode=topic_mode,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AgendaSettings,
        template_path: str,
        csv_path: str,
        *,
        template_slide: int = 0,
        keep_template_slides: bool = False,
    ) -> "AgendaGenerator":
        instance = object.__new__(cls)
        instance._init_run(
            settings,
            template_path,
            csv_path,
            template_slide=template_slide,
            keep_template_slides=keep_template_slides,
        )
        return instance

    def _init_run(
        self,
        settings: AgendaSettings,
        template_path: str,
        csv_path: str,
        *,
        template_slide: int = 0,
        keep_template_slides: bool = False,
        image_folder: Optional[str] = None,
        topic_mode: Optional[str] = None,
    ) -> None:
        self.settings = settings
        if image_folder:
            self.settings.chair.image_folder = image_folder
            self.settings.chair.enable_images = True
        if topic_mode:
            self.settings.topic.mode = topic_mode

        self.csv_path = Path(csv_path).resolve()
        self.template_path = Path(template_path).resolve()
        self.keep_template_slides = keep_template_slides
        self.parsed: ParseResult = parse_csv_file(self.csv_path)
        self.document = PptxDocument(self.template_path, template_slide)
        self.context = RunContext()

    @property
    def sessions(self):
        return self.parsed.sessions

    def analyze(self) -> TemplateAnalysis:
        return analyze_template(self.document.template_page())

    def inspect_lines(self) -> list[str]:
        fields = [name for name, present in self.parsed.available_fields.items() if present]
        delimiter = "semicolon" if self.parsed.delimiter == ";" else "comma"
        lines = [
            f"CSV: {self.csv_path}",
            f"Delimiter: {delimiter}",
            f"Detected fields: {', '.join(fields)}",
            f"Sessions: {len(self.sessions)}",
            f"Template: {self.template_path}",
        ]
        lines.extend(self.analyze().summary_lines())
        return lines

    def generate(self) -> RunContext:
        if not self.sessions:
            raise NoSessionsError()

        # Fails before any slide is produced when the template carries no labels.
        resolve_placeholders(self.document.template_page())

        filler = PlaceholderFiller(
            self.settings,
            context=self.context,
            apply_style=PptxStyleBook(self.settings.styles.paragraph_styles),
        )
        for number, session in enumerate(self.sessions, start=1):
            page = self.document.new_page()
            try:
                filler.fill(page, session)
            except TemplateError as exc:
                self.context.failures.append(PageFailure(page=number, session_title=session.title, message=str(exc)))

        self.document.remove_original_slides(keep_others=self.keep_template_slides)
        if self.settings.report.include_overset:
            self.context.overset = scan_overset(self.document.pages())
        return self.context

    def report_text(self) -> str:
        return build_report(self.sessions, self.context, self.settings.report)

    def write_report(self, report_path: str) -> Path:
        output = write_report(self.report_text(), Path(report_path))
        print(f"✅ Report saved to {output}")
        return output

    def save(self, output_path: str) -> Path:
        output = self.document.save(Path(output_path))
        print(f"✅ PPTX saved to {output}")
        return output


from agendagen.cli import run_cli


def main() -> None:
    run_cli(AgendaGenerator)


if __name__ == "__main__":
    main()
