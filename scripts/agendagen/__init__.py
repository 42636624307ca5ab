"""Internal helpers for the agenda generator."""

from .api import generate_agenda_from_files, write_settings
from .cli import run_cli
from .csv_parser import ParseResult, parse_csv_file, parse_csv_text
from .errors import (
    ConfigValidationError,
    CsvParseError,
    EmptyInputError,
    MissingRequiredColumnError,
    MissingTopicFramesError,
    NoPlaceholdersFoundError,
    NoSessionsError,
    TemplateError,
)
from .filler import PlaceholderFiller
from .legacy_adapter import adapt_legacy_settings, is_legacy_settings
from .models import RunContext, Session, Topic
from .placeholders import analyze_template, resolve_placeholders
from .report import build_report, write_report
from .settings import AgendaSettings, default_settings, load_settings, save_settings
from .validation import validate_settings, validate_settings_file

__all__ = [
    "AgendaSettings",
    "ConfigValidationError",
    "CsvParseError",
    "EmptyInputError",
    "MissingRequiredColumnError",
    "MissingTopicFramesError",
    "NoPlaceholdersFoundError",
    "NoSessionsError",
    "ParseResult",
    "PlaceholderFiller",
    "RunContext",
    "Session",
    "TemplateError",
    "Topic",
    "adapt_legacy_settings",
    "analyze_template",
    "build_report",
    "default_settings",
    "generate_agenda_from_files",
    "is_legacy_settings",
    "load_settings",
    "parse_csv_file",
    "parse_csv_text",
    "resolve_placeholders",
    "run_cli",
    "save_settings",
    "validate_settings",
    "validate_settings_file",
    "write_report",
    "write_settings",
]
