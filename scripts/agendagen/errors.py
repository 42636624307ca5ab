"""Custom exceptions for agenda generation config/input/template errors."""

from __future__ import annotations


class ConfigValidationError(ValueError):
    """Raised when the settings JSON is invalid for agenda generation."""

    def __init__(self, issues: list[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid configuration"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Configuration validation failed:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class CsvParseError(ValueError):
    """Raised when the session CSV cannot be turned into sessions."""


class EmptyInputError(CsvParseError):
    def __init__(self, message: str = "CSV file is empty"):
        super().__init__(message)


class MissingRequiredColumnError(CsvParseError):
    """The header row has no 'Session Title' column."""

    def __init__(self, delimiter: str, headers: list[str]):
        self.delimiter = delimiter
        self.headers = list(headers)
        delimiter_name = "semicolon" if delimiter == ";" else "comma"
        found = " | ".join(self.headers) if self.headers else "(none)"
        super().__init__(
            "Required column 'Session Title' was not found.\n"
            f"Detected delimiter: {delimiter_name}\n"
            f"Headers found: {found}"
        )


class AgendaRunError(RuntimeError):
    """Raised when a generation run cannot produce any output."""


class NoSessionsError(AgendaRunError):
    def __init__(self, message: str = "No sessions found in CSV; nothing to generate"):
        super().__init__(message)


class TemplateError(RuntimeError):
    """Raised when a template page cannot be filled."""


class NoPlaceholdersFoundError(TemplateError):
    def __init__(self, labels: tuple[str, ...]):
        self.labels = tuple(labels)
        super().__init__(
            "No labelled placeholders found on the template page. "
            f"Name at least one shape with one of: {', '.join(self.labels)}"
        )


class MissingTopicFramesError(TemplateError):
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Independent topic mode needs the frames topicTime, topicTitle and topicSpeaker; "
            f"missing: {', '.join(self.missing)}"
        )
