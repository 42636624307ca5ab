from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "generate_agenda.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run([sys.executable, str(SCRIPT), *args], capture_output=True, text=True)


def test_cli_shows_clean_validation_error(tmp_path: Path) -> None:
    bad_settings = tmp_path / "bad.json"
    bad_settings.write_text('{"chairOptions": {"mode": "stacked"}}', encoding="utf-8")
    csv_path = tmp_path / "sessions.csv"
    csv_path.write_text("Session Title\nKeynote\n", encoding="utf-8")

    result = _run(
        "--template",
        str(tmp_path / "template.pptx"),
        "--csv",
        str(csv_path),
        "--settings",
        str(bad_settings),
        "--output",
        str(tmp_path / "out.pptx"),
    )

    assert result.returncode == 1
    assert "Configuration validation failed" in result.stderr
    assert "chairOptions.mode 'stacked' is unsupported" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_reports_missing_session_title_column(tmp_path: Path) -> None:
    csv_path = tmp_path / "sessions.csv"
    csv_path.write_text("Title;Time\nKeynote;09:00\n", encoding="utf-8")

    result = _run(
        "--template",
        str(tmp_path / "template.pptx"),
        "--csv",
        str(csv_path),
        "--output",
        str(tmp_path / "out.pptx"),
    )

    assert result.returncode == 1
    assert "Agenda generation failed: Required column 'Session Title' was not found." in result.stderr
    assert "Detected delimiter: semicolon" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_requires_output_without_inspect(tmp_path: Path) -> None:
    result = _run("--template", "t.pptx", "--csv", "s.csv")
    assert result.returncode == 1
    assert "--output is required unless --inspect is given" in result.stderr
