"""CLI orchestration for the agenda generator."""

from __future__ import annotations

import argparse
import traceback
from pathlib import Path

from .errors import ConfigValidationError, CsvParseError, NoSessionsError, TemplateError
from .qa_pipeline import print_run_summary
from .settings import save_settings
from .validation import TOPIC_MODES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate agenda slides from a session CSV and a labelled PPTX template")
    parser.add_argument("--template", required=True, help="Path to the .pptx template with labelled shapes")
    parser.add_argument("--csv", required=True, help="Path to the session CSV (comma or semicolon separated)")
    parser.add_argument("--output", default=None, help="Output PPTX file path (required unless --inspect)")
    parser.add_argument("--settings", default=None, help="Optional path to a JSON settings file")
    parser.add_argument(
        "--report",
        default=None,
        help="Write the import report to this .txt path (default: <output-stem>-report.txt next to the PPTX)",
    )
    parser.add_argument("--no-report", action="store_true", help="Do not write an import report")
    parser.add_argument(
        "--template-slide",
        type=int,
        default=1,
        help="1-based index of the template slide to duplicate per session (default: 1)",
    )
    parser.add_argument(
        "--keep-template-slides",
        action="store_true",
        help="Keep the template's other slides in the output (the template slide itself is always removed)",
    )
    parser.add_argument("--image-folder", default=None, help="Enable chairperson images from this folder")
    parser.add_argument(
        "--topic-mode",
        default=None,
        choices=list(TOPIC_MODES),
        help="Override the topic layout (default: settings, else what the template supports)",
    )
    parser.add_argument(
        "--export-settings",
        default=None,
        help="Write the effective settings (defaults + file + flags) to this JSON path",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Print detected CSV fields and template capabilities, then exit",
    )
    parser.add_argument("--verbose", action="store_true", help="List every fill warning and overset frame")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def run_cli(generator_cls) -> None:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        if not args.inspect and not args.output:
            raise SystemExit("--output is required unless --inspect is given")

        generator = generator_cls(
            str(Path(args.template).resolve()),
            str(Path(args.csv).resolve()),
            str(Path(args.settings).resolve()) if args.settings else None,
            template_slide=args.template_slide - 1,
            keep_template_slides=args.keep_template_slides,
            image_folder=args.image_folder,
            topic_mode=args.topic_mode,
        )

        if args.export_settings:
            saved_settings = save_settings(generator.settings, Path(args.export_settings).resolve())
            print(f"✅ Settings saved to {saved_settings}")

        if args.inspect:
            for line in generator.inspect_lines():
                print(line)
            return

        output_path = Path(args.output).resolve()
        context = generator.generate()
        generator.save(str(output_path))
        print_run_summary(context, verbose=args.verbose)

        if not args.no_report:
            report_path = (
                Path(args.report).resolve() if args.report else output_path.parent / f"{output_path.stem}-report.txt"
            )
            generator.write_report(str(report_path))
    except ConfigValidationError as e:
        raise SystemExit(str(e)) from e
    except (CsvParseError, NoSessionsError, TemplateError, FileNotFoundError) as e:
        raise SystemExit(f"Agenda generation failed: {e}") from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Agenda generation failed: {e}") from e
