"""
CLI entry point for mdconvert.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG, Config
from .errors import FileIOError
from .exporter import ExportCoordinator
from .models import is_markdown_path
from .preview import PreviewSession


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mdconvert",
        description="Convert Markdown files to HTML or Word documents using pandoc",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mdconvert notes.md                     Convert to notes.docx
  mdconvert notes.md -o notes.html       Export a themed HTML document
  mdconvert notes.md --theme dark        Use the dark color theme
  mdconvert notes.md --preview           Also write the preview HTML
  mdconvert notes.md --stats             Show task list progress
  mdconvert --init-config                Generate default config file
        """,
    )
    parser.add_argument("input", nargs="?", help="Input Markdown file path (.md or .markdown)")
    parser.add_argument("-o", "--output", help="Output file path (default: input with .docx extension)")
    parser.add_argument("-c", "--config", default="mdconvert.json", help="Config file path (default: mdconvert.json)")
    parser.add_argument("--theme", choices=["light", "dark"], help="Color theme (default: from config)")
    parser.add_argument("--backend", choices=["pandoc", "markdown2"], help="Conversion backend (default: from config)")
    parser.add_argument("--preview", action="store_true", help="Write the live preview HTML next to the output")
    parser.add_argument("--stats", action="store_true", help="Print task list statistics")
    parser.add_argument("--init-config", action="store_true", help="Generate default config file")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")

    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(f"mdconvert {__version__}")
        return 0

    if args.init_config:
        import json

        config_path = Path(args.config)
        if config_path.exists():
            print(f"[ERROR] Config file already exists: {config_path}")
            return 1
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(DEFAULT_CONFIG, f, ensure_ascii=False, indent=4)
        print(f"[INFO] Config file created: {config_path}")
        return 0

    if not args.input:
        parser.print_help()
        return 1

    input_path = Path(args.input)
    if not input_path.exists() or not is_markdown_path(input_path):
        print(f"[ERROR] Markdown file not found: {input_path}")
        return 1

    # Load config
    config_path = Path(args.config)
    config = Config.from_file(config_path) if config_path.exists() else Config()
    if args.theme:
        config.theme = args.theme
    if args.backend:
        config.backend = args.backend

    session = PreviewSession(config=config)
    try:
        session.load_file(input_path)
    except FileIOError as e:
        print(f"[ERROR] {e}")
        return 1

    if args.stats:
        print(f"[INFO] {session.task_stats()}")

    output_path = Path(args.output) if args.output else input_path.with_suffix(".docx")

    if args.preview:
        payload = session.render()
        preview_path = output_path.with_name(f"{output_path.stem}.preview.html")
        try:
            preview_path.write_text(payload.html, encoding="utf-8")
        except OSError as e:
            print(f"[ERROR] Cannot write preview {preview_path}: {e}")
            return 1
        print(f"[INFO] Preview written: {preview_path} (images served from http://{payload.mapping.host}/)")

    exporter = ExportCoordinator(engine=session.engine, config=config)
    result = exporter.export(
        session.document.text,
        output_path,
        working_dir=session.document.working_dir,
        theme=config.get_theme(session.theme.value),
    )
    if not result.success:
        return 1
    if result.warnings:
        print(f"[WARN] {result.warnings}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
