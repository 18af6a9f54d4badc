"""
Export of a Markdown buffer to Markdown, HTML or Word files.

Word documents are produced in two stages: the text is converted to the
same themed HTML the preview shows, and that HTML file is handed to the
engine's file converter. Task lists and tables therefore look the same in
the preview and in the .docx.
"""

from __future__ import annotations

import tempfile
import uuid
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from . import assembler
from .config import Config, ThemeProfile
from .engine import Engine, create_engine
from .errors import ConversionError, FileIOError, MdConvertError, NoContentError
from .messages import print_error, print_info
from .models import MARKDOWN_EXTENSIONS, ConversionRequest, TargetMode
from .pipeline import prepare


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export, with a message meant for the user."""

    success: bool
    format: str
    path: Path
    message: str
    warnings: str = ""


def export_format(destination: str | Path) -> str:
    """Pick the export format from the destination extension."""
    suffix = Path(destination).suffix.lower()
    if suffix in MARKDOWN_EXTENSIONS:
        return "markdown"
    if suffix == ".docx":
        return "docx"
    return "html"


FORMAT_LABELS = {"markdown": "Markdown", "html": "HTML", "docx": "Word"}


class ExportCoordinator:
    """Writes a document to disk in the format its destination asks for."""

    def __init__(self, engine: Engine | None = None, config: Config | None = None):
        self.config = config or Config()
        self.engine = engine or create_engine(self.config)

    def export(
        self,
        text: str,
        destination: str | Path,
        working_dir: str | Path | None = None,
        theme: ThemeProfile | None = None,
    ) -> ExportResult:
        """Export text to destination; every failure is reported in the result."""
        destination = Path(destination)
        fmt = export_format(destination)
        label = FORMAT_LABELS[fmt]
        theme = theme or self.config.get_theme()
        working_dir = Path(working_dir) if working_dir else None

        try:
            if not text or not text.strip():
                raise NoContentError()
            warnings = ""
            if fmt == "markdown":
                self._write_text(destination, text)
            elif fmt == "docx":
                warnings = self._export_word(text, destination, working_dir, theme)
            else:
                self._export_html(text, destination, working_dir, theme)
        except MdConvertError as e:
            print_error(f"{label} export failed: {e}")
            return ExportResult(False, fmt, destination, f"Saving {label} file failed: {e}")

        print_info(f"{label} file saved: {destination}")
        message = f"Saved ({label} file)"
        if warnings:
            message = f"{message}\n\nNote: {warnings}"
        return ExportResult(True, fmt, destination, message, warnings)

    def render_html(self, text: str, working_dir: Path | None, theme: ThemeProfile, mode: TargetMode) -> str:
        """Convert text to a complete themed document; raises ConversionError."""
        request = ConversionRequest(text=text, mode=mode, working_dir=working_dir)
        fragment_html = self.engine.run_filter(prepare(request, self.config.preview_host))
        return assembler.wrap(fragment_html, theme)

    def _export_html(self, text: str, destination: Path, working_dir: Path | None, theme: ThemeProfile) -> None:
        html = self.render_html(text, working_dir, theme, TargetMode.HTML_EXPORT)
        self._write_text(destination, html)

    def _export_word(self, text: str, destination: Path, working_dir: Path | None, theme: ThemeProfile) -> str:
        html = self.render_html(text, working_dir, theme, TargetMode.WORD_EXPORT)

        temp_html = Path(tempfile.gettempdir()) / f"mdconvert_{uuid.uuid4().hex}.html"
        try:
            self._write_text(temp_html, html)
            try:
                result = self.engine.run_file_conversion(temp_html, destination, "html", "docx")
            except OSError as e:
                raise ConversionError(f"Word conversion failed: {e}") from e
        finally:
            with suppress(OSError):
                temp_html.unlink()

        return result.diagnostics if result.degraded else ""

    @staticmethod
    def _write_text(path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise FileIOError(path, f"cannot write file: {e}") from e
