"""
Live preview rendering.

A PreviewSession owns the document being edited, the active theme and
the virtual-host mapping the rendering surface must register before it
displays a payload. Every render is tagged with a generation number so
the surface can drop results of superseded requests.
"""

from __future__ import annotations

import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

from . import assembler
from .config import Config
from .engine import Engine, create_engine
from .messages import print_warn
from .models import SourceDocument, TargetMode, Theme
from .pipeline import convert
from .resources import VirtualHostMapping, rewrite_html_images
from .tasklist import TaskListStats, compute_stats


def preview_file_path() -> Path:
    """Per-process file used for previews too large to display inline."""
    return Path(tempfile.gettempdir()) / f"mdconvert_preview_{os.getpid()}.html"


@dataclass(frozen=True)
class PreviewPayload:
    """Finished preview: inline HTML, or a file to navigate to when it is too large."""

    html: str
    generation: int
    mapping: VirtualHostMapping
    file_path: Path | None = None
    error: str = ""

    @property
    def inline(self) -> bool:
        return self.file_path is None

    @property
    def file_url(self) -> str | None:
        return self.file_path.as_uri() if self.file_path else None


class PreviewSession:
    """Renders the current document for display."""

    def __init__(self, engine: Engine | None = None, config: Config | None = None):
        self.config = config or Config()
        self.engine = engine or create_engine(self.config)
        self.document = SourceDocument()
        self.theme = Theme(self.config.theme) if self.config.theme in ("light", "dark") else Theme.LIGHT
        self.mapping = VirtualHostMapping(host=self.config.preview_host)
        self._generation = 0
        self._lock = threading.Lock()

    def load_file(self, path: str | Path) -> None:
        """Load a Markdown file; its folder governs image resolution from now on."""
        self.document = SourceDocument.load(path)
        self.mapping = self.mapping.with_folder(self.document.working_dir)

    def set_text(self, text: str) -> None:
        self.document.replace_text(text)

    def toggle_theme(self) -> Theme:
        self.theme = self.theme.toggled()
        return self.theme

    def task_stats(self) -> TaskListStats:
        return compute_stats(self.document.text)

    def is_current(self, generation: int) -> bool:
        """Check whether a payload belongs to the most recent render request."""
        return generation == self._generation

    def render(self) -> PreviewPayload:
        """Convert the current text into a themed preview document."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        mapping = self.mapping
        request = self.document.request(TargetMode.PREVIEW)

        if self.document.is_empty:
            return PreviewPayload(html=assembler.EMPTY_DOCUMENT, generation=generation, mapping=mapping)

        result = convert(self.engine, request, mapping.host)
        fragment_html = result.fragment_html if result.success else assembler.error_fragment(result.message)
        html = assembler.wrap(fragment_html, self.config.get_theme(self.theme.value))
        html = rewrite_html_images(html, mapping)

        file_path = None
        if len(html) > self.config.inline_preview_limit:
            file_path = self._write_preview_file(html)

        return PreviewPayload(
            html=html,
            generation=generation,
            mapping=mapping,
            file_path=file_path,
            error=result.message,
        )

    @staticmethod
    def _write_preview_file(html: str) -> Path | None:
        path = preview_file_path()
        try:
            path.write_text(html, encoding="utf-8")
        except OSError as e:
            print_warn(f"Cannot write preview file {path}, displaying inline: {e}")
            return None
        return path
