"""Data model for the conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import FileIOError

MARKDOWN_EXTENSIONS = (".md", ".markdown")


class TargetMode(Enum):
    """What a conversion is for."""

    PREVIEW = "preview"
    HTML_EXPORT = "html"
    WORD_EXPORT = "docx"


class Theme(Enum):
    """Preview and export color theme."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


@dataclass
class SourceDocument:
    """Editable Markdown buffer and the folder it was loaded from."""

    text: str = ""
    working_dir: Path | None = None

    @classmethod
    def load(cls, path: str | Path) -> SourceDocument:
        """Read a UTF-8 Markdown file; its folder becomes the working directory."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(path, f"cannot read file: {e}") from e
        return cls(text=text, working_dir=path.resolve().parent)

    def replace_text(self, text: str) -> None:
        """Replace the buffer (edit or paste); the working directory is kept."""
        self.text = text

    @property
    def is_empty(self) -> bool:
        return not self.text or not self.text.strip()

    def request(self, mode: TargetMode) -> ConversionRequest:
        return ConversionRequest(text=self.text, mode=mode, working_dir=self.working_dir)


@dataclass(frozen=True)
class ConversionRequest:
    """A single conversion of a text snapshot."""

    text: str
    mode: TargetMode = TargetMode.PREVIEW
    working_dir: Path | None = None


@dataclass(frozen=True)
class ConversionResult:
    """Fragment HTML produced by the engine, or the reason there is none."""

    fragment_html: str
    success: bool = True
    message: str = ""


def is_markdown_path(path: str | Path) -> bool:
    """Check whether a path has a Markdown extension."""
    return Path(path).suffix.lower() in MARKDOWN_EXTENSIONS
