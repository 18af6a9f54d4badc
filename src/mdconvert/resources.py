"""
Image reference rewriting.

Relative image paths in Markdown only make sense next to the source file.
For the live preview they are rewritten to a virtual-host URL that the
rendering surface maps onto the working directory; for file export they
are rewritten to absolute filesystem paths.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath

DEFAULT_PREVIEW_HOST = "markdown.local"

MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
HTML_IMAGE_PATTERN = re.compile(r"<img\s+[^>]*?(?<![\w-])src\s*=\s*([\"'])(.*?)\1[^>]*>", flags=re.IGNORECASE)


@dataclass(frozen=True)
class VirtualHostMapping:
    """
    Association of a symbolic host name with a local folder.

    Instances are immutable; pointing the host at another folder produces a
    new mapping with a higher version, so a render always carries the exact
    mapping it was produced against.
    """

    host: str = DEFAULT_PREVIEW_HOST
    folder: Path | None = None
    version: int = 0

    @property
    def prefix(self) -> str:
        return f"http://{self.host}/"

    def url_for(self, relative_path: str) -> str:
        """Build the virtual-host URL for a path relative to the folder."""
        return self.prefix + relative_path.replace("\\", "/").lstrip("/")

    def with_folder(self, folder: str | Path | None) -> VirtualHostMapping:
        """Return a mapping for another folder, bumping the version if it changed."""
        folder = Path(folder).resolve() if folder else None
        if folder == self.folder:
            return self
        return VirtualHostMapping(host=self.host, folder=folder, version=self.version + 1)


def is_external_or_absolute(path: str) -> bool:
    """Check whether an image path must be left as written."""
    if not path:
        return True
    if path.startswith(("http:", "https:", "data:", "file:")):
        return True
    return Path(path).is_absolute() or PureWindowsPath(path).is_absolute()


def _existing_file(working_dir: str | Path, path: str) -> Path | None:
    try:
        full_path = (Path(working_dir) / path).resolve()
        return full_path if full_path.is_file() else None
    except (OSError, ValueError):
        return None


def resolve_preview(text: str, working_dir: str | Path | None, host: str = DEFAULT_PREVIEW_HOST) -> str:
    """Rewrite relative image paths that exist on disk to virtual-host URLs."""
    if not text or not working_dir:
        return text
    mapping = VirtualHostMapping(host=host)

    def replace_image(match):
        alt_text, path = match.group(1), match.group(2)
        if is_external_or_absolute(path) or _existing_file(working_dir, path) is None:
            return match.group(0)
        return f"![{alt_text}]({mapping.url_for(path)})"

    return MARKDOWN_IMAGE_PATTERN.sub(replace_image, text)


def resolve_export(text: str, working_dir: str | Path | None) -> str:
    """Rewrite relative image paths that exist on disk to absolute paths."""
    if not text or not working_dir:
        return text

    def replace_image(match):
        alt_text, path = match.group(1), match.group(2)
        if is_external_or_absolute(path):
            return match.group(0)
        full_path = _existing_file(working_dir, path)
        if full_path is None:
            return match.group(0)
        return f"![{alt_text}]({full_path})"

    return MARKDOWN_IMAGE_PATTERN.sub(replace_image, text)


def rewrite_html_images(html: str, mapping: VirtualHostMapping) -> str:
    """Point relative ``<img src>`` values in rendered HTML at the virtual host."""
    if not html or mapping.folder is None:
        return html

    def replace_img(match):
        tag, src = match.group(0), match.group(2)
        if src.startswith(mapping.prefix) or is_external_or_absolute(src):
            return tag
        start = match.start(2) - match.start(0)
        end = match.end(2) - match.start(0)
        return tag[:start] + mapping.url_for(src) + tag[end:]

    return HTML_IMAGE_PATTERN.sub(replace_img, html)
