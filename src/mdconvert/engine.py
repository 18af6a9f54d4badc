"""
Conversion engine clients.

The rest of the package only talks to an ``Engine``: a text filter
(Markdown in, fragment HTML out) and a file-to-file converter. The default
backend drives pandoc as a subprocess; a pure-Python backend built on
markdown2 and html4docx is available where pandoc is not installed.
"""

from __future__ import annotations

import re
import subprocess
import threading
from abc import ABC, abstractmethod
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import markdown2
from docx import Document
from docx.image.exceptions import UnrecognizedImageError
from html4docx import HtmlToDocx

from .config import Config, EngineConfig
from .errors import ConversionFailed, ConversionTimeout
from .messages import print_error, print_info, print_warn


class AdmissionGate:
    """Counting gate bounding how many engine processes run at once."""

    def __init__(self, limit: int = 2):
        self.limit = limit
        self._semaphore = threading.BoundedSemaphore(limit)
        self._lock = threading.Lock()
        self._active = 0
        self._peak = 0

    @property
    def active(self) -> int:
        return self._active

    @property
    def peak(self) -> int:
        """Highest number of simultaneous holders seen so far."""
        return self._peak

    def __enter__(self) -> AdmissionGate:
        self._semaphore.acquire()
        with self._lock:
            self._active += 1
            self._peak = max(self._peak, self._active)
        return self

    def __exit__(self, *exc_info) -> None:
        with self._lock:
            self._active -= 1
        self._semaphore.release()


_shared_gates: dict[int, AdmissionGate] = {}
_shared_gates_lock = threading.Lock()


def shared_gate(limit: int = 2) -> AdmissionGate:
    """Return the process-wide gate for the given concurrency limit."""
    with _shared_gates_lock:
        if limit not in _shared_gates:
            _shared_gates[limit] = AdmissionGate(limit)
        return _shared_gates[limit]


class FileConversionStatus(Enum):
    SUCCESS = "success"
    # Engine complained but produced output; only warnings on stderr
    DEGRADED = "degraded"


@dataclass(frozen=True)
class FileConversionResult:
    """Outcome of a file-to-file conversion that produced output."""

    status: FileConversionStatus
    output_path: Path
    diagnostics: str = ""

    @property
    def degraded(self) -> bool:
        return self.status is FileConversionStatus.DEGRADED


def classify_file_conversion(
    returncode: int,
    stderr: str,
    config: EngineConfig,
    output_path: Path,
) -> FileConversionResult:
    """
    Decide the outcome of a file-to-file run from its exit code and stderr.

    A nonzero exit whose stderr carries a warning marker still produced a
    document and is reported as degraded. A zero exit whose stderr carries
    a fatal marker is a failure. Both checks are substring matches on the
    engine's diagnostic text.
    """
    if returncode != 0:
        if any(marker in stderr for marker in config.warning_markers):
            return FileConversionResult(FileConversionStatus.DEGRADED, output_path, stderr.strip())
        raise ConversionFailed(
            f"Engine exited with code {returncode}: {stderr.strip()}",
            stderr=stderr,
            returncode=returncode,
        )
    if any(marker in stderr for marker in config.fatal_markers):
        raise ConversionFailed(f"Engine reported an error: {stderr.strip()}", stderr=stderr, returncode=returncode)
    return FileConversionResult(FileConversionStatus.SUCCESS, output_path, stderr.strip())


class Engine(ABC):
    """Narrow interface to a document-conversion engine."""

    name = "engine"

    @abstractmethod
    def run_filter(self, text: str) -> str:
        """Convert Markdown text to fragment HTML."""

    @abstractmethod
    def run_file_conversion(
        self,
        input_path: str | Path,
        output_path: str | Path,
        from_format: str,
        to_format: str,
    ) -> FileConversionResult:
        """Convert one file into another format."""


class PandocEngine(Engine):
    """Runs pandoc as a subprocess, at most ``max_concurrency`` at a time."""

    name = "pandoc"

    def __init__(self, config: EngineConfig | None = None, gate: AdmissionGate | None = None):
        self.config = config or EngineConfig()
        self.gate = gate or shared_gate(self.config.max_concurrency)

    def filter_args(self) -> list[str]:
        return [
            *self.config.extra_args,
            "-f",
            self.config.input_format,
            "-t",
            self.config.output_format,
        ]

    def run_filter(self, text: str) -> str:
        stdout, stderr, returncode = self._run(self.filter_args(), stdin=text.encode("utf-8"))
        if returncode != 0:
            raise ConversionFailed(
                f"Pandoc conversion failed: {stderr.strip()}",
                stderr=stderr,
                returncode=returncode,
            )
        if stderr.strip():
            print_warn(f"Pandoc: {stderr.strip()}")
        return stdout.decode("utf-8")

    def run_file_conversion(
        self,
        input_path: str | Path,
        output_path: str | Path,
        from_format: str,
        to_format: str,
    ) -> FileConversionResult:
        output_path = Path(output_path)
        args = [str(input_path), "-o", str(output_path), "-f", from_format, "-t", to_format]
        _, stderr, returncode = self._run(args)
        result = classify_file_conversion(returncode, stderr, self.config, output_path)
        if result.degraded:
            print_warn(f"Pandoc finished with warnings: {result.diagnostics}")
        return result

    def _run(self, args: list[str], stdin: bytes | None = None) -> tuple[bytes, str, int]:
        """Run the engine once under the admission gate, returning (stdout, stderr, exit code)."""
        command = [self.config.executable, *args]
        with self.gate:
            try:
                process = subprocess.Popen(
                    command,
                    stdin=subprocess.PIPE if stdin is not None else subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise ConversionFailed(f"Conversion engine not found: {self.config.executable}") from e
            except OSError as e:
                raise ConversionFailed(f"Cannot start conversion engine: {e}") from e

            print_info(f"Started {self.name} (pid {process.pid})")
            try:
                # communicate() feeds stdin and drains both pipes together
                stdout, stderr = process.communicate(input=stdin, timeout=self.config.timeout_seconds)
            except subprocess.TimeoutExpired:
                self._terminate(process)
                print_error(f"{self.name} timed out after {self.config.timeout_seconds:g} seconds")
                raise ConversionTimeout(self.config.timeout_seconds) from None

        return stdout, stderr.decode("utf-8", errors="replace"), process.returncode

    @staticmethod
    def _terminate(process: subprocess.Popen) -> None:
        with suppress(OSError, subprocess.TimeoutExpired):
            process.kill()
            process.communicate(timeout=5)


class Markdown2Engine(Engine):
    """In-process engine: markdown2 for HTML, html4docx for Word."""

    name = "markdown2"

    EXTRAS = ["tables", "cuddled-lists", "fenced-code-blocks", "header-ids", "task_list", "strike"]

    def run_filter(self, text: str) -> str:
        return markdown2.markdown(text, extras=self.EXTRAS)

    def run_file_conversion(
        self,
        input_path: str | Path,
        output_path: str | Path,
        from_format: str,
        to_format: str,
    ) -> FileConversionResult:
        if (from_format, to_format) != ("html", "docx"):
            raise ConversionFailed(f"{self.name} cannot convert {from_format} to {to_format}")

        output_path = Path(output_path)
        html_content = Path(input_path).read_text(encoding="utf-8")
        # html4docx renders <head> text such as the stylesheet as paragraphs
        html_content = re.sub(r"<head\b.*?</head>", "", html_content, flags=re.IGNORECASE | re.DOTALL)

        status = FileConversionStatus.SUCCESS
        diagnostics = ""
        try:
            document = self._build_document(html_content)
        except UnrecognizedImageError as e:
            print_error(f"UnrecognizedImageError, retrying without images: {e}")
            html_without_images = re.sub(r"<img[^>]*>", "", html_content, flags=re.IGNORECASE)
            document = self._build_document(html_without_images)
            status = FileConversionStatus.DEGRADED
            diagnostics = f"Images removed: {e}"

        output_path.parent.mkdir(parents=True, exist_ok=True)
        document.save(str(output_path))
        return FileConversionResult(status, output_path, diagnostics)

    @staticmethod
    def _build_document(html_content: str):
        document = Document()
        HtmlToDocx().add_html_to_document(html_content, document)
        return document


def create_engine(config: Config | None = None) -> Engine:
    """Create the engine selected by ``config.backend``."""
    config = config or Config()
    if config.backend == "markdown2":
        return Markdown2Engine()
    return PandocEngine(config.engine)
