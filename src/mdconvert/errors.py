"""
Exception classes for mdconvert.
"""

from __future__ import annotations

from pathlib import Path


class MdConvertError(Exception):
    """Base exception for all mdconvert errors."""


class ConversionError(MdConvertError):
    """The conversion engine did not produce usable output."""


class ConversionTimeout(ConversionError):
    """The engine exceeded its time budget and was terminated."""

    def __init__(self, timeout: float):
        super().__init__(f"Conversion timed out ({timeout:g} seconds)")
        self.timeout = timeout


class ConversionFailed(ConversionError):
    """The engine exited with an error."""

    def __init__(self, message: str, stderr: str = "", returncode: int | None = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class FileIOError(MdConvertError):
    """Reading or writing a document failed."""

    def __init__(self, path: str | Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)


class NoContentError(MdConvertError):
    """An export was requested for an empty document."""

    def __init__(self):
        super().__init__("No content to export")
