"""Console diagnostics for mdconvert."""

from __future__ import annotations

import sys


def print_info(message: str) -> None:
    """Print info message."""
    print(f"[INFO] {message}")


def print_warn(message: str) -> None:
    """Print warning message."""
    print(f"[WARN] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    print(f"[ERROR] {message}", file=sys.stderr)
