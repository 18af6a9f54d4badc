"""
mdconvert - Render Markdown to preview HTML and export it to HTML or Word.

A Python library and CLI tool that normalizes Markdown (task lists, inline
math, image paths), drives pandoc to convert it, and wraps the result in a
themed, self-contained HTML document.
"""

from .assembler import error_fragment, wrap
from .config import DARK_THEME, DEFAULT_CONFIG, LIGHT_THEME, Config, EngineConfig, ThemeProfile
from .engine import AdmissionGate, Engine, FileConversionResult, Markdown2Engine, PandocEngine, create_engine
from .errors import ConversionError, ConversionFailed, ConversionTimeout, FileIOError, NoContentError
from .exporter import ExportCoordinator, ExportResult
from .mathfix import normalize_math
from .models import ConversionRequest, ConversionResult, SourceDocument, TargetMode, Theme
from .preview import PreviewPayload, PreviewSession
from .resources import VirtualHostMapping, resolve_export, resolve_preview, rewrite_html_images
from .tasklist import TaskListStats, compute_stats, normalize_task_lists

__version__ = "0.1.0"
__all__ = [
    "Config",
    "EngineConfig",
    "ThemeProfile",
    "DEFAULT_CONFIG",
    "LIGHT_THEME",
    "DARK_THEME",
    "AdmissionGate",
    "Engine",
    "PandocEngine",
    "Markdown2Engine",
    "FileConversionResult",
    "create_engine",
    "ConversionError",
    "ConversionFailed",
    "ConversionTimeout",
    "FileIOError",
    "NoContentError",
    "ExportCoordinator",
    "ExportResult",
    "PreviewSession",
    "PreviewPayload",
    "SourceDocument",
    "ConversionRequest",
    "ConversionResult",
    "TargetMode",
    "Theme",
    "VirtualHostMapping",
    "TaskListStats",
    "normalize_task_lists",
    "compute_stats",
    "normalize_math",
    "resolve_preview",
    "resolve_export",
    "rewrite_html_images",
    "wrap",
    "error_fragment",
]
