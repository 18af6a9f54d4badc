"""Text preparation and fragment conversion shared by preview and export."""

from __future__ import annotations

from .engine import Engine
from .errors import ConversionError
from .mathfix import normalize_math
from .messages import print_error
from .models import ConversionRequest, ConversionResult, TargetMode
from .resources import DEFAULT_PREVIEW_HOST, resolve_export, resolve_preview
from .tasklist import normalize_task_lists


def preprocess(text: str) -> str:
    """Apply every text normalization the engine needs, in order."""
    return normalize_math(normalize_task_lists(text))


def prepare(request: ConversionRequest, host: str = DEFAULT_PREVIEW_HOST) -> str:
    """Produce engine-ready text: normalized, with image paths resolved for the target."""
    text = preprocess(request.text)
    if request.working_dir is None:
        return text
    if request.mode is TargetMode.PREVIEW:
        return resolve_preview(text, request.working_dir, host)
    return resolve_export(text, request.working_dir)


def convert(engine: Engine, request: ConversionRequest, host: str = DEFAULT_PREVIEW_HOST) -> ConversionResult:
    """Run a request through the engine filter, reporting failures in the result."""
    try:
        fragment_html = engine.run_filter(prepare(request, host))
    except ConversionError as e:
        print_error(f"Conversion failed: {e}")
        return ConversionResult(fragment_html="", success=False, message=str(e))
    return ConversionResult(fragment_html=fragment_html)
