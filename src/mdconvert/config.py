"""Configuration classes for mdconvert."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .messages import print_info, print_warn

# Input extensions understood by the pandoc filter mode
PANDOC_INPUT_FORMAT = "markdown+tex_math_dollars+table_captions+pipe_tables+grid_tables+raw_html"

BACKENDS = ("pandoc", "markdown2")


@dataclass
class EngineConfig:
    """Settings for the external conversion engine."""

    executable: str = "pandoc"
    timeout_seconds: float = 30
    max_concurrency: int = 2
    input_format: str = PANDOC_INPUT_FORMAT
    output_format: str = "html5"
    extra_args: list[str] = field(default_factory=lambda: ["--mathml"])
    # Substring markers checked against stderr of file-to-file conversions
    warning_markers: list[str] = field(default_factory=lambda: ["[WARNING]"])
    fatal_markers: list[str] = field(default_factory=lambda: ["Error", "error:", "fatal:"])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create EngineConfig from dictionary."""
        defaults = cls()
        return cls(
            executable=data.get("executable", defaults.executable),
            timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
            max_concurrency=max(1, int(data.get("max_concurrency", defaults.max_concurrency))),
            input_format=data.get("input_format", defaults.input_format),
            output_format=data.get("output_format", defaults.output_format),
            extra_args=list(data.get("extra_args", defaults.extra_args)),
            warning_markers=list(data.get("warning_markers", defaults.warning_markers)),
            fatal_markers=list(data.get("fatal_markers", defaults.fatal_markers)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "executable": self.executable,
            "timeout_seconds": self.timeout_seconds,
            "max_concurrency": self.max_concurrency,
            "input_format": self.input_format,
            "output_format": self.output_format,
            "extra_args": list(self.extra_args),
            "warning_markers": list(self.warning_markers),
            "fatal_markers": list(self.fatal_markers),
        }


@dataclass(frozen=True)
class ThemeProfile:
    """Color roles substituted into the document stylesheet."""

    text: str
    heading: str
    border: str
    link: str
    blockquote_bg: str
    blockquote_text: str
    blockquote_border: str
    code_bg: str
    code_text: str
    code_border: str
    table_border: str
    table_bg: str
    body_bg: str

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: ThemeProfile | None = None) -> ThemeProfile:
        """Create ThemeProfile from dictionary, filling missing roles from base."""
        base = base or LIGHT_THEME
        values = base.to_dict()
        for role, color in data.items():
            if role in values:
                values[role] = color
            else:
                print_warn(f"Unknown theme color role: {role}, ignored")
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "heading": self.heading,
            "border": self.border,
            "link": self.link,
            "blockquote_bg": self.blockquote_bg,
            "blockquote_text": self.blockquote_text,
            "blockquote_border": self.blockquote_border,
            "code_bg": self.code_bg,
            "code_text": self.code_text,
            "code_border": self.code_border,
            "table_border": self.table_border,
            "table_bg": self.table_bg,
            "body_bg": self.body_bg,
        }


LIGHT_THEME = ThemeProfile(
    text="#1E1E1E",
    heading="#2563EB",
    border="#eee",
    link="#2563EB",
    blockquote_bg="rgba(37,99,235,0.05)",
    blockquote_text="#555",
    blockquote_border="#2563EB",
    code_bg="#F8F9FA",
    code_text="#C7254E",
    code_border="#E9ECEF",
    table_border="#E0E0E0",
    table_bg="#FFFFFF",
    body_bg="#F0F2F5",
)

DARK_THEME = ThemeProfile(
    text="#D4D4D4",
    heading="#93C5FD",
    border="#444",
    link="#60A5FA",
    blockquote_bg="#2D3748",
    blockquote_text="#A0AEC0",
    blockquote_border="#60A5FA",
    code_bg="#2D2D30",
    code_text="#E2E8F0",
    code_border="#4A5568",
    table_border="#444",
    table_bg="#2D2D30",
    body_bg="#1E1E1E",
)


def _default_themes() -> dict[str, ThemeProfile]:
    return {"light": LIGHT_THEME, "dark": DARK_THEME}


@dataclass
class Config:
    """Global configuration for the mdconvert pipeline."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    backend: str = "pandoc"
    preview_host: str = "markdown.local"
    inline_preview_limit: int = 200_000
    theme: str = "light"
    themes: dict[str, ThemeProfile] = field(default_factory=_default_themes)

    @classmethod
    def from_file(cls, config_path: str | Path) -> Config:
        """Load configuration from JSON file."""
        config_path = Path(config_path)
        if not config_path.exists():
            print_info(f"Config file not found: {config_path}, using defaults")
            return cls()

        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        config = cls()

        config.engine = EngineConfig.from_dict(data.get("engine", {}))

        backend = data.get("backend", config.backend)
        if backend in BACKENDS:
            config.backend = backend
        else:
            print_warn(f"Unknown backend: {backend}, using {config.backend}")

        preview_config = data.get("preview", {})
        config.preview_host = preview_config.get("host", config.preview_host)
        config.inline_preview_limit = preview_config.get("inline_limit", config.inline_preview_limit)

        # Theme configuration; "dark" overrides start from the dark table
        config.theme = data.get("theme", config.theme)
        for name, theme_data in data.get("themes", {}).items():
            base = config.themes.get(name, LIGHT_THEME)
            config.themes[name] = ThemeProfile.from_dict(theme_data, base)

        return config

    def get_theme(self, name: str | None = None) -> ThemeProfile:
        """Get theme profile by name, returns the light theme if not found."""
        return self.themes.get(name or self.theme, LIGHT_THEME)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "engine": self.engine.to_dict(),
            "backend": self.backend,
            "preview": {
                "host": self.preview_host,
                "inline_limit": self.inline_preview_limit,
            },
            "theme": self.theme,
            "themes": {name: theme.to_dict() for name, theme in self.themes.items()},
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=4)


# Default configuration template
DEFAULT_CONFIG = {
    "engine": EngineConfig().to_dict(),
    "backend": "pandoc",
    "preview": {
        "host": "markdown.local",
        "inline_limit": 200_000,
    },
    "theme": "light",
    "themes": {
        "light": LIGHT_THEME.to_dict(),
        "dark": DARK_THEME.to_dict(),
    },
}
