"""Shared fixtures: fake engines standing in for pandoc."""

import stat
import sys
import textwrap
from pathlib import Path

import pytest

from mdconvert.engine import Engine, FileConversionResult, FileConversionStatus
from mdconvert.errors import ConversionFailed


class FakeEngine(Engine):
    """In-memory engine recording every call."""

    name = "fake"

    def __init__(self, status=FileConversionStatus.SUCCESS, diagnostics=""):
        self.filter_inputs = []
        self.file_conversions = []
        self.status = status
        self.diagnostics = diagnostics

    def run_filter(self, text):
        self.filter_inputs.append(text)
        return f"<p>{text}</p>"

    def run_file_conversion(self, input_path, output_path, from_format, to_format):
        input_path = Path(input_path)
        assert input_path.exists()
        self.file_conversions.append((input_path, Path(output_path), from_format, to_format))
        Path(output_path).write_bytes(b"PK fake docx")
        return FileConversionResult(self.status, Path(output_path), self.diagnostics)


class FailingEngine(FakeEngine):
    """Engine whose filter or file stage always fails."""

    def __init__(self, fail_filter=True):
        super().__init__()
        self.fail_filter = fail_filter

    def run_filter(self, text):
        if self.fail_filter:
            raise ConversionFailed("pandoc: unknown extension", stderr="unknown extension", returncode=2)
        return super().run_filter(text)

    def run_file_conversion(self, input_path, output_path, from_format, to_format):
        self.file_conversions.append((Path(input_path), Path(output_path), from_format, to_format))
        raise ConversionFailed("docx writer failed", stderr="Error: docx writer failed", returncode=1)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def fake_pandoc(tmp_path):
    """Factory writing an executable Python script that plays the part of pandoc."""
    counter = {"n": 0}

    def make(body: str) -> str:
        counter["n"] += 1
        script = tmp_path / f"fake_pandoc_{counter['n']}"
        script.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body), encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return make
