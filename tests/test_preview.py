"""Tests for mdconvert preview rendering."""

from pathlib import Path

import pytest
from conftest import FailingEngine

from mdconvert.assembler import EMPTY_DOCUMENT
from mdconvert.config import DARK_THEME, LIGHT_THEME, Config
from mdconvert.errors import FileIOError
from mdconvert.models import Theme
from mdconvert.preview import PreviewSession, preview_file_path


@pytest.fixture
def session(fake_engine):
    return PreviewSession(engine=fake_engine)


@pytest.fixture
def markdown_file(tmp_path):
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "a.png").write_bytes(b"png")
    path = tmp_path / "notes.md"
    path.write_text("Intro\n- [x] done\n\n![a](img/a.png) ![b](img/missing.png)", encoding="utf-8")
    return path


class TestRender:
    """Tests for PreviewSession.render."""

    def test_empty_document(self, session, fake_engine):
        session.set_text("   \n")
        payload = session.render()
        assert payload.html == EMPTY_DOCUMENT
        assert fake_engine.filter_inputs == []

    def test_preprocessed_and_wrapped(self, session, fake_engine):
        session.set_text("Text\n-[] a\n$ x $")
        payload = session.render()
        assert fake_engine.filter_inputs == ["Text\n\n- [ ] a\n\n$x$"]
        assert payload.html.startswith("<!DOCTYPE html>")
        assert payload.inline
        assert payload.error == ""

    def test_error_fragment_in_shell(self):
        session = PreviewSession(engine=FailingEngine())
        session.set_text("text")
        payload = session.render()
        assert "<h1>Conversion error</h1>" in payload.html
        assert payload.html.startswith("<!DOCTYPE html>")
        assert "unknown extension" in payload.error

    def test_images_use_virtual_host(self, session, fake_engine, markdown_file):
        session.load_file(markdown_file)
        payload = session.render()
        assert "![a](http://markdown.local/img/a.png)" in fake_engine.filter_inputs[0]
        assert "![b](img/missing.png)" in fake_engine.filter_inputs[0]
        assert payload.mapping.folder == markdown_file.parent.resolve()
        assert payload.mapping.version == 1

    def test_rendered_img_tags_rewritten(self, markdown_file):
        class ImgEngine(FailingEngine):
            def run_filter(self, text):
                return '<p><img src="img/a.png" /></p>'

        session = PreviewSession(engine=ImgEngine())
        session.load_file(markdown_file)
        assert '<img src="http://markdown.local/img/a.png" />' in session.render().html

    def test_large_preview_written_to_file(self, fake_engine):
        config = Config()
        config.inline_preview_limit = 100
        session = PreviewSession(engine=fake_engine, config=config)
        session.set_text("x" * 500)
        payload = session.render()
        try:
            assert not payload.inline
            assert payload.file_path == preview_file_path()
            assert payload.file_url.startswith("file://")
            assert payload.file_path.read_text(encoding="utf-8") == payload.html
        finally:
            preview_file_path().unlink(missing_ok=True)


class TestGenerations:
    """Tests for stale result detection."""

    def test_latest_only_is_current(self, session):
        session.set_text("one")
        first = session.render()
        session.set_text("two")
        second = session.render()
        assert second.generation == first.generation + 1
        assert not session.is_current(first.generation)
        assert session.is_current(second.generation)


class TestSessionState:
    """Tests for document, theme and stats handling."""

    def test_working_dir_persists_across_edits(self, session, markdown_file):
        session.load_file(markdown_file)
        session.set_text("pasted text")
        assert session.document.working_dir == markdown_file.parent.resolve()

    def test_load_missing_file(self, session, tmp_path):
        with pytest.raises(FileIOError):
            session.load_file(tmp_path / "missing.md")

    def test_toggle_theme(self, session):
        session.set_text("x")
        assert LIGHT_THEME.body_bg in session.render().html
        assert session.toggle_theme() is Theme.DARK
        assert DARK_THEME.body_bg in session.render().html
        assert session.toggle_theme() is Theme.LIGHT

    def test_theme_from_config(self, fake_engine):
        config = Config()
        config.theme = "dark"
        assert PreviewSession(engine=fake_engine, config=config).theme is Theme.DARK

    def test_task_stats(self, session, markdown_file):
        session.load_file(markdown_file)
        stats = session.task_stats()
        assert stats.total_tasks == 1
        assert stats.completed_tasks == 1
        assert stats.completion_percentage == 100.0


def test_render_with_unrepresentable_image_path(session, fake_engine, markdown_file):
    session.load_file(markdown_file)
    session.set_text("![a](x\x00y.png)")
    payload = session.render()
    assert payload.error == ""
    assert fake_engine.filter_inputs == ["![a](x\x00y.png)"]
