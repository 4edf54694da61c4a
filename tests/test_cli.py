"""Tests for the command line interface."""
import importlib

import pytest
import typer
from typer.testing import CliRunner

from gemchat.cli.app import app
from gemchat.cli.providers import get_formatter, resolve_history
from gemchat.llm import HistoryMode

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's configuration."""
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "GEMCHAT_HISTORY", "GEMCHAT_HIGHLIGHT_STYLE"):
        monkeypatch.delenv(name, raising=False)


class TestRender:
    """Tests for the render command."""

    def test_render_stdin(self):
        result = runner.invoke(app, ["render"], input="# Title\n\n**bold**\n")

        assert result.exit_code == 0
        assert "<h1>Title</h1>" in result.stdout
        assert "<strong>bold</strong>" in result.stdout

    def test_render_file_full_page(self, tmp_path):
        source = tmp_path / "note.md"
        source.write_text("```python\nx = 1\n```\n", encoding="utf-8")

        result = runner.invoke(app, ["render", str(source), "--full-page"])

        assert result.exit_code == 0
        assert result.stdout.startswith("<!DOCTYPE html>")
        assert 'class="hljs language-python"' in result.stdout

    def test_render_strips_scripts(self):
        result = runner.invoke(app, ["render"], input="<script>alert(1)</script>\n")

        assert result.exit_code == 0
        assert "<script" not in result.stdout

    def test_render_unknown_style_fails(self):
        result = runner.invoke(app, ["render", "--style", "no-such-style"], input="x")

        assert result.exit_code == 1
        assert "Unknown highlight style" in result.stdout


class TestHealth:
    """Tests for the health command."""

    def test_missing_api_key_fails(self):
        result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "NOT SET" in result.stdout

    def test_api_key_set(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "Gemini API key: SET" in result.stdout


class TestProviders:
    """Tests for environment-driven configuration."""

    def test_ask_without_api_key_fails(self):
        result = runner.invoke(app, ["ask", "hello"])
        assert result.exit_code == 1

    def test_history_defaults_to_latest(self):
        assert resolve_history(None) is HistoryMode.LATEST

    def test_history_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMCHAT_HISTORY", "FULL")
        assert resolve_history(None) is HistoryMode.FULL

    def test_option_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("GEMCHAT_HISTORY", "full")
        assert resolve_history("latest") is HistoryMode.LATEST

    def test_unknown_history_exits(self):
        with pytest.raises(typer.Exit):
            resolve_history("everything")

    def test_formatter_style_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMCHAT_HIGHLIGHT_STYLE", "friendly")
        assert get_formatter().style == "friendly"


class TestModuleEntryPoint:
    def test_import_does_not_start_cli(self):
        """Test that importing the module entry point has no side effects."""
        module = importlib.import_module("gemchat.__main__")
        assert callable(module.main)
