"""Tests for the typer CLI (adapter replaced by a stub)."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.commands.main import app
from mangatran.core.exceptions import TransportError
from mangatran.core.models import TranslationOutcome, fallback_image_result

runner = CliRunner()


class StubAdapter:
    """Records calls and answers with canned outcomes."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.calls = []
        StubAdapter.instances.append(self)

    async def translate_text_outcome(self, text, target_lang, mode=None):
        self.calls.append(("text", text, target_lang, mode))
        return TranslationOutcome.success(text.upper(), model="gpt-5.2")

    async def translate_batch_outcome(self, texts, target_lang, mode=None):
        self.calls.append(("batch", list(texts), target_lang, mode))
        return TranslationOutcome.fallback(list(texts), error=TransportError("endpoint down"))

    async def translate_image_outcome(self, image_data, target_lang, mode=None, width=None, height=None):
        self.calls.append(("image", image_data, target_lang, mode, width, height))
        return TranslationOutcome.fallback(fallback_image_result(width, height), error=TransportError("down"))


@pytest.fixture(autouse=True)
def stub_adapter():
    StubAdapter.instances = []
    with patch("cli.commands.main.TranslationAdapter", StubAdapter):
        yield StubAdapter


def test_text_command():
    result = runner.invoke(app, ["text", "hello", "-t", "French", "-m", "fast"])

    assert result.exit_code == 0
    assert "HELLO" in result.output
    assert StubAdapter.instances[0].calls == [("text", "hello", "French", "fast")]


def test_batch_command_reports_fallback():
    result = runner.invoke(app, ["batch", "hi", "bye", "-t", "French"])

    assert result.exit_code == 0
    assert "Fell back" in result.output
    assert StubAdapter.instances[0].calls[0][1] == ["hi", "bye"]


def test_image_command_sends_data_uri(tmp_path):
    page = tmp_path / "page.jpg"
    page.write_bytes(b"\xff\xd8\xff")

    result = runner.invoke(app, ["image", str(page), "-t", "Spanish", "--width", "800", "--height", "600"])

    assert result.exit_code == 0
    assert "Translation unavailable" in result.output
    call = StubAdapter.instances[0].calls[0]
    assert call[1] == "data:image/jpeg;base64,/9j/"
    assert call[4:] == (800, 600)


def test_image_command_missing_file(tmp_path):
    result = runner.invoke(app, ["image", str(tmp_path / "missing.png")])
    assert result.exit_code == 1


def test_base_url_override():
    runner.invoke(app, ["text", "hello", "--base-url", "http://gpu-box:9000"])
    assert StubAdapter.instances[0].config.base_url == "http://gpu-box:9000"


def test_bad_config_file_exits(tmp_path):
    result = runner.invoke(app, ["text", "hello", "--config", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1


def test_malformed_config_file_prints_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("translator: [unclosed\n")

    result = runner.invoke(app, ["text", "hello", "--config", str(path)])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert StubAdapter.instances == []
