"""
Tests for scripts/analyze_scam.py with the analyzer replaced by a stub.
"""

from __future__ import annotations

import importlib.util
import io
import json
from pathlib import Path

import pytest

from scamguard.errors import EmptyResponseError
from scamguard.response_parser import result_from_dict

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "analyze_scam.py"


@pytest.fixture
def cli():
    spec = importlib.util.spec_from_file_location("analyze_scam", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class StubAnalyzer:
    calls = []
    result = None
    error = None

    def __init__(self, settings) -> None:
        self.settings = settings

    async def analyze(self, text, images):
        StubAnalyzer.calls.append((self.settings, text, images))
        if StubAnalyzer.error:
            raise StubAnalyzer.error
        return StubAnalyzer.result


@pytest.fixture
def stub(cli, monkeypatch, result_payload):
    StubAnalyzer.calls = []
    StubAnalyzer.result = result_from_dict(result_payload)
    StubAnalyzer.error = None
    monkeypatch.setattr(cli, "ScamAnalyzer", StubAnalyzer)
    return StubAnalyzer


def test_parser_collects_repeated_images(cli):
    args = cli.build_parser().parse_args(["--text", "hi", "--image", "a.png", "--image", "b.png"])
    assert args.image == [Path("a.png"), Path("b.png")]


def test_main_prints_result_json(cli, stub, capsys, tmp_path, result_payload):
    image = tmp_path / "a.png"
    image.write_bytes(b"x")

    code = cli.main(["--text", "测试刷单", "--image", str(image), "--model", "gemini-2.5-pro"])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == result_payload
    settings, text, images = stub.calls[0]
    assert settings.gemini_model == "gemini-2.5-pro"
    assert text == "测试刷单"
    assert [img.name for img in images] == ["a.png"]


def test_main_reads_stdin_when_text_missing(cli, stub, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("来自标准输入"))
    assert cli.main([]) == 0
    assert stub.calls[0][1] == "来自标准输入"


def test_main_reports_analysis_errors(cli, stub, capsys):
    stub.error = EmptyResponseError("AI 返回了空响应")
    assert cli.main(["--text", "x"]) == 1
    assert "空响应" in capsys.readouterr().err
