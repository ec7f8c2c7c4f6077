"""
Pytest fixtures for ScamGuard tests. The Gemini transport is always mocked.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from scamguard.config import Settings
from scamguard.gemini_client import GeminiClient


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a developer's real key or .env values out of the tests."""
    for name in ("GEMINI_API_KEY", "API_KEY", "GEMINI_MODEL", "GEMINI_API_BASE_URL", "GEMINI_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(_env_file=None, GEMINI_API_KEY="test-key")


@pytest.fixture
def result_payload():
    return {
        "riskScore": 92,
        "riskLevel": "CRITICAL",
        "summary": "典型的杀猪盘：先建立感情，再诱导投资。",
        "generatedConversation": None,
        "scammerMotive": "骗取投资款",
        "expectedOutcome": "继续转账将血本无归",
        "redFlags": ["陌生人主动示好", "承诺高收益", "要求下载陌生App"],
        "psychologicalTactics": ["情感操控", "紧迫感"],
        "verificationStrategies": [
            {
                "type": "视频验证",
                "explanation": "骗子通常拒绝视频",
                "reply": "我们先视频聊一下吧？",
                "expectedReaction": "找借口推脱",
            }
        ],
        "actionableAdvice": "立即停止转账并报警",
        "scamAlertMessage": "🚨 高收益投资 = 杀猪盘！",
    }


@pytest.fixture
def fake_client(result_payload):
    """Transport double returning the sample payload as JSON text."""
    client = MagicMock(spec=GeminiClient)
    client.generate_content.return_value = json.dumps(result_payload, ensure_ascii=False)
    return client


def http_error(status_code: int, reason: str = "Error") -> requests.HTTPError:
    """Build the HTTPError requests raises from raise_for_status()."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"
    response._content = b'{"error": {"message": "boom"}}'
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        return exc
    raise AssertionError(f"status {status_code} did not raise")
