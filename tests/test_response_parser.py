"""
Tests for code-fence stripping and AnalysisResult parsing.
"""

from __future__ import annotations

import json

import pytest

from scamguard.errors import InvalidResultError, ParseError
from scamguard.models import RiskLevel
from scamguard.response_parser import parse_analysis_result, result_from_dict, strip_code_fence

BODY = '{"a": 1}'


@pytest.mark.parametrize(
    "text",
    [
        BODY,
        f"```json\n{BODY}\n```",
        f"```JSON\r\n{BODY}\r\n```",
        f"```\n{BODY}\n```",
        f"```{BODY}```",
        f"\n\n  ```json\n  {BODY}  \n```\n",
    ],
)
def test_strip_code_fence_shapes(text):
    assert strip_code_fence(text) == BODY


def test_strip_code_fence_is_idempotent():
    once = strip_code_fence(f"```json\n{BODY}\n```")
    assert strip_code_fence(once) == once


def test_strip_code_fence_keeps_inner_backticks():
    text = '```json\n{"reply": "use `code`"}\n```'
    assert json.loads(strip_code_fence(text)) == {"reply": "use `code`"}


def test_parse_accepts_float_score(result_payload):
    result_payload["riskScore"] = 55.5
    result = parse_analysis_result(json.dumps(result_payload))
    assert result.risk_score == 55.5
    assert result.risk_level == "CRITICAL"
    assert result.risk_level is RiskLevel.CRITICAL


def test_parse_allows_absent_generated_conversation(result_payload):
    del result_payload["generatedConversation"]
    result = parse_analysis_result(json.dumps(result_payload))
    assert result.generated_conversation is None
    assert not result.is_simulation


@pytest.mark.parametrize("text", ["[1, 2, 3]", '"just a string"', "null"])
def test_non_object_json_is_rejected(text):
    with pytest.raises(ParseError):
        parse_analysis_result(text)


@pytest.mark.parametrize(
    "field,value",
    [
        ("redFlags", "not a list"),
        ("redFlags", [1, 2]),
        ("summary", 42),
        ("riskScore", "90"),
        ("riskScore", True),
        ("verificationStrategies", [{"type": "x"}]),
        ("generatedConversation", 7),
    ],
)
def test_mistyped_fields_are_rejected(result_payload, field, value):
    result_payload[field] = value
    with pytest.raises(ParseError) as excinfo:
        result_from_dict(result_payload)
    assert not isinstance(excinfo.value, InvalidResultError)


@pytest.mark.parametrize("score", [0, 100, 0.0, 100.0])
def test_score_bounds_are_inclusive(result_payload, score):
    result_payload["riskScore"] = score
    assert result_from_dict(result_payload).risk_score == score


def test_raw_payload_is_kept_but_not_compared(result_payload):
    first = result_from_dict(dict(result_payload))
    second = result_from_dict(dict(result_payload, extraField="ignored"))
    assert first == second
    assert second.raw["extraField"] == "ignored"


def test_raw_payload_is_read_only_copy(result_payload):
    result = result_from_dict(result_payload)
    result_payload["summary"] = "changed"
    result_payload["redFlags"].append("later")

    assert result.raw["summary"] != "changed"
    assert "later" not in result.raw["redFlags"]
    with pytest.raises(TypeError):
        result.raw["summary"] = "x"
