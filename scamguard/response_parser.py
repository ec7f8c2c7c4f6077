"""Normalize model text and parse it into an AnalysisResult."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from .errors import InvalidResultError, ParseError, compose_user_message
from .models import AnalysisResult, RiskLevel, VerificationStrategy
from .utils import preview

logger = logging.getLogger(__name__)

# ```json ... ``` or ``` ... ```; the language tag is optional and free-form.
_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?(?P<body>.*?)\s*```$", re.DOTALL)

_STRING_FIELDS = {
    "summary": "summary",
    "scammerMotive": "scammer_motive",
    "expectedOutcome": "expected_outcome",
    "actionableAdvice": "actionable_advice",
    "scamAlertMessage": "scam_alert_message",
}
_LIST_FIELDS = {
    "redFlags": "red_flags",
    "psychologicalTactics": "psychological_tactics",
}
_STRATEGY_FIELDS = ("type", "explanation", "reply", "expectedReaction")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, with or without a language tag."""
    cleaned = (text or "").strip()
    while True:
        match = _FENCE.match(cleaned)
        if not match:
            return cleaned
        cleaned = match.group("body").strip()


def _fail(detail: str, raw_text: str, exc_type: type[ParseError] = ParseError) -> ParseError:
    return exc_type(compose_user_message(f"AI 返回的结果格式无效: {detail}"), raw_text=raw_text)


def _require(data: dict, key: str, raw_text: str) -> Any:
    if key not in data or data[key] is None:
        raise _fail(f"缺少字段 {key}", raw_text)
    return data[key]


def _string(data: dict, key: str, raw_text: str) -> str:
    value = _require(data, key, raw_text)
    if not isinstance(value, str):
        raise _fail(f"字段 {key} 应为字符串", raw_text)
    return value


def _string_list(data: dict, key: str, raw_text: str) -> tuple[str, ...]:
    value = _require(data, key, raw_text)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _fail(f"字段 {key} 应为字符串数组", raw_text)
    return tuple(value)


def _strategies(data: dict, raw_text: str) -> tuple[VerificationStrategy, ...]:
    value = _require(data, "verificationStrategies", raw_text)
    if not isinstance(value, list):
        raise _fail("字段 verificationStrategies 应为数组", raw_text)
    strategies = []
    for item in value:
        if not isinstance(item, dict):
            raise _fail("verificationStrategies 元素应为对象", raw_text)
        fields = [_string(item, key, raw_text) for key in _STRATEGY_FIELDS]
        strategies.append(VerificationStrategy(*fields))
    return tuple(strategies)


def _risk_score(data: dict, raw_text: str) -> float:
    value = _require(data, "riskScore", raw_text)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _fail("字段 riskScore 应为数字", raw_text)
    if math.isnan(value) or not 0 <= value <= 100:
        raise _fail(f"riskScore 超出范围 0-100: {value}", raw_text, InvalidResultError)
    return value


def _risk_level(data: dict, raw_text: str) -> RiskLevel:
    value = _require(data, "riskLevel", raw_text)
    try:
        return RiskLevel(value)
    except ValueError:
        raise _fail(f"未知的 riskLevel: {value!r}", raw_text, InvalidResultError) from None


def result_from_dict(data: Any, raw_text: str = "") -> AnalysisResult:
    """Build an AnalysisResult from decoded JSON, rejecting missing or mistyped fields."""
    if not isinstance(data, dict):
        raise _fail("顶层应为 JSON 对象", raw_text)

    conversation = data.get("generatedConversation")
    if conversation is not None and not isinstance(conversation, str):
        raise _fail("字段 generatedConversation 应为字符串或 null", raw_text)

    kwargs: dict[str, Any] = {
        attr: _string(data, key, raw_text) for key, attr in _STRING_FIELDS.items()
    }
    kwargs.update({attr: _string_list(data, key, raw_text) for key, attr in _LIST_FIELDS.items()})

    return AnalysisResult(
        risk_score=_risk_score(data, raw_text),
        risk_level=_risk_level(data, raw_text),
        verification_strategies=_strategies(data, raw_text),
        generated_conversation=conversation,
        raw=data,
        **kwargs,
    )


def parse_analysis_result(text: str) -> AnalysisResult:
    """Strip fences from the model text, decode JSON and build the result."""
    cleaned = strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Model returned invalid JSON (%s): %s", exc, preview(text, 2000))
        raise ParseError(
            compose_user_message(f"AI 返回的结果无法解析: {exc.msg}"), raw_text=text
        ) from exc

    try:
        return result_from_dict(data, raw_text=text)
    except ParseError as exc:
        logger.error("%s; raw response: %s", exc, preview(text, 2000))
        raise
