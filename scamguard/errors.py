"""Error taxonomy surfaced to callers of the analyzer."""

from __future__ import annotations

import re

RETRY_SUFFIX = "请检查网络连接或稍后重试。"
DEFAULT_SERVICE_MESSAGE = "智能分析服务暂时不可用"
MISSING_KEY_MESSAGE = "系统未检测到 API Key。请检查环境变量配置。"
EMPTY_RESPONSE_MESSAGE = "AI 返回了空响应，请重试"

STATUS_HINTS = {
    400: "(请求无效)",
    403: "(API Key 权限不足)",
    500: "(AI 服务繁忙)",
}

_STATUS_PATTERN = re.compile(r"(?<!\d)(400|403|500)(?!\d)")


class AnalysisError(Exception):
    """Base class for every failure of an analysis call.

    ``str(exc)`` is the composed, user-facing message.
    """


class ConfigurationError(AnalysisError):
    """Required configuration (the API key) is missing."""


class EncodingError(AnalysisError):
    """An image could not be read or base64-encoded."""


class RemoteServiceError(AnalysisError):
    """The Gemini endpoint could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


NetworkError = RemoteServiceError


class EmptyResponseError(AnalysisError):
    """The call succeeded but the model returned no text."""


class ParseError(AnalysisError):
    """The model's text could not be turned into an AnalysisResult."""

    def __init__(self, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class InvalidResultError(ParseError):
    """Parsed JSON violates the riskScore bounds or the riskLevel set."""


def status_hint(detail: str, status_code: int | None = None) -> str | None:
    """Map an HTTP status (or a status-like number inside ``detail``) to a hint."""
    hints = []
    if status_code in STATUS_HINTS:
        hints.append(STATUS_HINTS[status_code])
    for match in _STATUS_PATTERN.findall(detail or ""):
        hint = STATUS_HINTS[int(match)]
        if hint not in hints:
            hints.append(hint)
    return " ".join(hints) if hints else None


def compose_user_message(detail: str | None, hint: str | None = None) -> str:
    """Build the final message: detail, optional hint, then the retry suggestion."""
    message = (detail or "").strip().rstrip("。.") or DEFAULT_SERVICE_MESSAGE
    if hint:
        message = f"{message} {hint}"
    return f"{message}。{RETRY_SUFFIX}"
