"""Scam-risk analysis: encode images, call Gemini once, parse the verdict."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Sequence

import requests

from .attachments import encode_attachments
from .config import Settings
from .errors import (
    EMPTY_RESPONSE_MESSAGE,
    MISSING_KEY_MESSAGE,
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    RemoteServiceError,
    compose_user_message,
    status_hint,
)
from .gemini_client import GeminiClient
from .models import AnalysisResult, AttachmentPart
from .prompt import SYSTEM_INSTRUCTION, user_text_part
from .response_parser import parse_analysis_result

logger = logging.getLogger(__name__)


def build_request(text: str, attachments: Sequence[AttachmentPart]) -> Dict[str, Any]:
    """Assemble the generateContent body: images first, then the labelled text."""
    parts = [attachment.to_part() for attachment in attachments]
    parts.append(user_text_part(text))
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {"responseMimeType": "application/json"},
    }


def _remote_error(exc: requests.RequestException) -> RemoteServiceError:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    detail = str(exc) or type(exc).__name__
    message = compose_user_message(detail, status_hint(detail, status_code))
    return RemoteServiceError(message, status_code=status_code)


class ScamAnalyzer:
    """Analyze chat text and screenshots for scam risk with a single model call."""

    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None) -> None:
        self.settings = settings
        self.client = client or GeminiClient(settings)

    async def analyze(self, text: str, images: Iterable[Any] = ()) -> AnalysisResult:
        """Return the model's verdict for ``text`` plus ``images``.

        Raises an AnalysisError subclass; the message is ready to show to users.
        """
        if not self.settings.has_api_key:
            logger.error("Gemini API key is not configured")
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        images = list(images or ())
        logger.info("Starting analysis: %d image(s), %d chars of text", len(images), len(text or ""))

        try:
            attachments = await encode_attachments(images)
            payload = build_request(text, attachments)

            try:
                response_text = await asyncio.to_thread(self.client.generate_content, payload)
            except requests.RequestException as exc:
                raise _remote_error(exc) from exc

            if not response_text or not response_text.strip():
                raise EmptyResponseError(compose_user_message(EMPTY_RESPONSE_MESSAGE))

            result = parse_analysis_result(response_text)
        except AnalysisError:
            logger.exception("AI analysis failed")
            raise
        except Exception as exc:
            logger.exception("AI analysis failed unexpectedly")
            detail = str(exc) or type(exc).__name__
            raise RemoteServiceError(compose_user_message(detail)) from exc

        logger.info(
            "Analysis complete: riskLevel=%s riskScore=%s simulation=%s",
            result.risk_level.value,
            result.risk_score,
            result.is_simulation,
        )
        return result


async def analyze_scam_content(
    text: str, images: Iterable[Any] = (), settings: Optional[Settings] = None
) -> AnalysisResult:
    """One-off helper that builds an analyzer from environment settings."""
    return await ScamAnalyzer(settings or Settings()).analyze(text, images)
