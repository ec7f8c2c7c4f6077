"""Gemini generateContent transport."""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from .config import Settings
from .errors import ConfigurationError, MISSING_KEY_MESSAGE

logger = logging.getLogger(__name__)


class GeminiClient:
    """Send one generateContent request and return the reply text."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.session = requests.Session()

    def generate_content(self, payload: Dict[str, Any]) -> str:
        """POST ``payload`` once and return the concatenated candidate text.

        Raises ``requests.RequestException`` on transport or HTTP failures.
        """
        if not self.settings.has_api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        url = self.settings.generate_content_url
        headers = {
            "x-goog-api-key": self.settings.gemini_api_key,
            "Content-Type": "application/json",
        }

        logger.info("Calling %s", self.settings.gemini_model)
        response = self.session.post(
            url, headers=headers, json=payload, timeout=self.settings.request_timeout
        )

        if response.status_code >= 400:
            logger.error("Gemini request failed (%s): %s", response.status_code, response.text)
            response.raise_for_status()

        return self._extract_text(response.json())

    @staticmethod
    def _extract_text(payload: Any) -> str:
        if not isinstance(payload, dict):
            return ""
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = payload.get("promptFeedback")
            block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if block_reason:
                logger.warning("Gemini returned no candidates; blockReason=%s", block_reason)
            elif candidates:
                logger.warning("Unexpected candidates shape: %r", candidates)
            return ""
        first = candidates[0]
        if not isinstance(first, dict):
            logger.warning("Unexpected candidate shape: %r", first)
            return ""
        content = first.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            parts = []
        texts = [part.get("text", "") for part in parts if isinstance(part, dict)]
        text = "".join(t for t in texts if isinstance(t, str))
        if not text:
            logger.warning(
                "Gemini candidate had no text; finishReason=%s", first.get("finishReason")
            )
        return text
