"""Utility helpers shared across modules."""

from __future__ import annotations

import mimetypes
import re

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,", re.IGNORECASE)


def guess_media_type(filename: str | None) -> str | None:
    """Guess an image media type from a file name."""
    if not filename:
        return None
    guessed, _ = mimetypes.guess_type(filename)
    return guessed


def split_data_url(value: str) -> tuple[str | None, str]:
    """Split ``data:<mime>;base64,<payload>`` into (mime, payload).

    Strings without a data-URL header come back unchanged with no mime.
    """
    match = _DATA_URL.match(value)
    if not match:
        return None, value.strip()
    return match.group("mime"), value[match.end():].strip()


def preview(text: str | None, limit: int = 200) -> str:
    """Shorten text for log lines."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[:limit] + "..."
