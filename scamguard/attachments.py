"""Turn user-supplied image files into inline base64 parts."""

from __future__ import annotations

import asyncio
import base64
import inspect
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from .errors import EncodingError, compose_user_message
from .models import AttachmentPart
from .utils import guess_media_type, split_data_url

logger = logging.getLogger(__name__)


@dataclass
class ImageFile:
    """Minimal file-like image: a name, a media type and lazily read bytes."""

    name: str
    content_type: Optional[str] = None
    content: Optional[bytes] = None
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "ImageFile":
        path = Path(path)
        return cls(
            name=path.name,
            content_type=content_type or guess_media_type(path.name),
            path=path,
        )

    @classmethod
    def from_bytes(cls, content: bytes, content_type: str, name: str = "image") -> "ImageFile":
        return cls(name=name, content_type=content_type, content=content)

    def read(self) -> bytes:
        if self.path is not None:
            return self.path.read_bytes()
        if self.content is None:
            raise ValueError(f"Image '{self.name}' has no content")
        return self.content


def _source_name(source: Any) -> str:
    for attr in ("filename", "name"):
        value = getattr(source, attr, None)
        if isinstance(value, str) and value:
            return value
    return type(source).__name__


def _declared_media_type(source: Any) -> str | None:
    for attr in ("content_type", "mime_type"):
        value = getattr(source, attr, None)
        if isinstance(value, str) and value.strip():
            return value.split(";")[0].strip()
    return guess_media_type(_source_name(source))


async def _read_all(source: Any) -> bytes | str:
    reader = getattr(source, "read", None)
    if reader is None:
        raise ValueError(f"{type(source).__name__} has no read() method")
    if inspect.iscoroutinefunction(reader):
        content = await reader()
    else:
        content = await asyncio.to_thread(reader)
        if inspect.isawaitable(content):
            content = await content
    return content


async def encode_attachment(source: Any) -> AttachmentPart:
    """Read ``source`` to completion and return its base64 payload part.

    ``source`` may be an UploadFile, an open binary file, an ImageFile or
    anything else with ``read()`` plus a media type.
    """
    name = _source_name(source)
    mime_type = _declared_media_type(source)
    try:
        content = await _read_all(source)
        if isinstance(content, str):
            url_mime, data = split_data_url(content)
            base64.b64decode(data, validate=True)
            mime_type = mime_type or url_mime
        elif isinstance(content, (bytes, bytearray, memoryview)):
            data = base64.b64encode(bytes(content)).decode("ascii")
        else:
            raise ValueError(f"read() returned {type(content).__name__}, expected bytes")
    except Exception as exc:
        logger.error("Failed to read image '%s': %s", name, exc)
        raise EncodingError(compose_user_message(f"图片读取失败 ({name}): {exc}")) from exc

    if not mime_type:
        logger.error("Image '%s' has no media type", name)
        raise EncodingError(compose_user_message(f"无法识别图片类型 ({name})"))

    logger.debug("Encoded image '%s' (%s, %d base64 chars)", name, mime_type, len(data))
    return AttachmentPart(mime_type=mime_type, data=data)


async def encode_attachments(sources: Iterable[Any]) -> list[AttachmentPart]:
    """Encode every source concurrently; order matches the input order."""
    return list(await asyncio.gather(*(encode_attachment(source) for source in sources)))
