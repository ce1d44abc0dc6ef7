"""
Photo uploads.

Photos arrive either as uploaded files or as a link to download. Either
way they end up in ContentStorage and the caller gets back an opaque
``/uploads/<name>`` path to store on a place.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePath
from urllib.parse import urlparse

import httpx

from staybook.core.utils import epoch_millis
from staybook.errors import ValidationFailure
from staybook.storage import ContentStorage

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(original: str) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-]."""
    name = PurePath(original or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "photo"


class PhotoService:

    def __init__(
        self,
        content: ContentStorage,
        max_bytes: int = 10 * 1024 * 1024,
        download_timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.content = content
        self.max_bytes = max_bytes
        self.download_timeout = download_timeout
        self._transport = transport

    async def upload_file(self, filename: str, data: bytes, content_type: str | None = None) -> str:
        if len(data) > self.max_bytes:
            raise ValidationFailure(f"File too large: {filename}")
        key = f"{epoch_millis()}_{safe_filename(filename)}"
        return await self.content.put(key, data, content_type or "application/octet-stream")

    async def upload_files(self, files: list[tuple[str, bytes, str | None]]) -> list[str]:
        """Store several (filename, data, content_type) uploads, in order."""
        return [await self.upload_file(name, data, ctype) for name, data, ctype in files]

    async def upload_by_link(self, link: str) -> str:
        """Download an image from a URL and store it."""
        if urlparse(link).scheme not in ("http", "https"):
            raise ValidationFailure("Link must be an http(s) URL")

        try:
            async with httpx.AsyncClient(
                timeout=self.download_timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(link)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Photo download failed for {link}: {e}")
            raise ValidationFailure("Could not download image from link")

        data = response.content
        if len(data) > self.max_bytes:
            raise ValidationFailure("Linked image is too large")

        key = f"photo{epoch_millis()}.jpg"
        return await self.content.put(key, data, response.headers.get("content-type", "image/jpeg"))
