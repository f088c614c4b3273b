"""Fetch the raw bytes behind an audio element's ``src``.

``http(s)`` locators are downloaded with httpx; ``file://`` URLs and plain
paths are read from disk in a worker thread so the event loop stays free.
Hosts whose audio uses another scheme (e.g. ``app://``) pass a ``resolver``
that maps their locators onto one of these.
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from urllib.parse import unquote, urlsplit

import httpx

from notescribe.core.exceptions import AudioFetchError
from notescribe.core.models import AudioUpload

logger = logging.getLogger(__name__)


class AudioFetcher:
    """Turns an audio locator into an ``AudioUpload``.

    Args:
        client: Optional pre-built ``httpx.AsyncClient``.
        timeout: Request timeout in seconds; ``None`` waits indefinitely.
        resolver: Optional host hook turning a locator into an http(s) URL,
            a ``file://`` URL or a filesystem path.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        resolver: Callable[[str], str] | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._resolver = resolver

    async def fetch(self, src: str, filename: str, media_type: str) -> AudioUpload:
        """Read the audio at ``src``.

        The media type is taken as given; the real encoding is not inspected.

        Raises:
            AudioFetchError: If the locator cannot be resolved or read.
        """
        location = self._resolve(src)
        scheme = urlsplit(location).scheme.lower()
        if scheme in ("http", "https"):
            content = await self._download(location)
        elif scheme in ("", "file") or len(scheme) == 1:  # one letter = Windows drive
            content = await self._read_file(location)
        else:
            raise AudioFetchError(src, f"unsupported scheme '{scheme}'")

        logger.debug("Fetched %d bytes from %s", len(content), location)
        return AudioUpload(filename=filename, content=content, media_type=media_type)

    def _resolve(self, src: str) -> str:
        if self._resolver is None:
            return src
        try:
            return self._resolver(src)
        except Exception as exc:
            raise AudioFetchError(src, f"locator not resolved: {exc}") from exc

    async def _download(self, src: str) -> bytes:
        try:
            resp = await self._client.get(src)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise AudioFetchError(src, str(exc)) from exc
        return resp.content

    async def _read_file(self, src: str) -> bytes:
        parts = urlsplit(src)
        path = Path(unquote(parts.path)) if parts.scheme == "file" else Path(src)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise AudioFetchError(src, str(exc)) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
