"""Whisper ASR webservice client.

Talks to an ``openai-whisper-asr-webservice`` compatible server: ``GET /``
(the server redirects it to ``/docs``) as the availability check and
``POST /asr?output=json`` with a multipart ``audio_file`` upload for
recognition.
"""

import logging

import httpx

from notescribe.core.exceptions import TranscriptionError
from notescribe.core.models import AudioUpload
from notescribe.core.utils import build_base_url
from notescribe.services.transcription.base import BaseTranscriber

logger = logging.getLogger(__name__)


class WhisperASRClient(BaseTranscriber):
    """Async HTTP client for the Whisper ASR webservice.

    Args:
        client: Optional pre-built ``httpx.AsyncClient`` (tests inject one
            with a mock transport).
        timeout: Request timeout in seconds; ``None`` waits indefinitely.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def check_availability(self, address: str) -> bool:
        url = build_base_url(address)
        try:
            resp = await self._client.get(url, follow_redirects=True)
        except Exception as exc:
            logger.error("Whisper server is not available (%s): %s", url, exc)
            return False

        if not resp.is_success:
            logger.warning("Whisper server at %s answered %s", url, resp.status_code)
        return resp.is_success

    async def transcribe(self, address: str, upload: AudioUpload) -> str:
        url = f"{build_base_url(address)}/asr"
        files = {"audio_file": (upload.filename, upload.content, upload.media_type)}

        try:
            resp = await self._client.post(url, params={"output": "json"}, files=files)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TranscriptionError(
                detail=f"Failed to fetch transcription: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TranscriptionError(detail=f"Failed to fetch transcription: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TranscriptionError(detail="Whisper returned invalid JSON") from exc

        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise TranscriptionError(detail="Whisper response has no 'text' field")

        logger.info("Transcribed %s (%d chars)", upload.filename, len(text))
        return text

    async def aclose(self) -> None:
        await self._client.aclose()
