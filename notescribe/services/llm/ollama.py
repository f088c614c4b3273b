"""
Ollama post-processing provider.

Uses the Ollama Python SDK (``ollama.AsyncClient``) for a single
non-streaming ``/api/chat`` call.  No retries: a failure degrades to the
fallback text and the user can re-run the job.
"""

import logging

from ollama import AsyncClient, ResponseError

from notescribe.core.exceptions import PostProcessingError
from notescribe.core.utils import build_base_url
from notescribe.services.llm.base import FAILED_TEXT, NO_TEXT, BasePostProcessor

logger = logging.getLogger(__name__)


class OllamaPostProcessor(BasePostProcessor):
    """Sends prompt + transcript to Ollama as one user message.

    The address comes with every call, so one SDK client is kept per host
    and all of them are closed by ``aclose()``.

    Args:
        model: Model name to use (e.g. "llama3.2").
        timeout: Request timeout in seconds; ``None`` waits indefinitely.
    """

    def __init__(self, model: str = "llama3.2", timeout: float | None = None) -> None:
        self._model = model
        self._timeout = timeout
        self._clients: dict[str, AsyncClient] = {}

    def _client_for(self, host: str) -> AsyncClient:
        client = self._clients.get(host)
        if client is None:
            client = AsyncClient(host=host, timeout=self._timeout)
            self._clients[host] = client
        return client

    async def _call_api(self, host: str, messages: list[dict[str, str]]) -> str:
        """Send a chat request and return the message content.

        Translates SDK and transport exceptions to ``PostProcessingError``.
        """
        try:
            response = await self._client_for(host).chat(
                model=self._model, messages=messages, stream=False
            )
        except ResponseError as exc:
            logger.error("Ollama response error: %s", exc)
            raise PostProcessingError(f"Ollama error: {exc}") from exc
        except Exception as exc:
            logger.error("Error processing with Ollama (%s): %s", host, exc)
            raise PostProcessingError(f"Ollama error: {exc}") from exc

        message = getattr(response, "message", None)
        return getattr(message, "content", None) or NO_TEXT

    async def post_process(self, address: str, prompt: str, transcript: str) -> str:
        messages = [{"role": "user", "content": f"{prompt}\n\n{transcript}"}]
        try:
            return await self._call_api(build_base_url(address), messages)
        except PostProcessingError as exc:
            logger.warning("Post-processing failed, using fallback text: %s", exc.detail)
            return FAILED_TEXT

    async def aclose(self) -> None:
        clients, self._clients = self._clients, {}
        for client in clients.values():
            await client.close()
