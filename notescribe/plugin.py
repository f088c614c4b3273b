"""
Plugin entry point.

``NoteScribePlugin`` wires the backend clients, watcher, inserter and
orchestrator to the host's document, workspace and notifier. The host
calls ``load()`` once the note view exists, ``process_rendered()`` for
every freshly rendered markdown block, and ``unload()`` on shutdown.
"""

import logging
from collections.abc import Callable

from notescribe.core.config import Settings, get_settings
from notescribe.document.base import BaseNotifier, BaseWorkspace
from notescribe.document.dom import Document, Element
from notescribe.services.audio import AudioFetcher
from notescribe.services.inserter import ResultInserter
from notescribe.services.llm import BasePostProcessor, create_post_processor
from notescribe.services.orchestrator import TranscriptionOrchestrator
from notescribe.services.transcription import BaseTranscriber, create_transcriber
from notescribe.services.watcher import ControlBinding, ElementWatcher

logger = logging.getLogger(__name__)


class NoteScribePlugin:
    """Host-facing lifecycle of the transcription feature.

    Args:
        document: Root of the rendered note.
        workspace: Provides the focused editor.
        notifier: User notification channel.
        settings: Optional Settings instance (defaults to get_settings()).
        transcriber: Optional transcriber (defaults to the Whisper client).
        post_processor: Optional post-processor (defaults to Ollama).
        fetcher: Optional audio fetcher.
        resolve_locator: Optional host hook mapping audio ``src`` values the
            default fetcher cannot read (e.g. ``app://``) to an http(s) URL,
            a ``file://`` URL or a path.
    """

    def __init__(
        self,
        document: Document,
        workspace: BaseWorkspace,
        notifier: BaseNotifier,
        settings: Settings | None = None,
        transcriber: BaseTranscriber | None = None,
        post_processor: BasePostProcessor | None = None,
        fetcher: AudioFetcher | None = None,
        resolve_locator: Callable[[str], str] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.document = document
        self.notifier = notifier

        timeout = self.settings.request_timeout
        self.transcriber = transcriber or create_transcriber("whisper", timeout=timeout)
        self.post_processor = post_processor or create_post_processor(
            "ollama", model=self.settings.ollama_model, timeout=timeout
        )
        self.fetcher = fetcher or AudioFetcher(timeout=timeout, resolver=resolve_locator)

        self.orchestrator = TranscriptionOrchestrator(
            settings=self.settings,
            transcriber=self.transcriber,
            post_processor=self.post_processor,
            fetcher=self.fetcher,
            inserter=ResultInserter(workspace),
            notifier=notifier,
        )
        self.watcher = ElementWatcher(
            on_activate=self.orchestrator.activate,
            rescan_delay=self.settings.rescan_delay,
        )

    def load(self) -> list[ControlBinding]:
        """Bind the audio already on screen and start watching for more."""
        logging.getLogger("notescribe").setLevel(self.settings.log_level.upper())
        bindings = self.watcher.scan(self.document)
        self.watcher.observe(self.document)
        logger.info("notescribe loaded (%d audio element(s) bound)", len(bindings))
        return bindings

    def process_rendered(self, element: Element) -> list[ControlBinding]:
        """Markdown post-processor hook: bind audio inside a rendered block."""
        return self.watcher.scan(element)

    async def unload(self) -> None:
        """Stop watching, let running jobs finish, and close HTTP clients."""
        self.watcher.close()
        await self.orchestrator.wait_idle()
        await self.transcriber.aclose()
        await self.post_processor.aclose()
        await self.fetcher.aclose()
        logger.info("notescribe unloaded")
