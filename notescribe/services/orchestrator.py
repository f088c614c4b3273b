"""Transcription job orchestrator.

Drives one audio element through availability check -> audio fetch ->
transcription -> optional Ollama post-processing -> insertion. Every job
runs as its own ``asyncio.Task`` with its own progress line; jobs for
different audio elements share nothing but the settings.

Failure policy:
    * Whisper unavailable or transcription failure: the job fails.
    * Ollama failure: never fails the job, the fallback text is inserted.
    * Insertion impossible: the user gets a notice, the job still completes.

Usage::

    orchestrator = TranscriptionOrchestrator(settings, transcriber, post_processor,
                                             fetcher, inserter, notifier)
    job = await orchestrator.run(audio_element)
"""

import asyncio
import logging

from notescribe.core.config import Settings
from notescribe.core.exceptions import (
    InsertionError,
    ServiceUnavailableError,
    TranscriptionError,
)
from notescribe.core.models import FailureReason, JobStage, TranscriptionJob
from notescribe.core.utils import file_name_from_locator
from notescribe.document.base import BaseNotifier
from notescribe.document.dom import Element
from notescribe.services.audio import AudioFetcher
from notescribe.services.inserter import ResultInserter
from notescribe.services.llm import BasePostProcessor
from notescribe.services.progress import ProgressReporter
from notescribe.services.transcription import BaseTranscriber

logger = logging.getLogger(__name__)

STATUS_UNAVAILABLE = "Failed: Server Unavailable"
STATUS_FAILED = "Failed: Transcription Error"
STATUS_COMPLETE = "Transcription Complete"


def transcribing_label(file_name: str, dots: str = "") -> str:
    return f"Transcribing: {file_name}{dots}"


def processing_label(transcript: str, dots: str = "") -> str:
    return f"Processing with Ollama{dots}\n\nWhisper Transcription:\n{transcript}"


class TranscriptionOrchestrator:
    """Runs transcription jobs for audio elements.

    Args:
        settings: Live settings; read once per job, never modified.
        transcriber: Speech-to-text backend client.
        post_processor: Text-generation backend client.
        fetcher: Reads the audio bytes behind an element.
        inserter: Writes the final text into the document.
        notifier: User notification channel.
    """

    def __init__(
        self,
        settings: Settings,
        transcriber: BaseTranscriber,
        post_processor: BasePostProcessor,
        fetcher: AudioFetcher,
        inserter: ResultInserter,
        notifier: BaseNotifier,
    ) -> None:
        self._settings = settings
        self._transcriber = transcriber
        self._post_processor = post_processor
        self._fetcher = fetcher
        self._inserter = inserter
        self._notifier = notifier
        self._active: dict[Element, asyncio.Task] = {}
        self._tasks: set[asyncio.Task] = set()

    # -- activation --

    def activate(self, audio: Element, control: Element | None = None) -> asyncio.Task:
        """Start a job for ``audio`` in the background.

        While a job for the same element is in flight its control is
        disabled and re-activating returns the running task.
        """
        running = self._active.get(audio)
        if running is not None and not running.done():
            logger.debug("Job already running for %s", audio.get("src"))
            return running

        if control is not None:
            control.disabled = True

        task = asyncio.get_running_loop().create_task(self.run(audio, control))
        self._active[audio] = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def is_active(self, audio: Element) -> bool:
        task = self._active.get(audio)
        return task is not None and not task.done()

    async def wait_idle(self) -> None:
        """Wait for every job task, status linger included, to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _release(self, audio: Element) -> None:
        if self._active.get(audio) is asyncio.current_task():
            del self._active[audio]

    # -- job --

    async def run(self, audio: Element, control: Element | None = None) -> TranscriptionJob:
        """Run one job to its terminal state.

        Backend failures end in a ``failed`` job, never in an exception.
        """
        settings = self._settings.model_copy()
        src = audio.get("src")
        job = TranscriptionJob(source=src, file_name=file_name_from_locator(src))
        anchor = control if control is not None and control.parent is audio.parent else audio
        reporter = ProgressReporter(
            anchor,
            transcribing_label(job.file_name),
            interval=settings.progress_interval,
        )

        try:
            await self._execute(job, audio, reporter, settings)
        except ServiceUnavailableError as exc:
            logger.warning("Job for %s aborted: %s", job.file_name, exc.detail)
            job.fail(FailureReason.service_unavailable, exc.detail)
            self._notifier.notify(
                "Whisper Server Unavailable",
                "The Whisper server is not available. "
                f"Please ensure it is running at {exc.address}.",
            )
            reporter.show(STATUS_UNAVAILABLE)
        except TranscriptionError as exc:
            logger.error("Transcription failed for %s: %s", job.file_name, exc.detail)
            self._fail(job, reporter, exc.detail)
        except Exception as exc:
            logger.exception("Transcription failed for %s", job.file_name)
            self._fail(job, reporter, str(exc) or type(exc).__name__)
        except asyncio.CancelledError:
            reporter.element.remove()
            raise
        finally:
            self._release(audio)
            if control is not None:
                control.disabled = False

        await reporter.dismiss(settings.status_display_seconds)
        return job

    async def _execute(
        self,
        job: TranscriptionJob,
        audio: Element,
        reporter: ProgressReporter,
        settings: Settings,
    ) -> None:
        address = settings.whisper_address

        async with reporter.animate(lambda dots: transcribing_label(job.file_name, dots)):
            job.advance(JobStage.checking_availability)
            if not await self._transcriber.check_availability(address):
                raise ServiceUnavailableError(address)

            self._notifier.notify("Transcription Request", transcribing_label(job.file_name))
            job.advance(JobStage.transcribing)
            upload = await self._fetcher.fetch(
                job.source, job.file_name, settings.upload_media_type
            )
            job.text = await self._transcriber.transcribe(address, upload)

        if settings.ollama_enabled:
            job.advance(JobStage.post_processing)
            transcript = job.text
            async with reporter.animate(lambda dots: processing_label(transcript, dots)):
                job.text = await self._post_processor.post_process(
                    settings.ollama_address, settings.ollama_prompt, transcript
                )

        try:
            self._inserter.insert(job.text, audio)
        except InsertionError as exc:
            logger.warning("Result for %s not inserted: %s", job.file_name, exc.detail)
            self._notifier.notice(exc.detail)

        job.advance(JobStage.done)
        reporter.show(STATUS_COMPLETE)
        logger.info("Transcription job for %s complete", job.file_name)

    def _fail(self, job: TranscriptionJob, reporter: ProgressReporter, detail: str) -> None:
        if not job.is_terminal:
            job.fail(FailureReason.transcription_error, detail)
        self._notifier.notify("Transcription Failed", f"{job.file_name}: {detail}")
        reporter.show(STATUS_FAILED)
