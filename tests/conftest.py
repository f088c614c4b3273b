"""Shared pytest fixtures for the notescribe test suite.

Provides a small rendered note with one audio element, an in-memory editor
and notifier, fast settings, and mock backend clients.
"""

from unittest.mock import AsyncMock

import pytest

from notescribe.core.config import Settings
from notescribe.core.models import AudioUpload, Position
from notescribe.document import Document, Element, LogNotifier, TextEditor, Workspace

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    """Settings with test addresses and timings short enough for unit tests."""
    return Settings(
        whisper_address="whisper:9000",
        ollama_address="ollama:11434",
        ollama_enabled=False,
        ollama_prompt="Clean this up:",
        progress_interval=0.01,
        status_display_seconds=0.0,
        rescan_delay=0.01,
    )


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


def make_audio(src: str = "http://vault.local/attachments/memo.mp3") -> Element:
    return Element("audio", attrs={"src": src, "controls": ""})


@pytest.fixture
def audio():
    """A single audio element (not yet attached)."""
    return make_audio()


@pytest.fixture
def document(audio):
    """A rendered note: body > div.internal-embed > audio."""
    doc = Document()
    container = doc.append_child(Element("div", classes=["internal-embed"]))
    container.append_child(audio)
    return doc


@pytest.fixture
def editor():
    """A four-line note with the cursor on the first line."""
    return TextEditor("# Voice memo\n![[memo.mp3]]\n\nTail", cursor=Position(line=0, ch=0))


@pytest.fixture
def workspace(editor):
    return Workspace(editor)


@pytest.fixture
def notifier():
    return LogNotifier()


# ---------------------------------------------------------------------------
# Backend fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_transcriber():
    """Mock BaseTranscriber: server up, transcript "hello world"."""
    from notescribe.services.transcription.base import BaseTranscriber

    transcriber = AsyncMock(spec=BaseTranscriber)
    transcriber.check_availability.return_value = True
    transcriber.transcribe.return_value = "hello world"
    return transcriber


@pytest.fixture
def mock_post_processor():
    """Mock BasePostProcessor returning a refined transcript."""
    from notescribe.services.llm.base import BasePostProcessor

    post_processor = AsyncMock(spec=BasePostProcessor)
    post_processor.post_process.return_value = "Refined note"
    return post_processor


@pytest.fixture
def mock_fetcher():
    """Mock AudioFetcher returning a tiny fake MP3."""
    from notescribe.services.audio import AudioFetcher

    fetcher = AsyncMock(spec=AudioFetcher)
    fetcher.fetch.return_value = AudioUpload(
        filename="memo.mp3", content=b"ID3\x03fake", media_type="audio/mp3"
    )
    return fetcher
