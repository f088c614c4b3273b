"""
notescribe exception hierarchy.

All plugin-specific exceptions inherit from NoteScribeError so the
orchestrator can convert them into terminal job states in one place.
"""


class NoteScribeError(Exception):
    """Base exception for all notescribe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "NOTESCRIBE_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        super().__init__(detail)


class ServiceUnavailableError(NoteScribeError):
    """Raised when the Whisper server does not answer the availability check."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(
            detail=f"Whisper server is not available at {address}",
            code="SERVICE_UNAVAILABLE",
        )


class TranscriptionError(NoteScribeError):
    """Raised when the recognition endpoint fails or returns garbage."""

    def __init__(self, detail: str = "Transcription failed") -> None:
        super().__init__(detail=detail, code="TRANSCRIPTION_ERROR")


class AudioFetchError(TranscriptionError):
    """Raised when the audio bytes behind an element cannot be read."""

    def __init__(self, src: str, reason: str) -> None:
        self.src = src
        super().__init__(detail=f"Could not fetch audio {src}: {reason}")
        self.code = "AUDIO_FETCH_ERROR"


class PostProcessingError(NoteScribeError):
    """Raised inside the Ollama client; never escapes ``post_process``."""

    def __init__(self, detail: str = "Post-processing failed") -> None:
        super().__init__(detail=detail, code="POST_PROCESSING_ERROR")


class InsertionError(NoteScribeError):
    """Base for failures to place the result into the document."""


class NoActiveDocumentError(InsertionError):
    """Raised when no editable document view is focused."""

    def __init__(self) -> None:
        super().__init__(detail="No active editor found!", code="NO_ACTIVE_DOCUMENT")


class NoInsertionTargetError(InsertionError):
    """Raised when the audio element has lost its transcribe control."""

    def __init__(self) -> None:
        super().__init__(detail="Transcribe button not found!", code="NO_INSERTION_TARGET")
