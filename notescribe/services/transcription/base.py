"""
Abstract base class for speech-to-text backends.

Implementations are stateless with respect to configuration: the backend
address is passed on every call so a job always uses the current settings.
"""

from abc import ABC, abstractmethod

from notescribe.core.models import AudioUpload


class BaseTranscriber(ABC):
    """Interface that every transcription backend must implement."""

    @abstractmethod
    async def check_availability(self, address: str) -> bool:
        """Check that the backend answers.

        Args:
            address: Backend ``host:port`` (or full base URL).

        Returns:
            True only if the backend answered with a success status. Never raises.
        """

    @abstractmethod
    async def transcribe(self, address: str, upload: AudioUpload) -> str:
        """Submit audio for recognition.

        Args:
            address: Backend ``host:port`` (or full base URL).
            upload: The audio payload.

        Returns:
            The recognised text.

        Raises:
            TranscriptionError: On a non-success status or malformed response.
        """

    async def aclose(self) -> None:
        """Release network resources (no-op by default)."""
