"""
Abstract base class for transcript post-processors.

Post-processing is best effort: implementations return a fixed fallback
string instead of raising, so a failing LLM never fails the job.
"""

from abc import ABC, abstractmethod

FAILED_TEXT = "Failed to process text with Ollama."
NO_TEXT = "Ollama returned no text."


class BasePostProcessor(ABC):
    """Interface that every post-processing backend must implement."""

    @abstractmethod
    async def post_process(self, address: str, prompt: str, transcript: str) -> str:
        """Refine a transcript with a text-generation model.

        Args:
            address: Backend ``host:port`` (or full base URL).
            prompt: Instruction placed ahead of the transcript.
            transcript: Raw speech-to-text output.

        Returns:
            The model's text, ``NO_TEXT`` if it answered with nothing, or
            ``FAILED_TEXT`` on any failure.
        """

    async def aclose(self) -> None:
        """Release network resources (no-op by default)."""
