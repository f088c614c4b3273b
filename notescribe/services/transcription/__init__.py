"""
Transcription module - Speech-to-text backend clients.

Factory function for creating transcriber instances based on provider name.
"""

from .base import BaseTranscriber

__all__ = ["BaseTranscriber", "create_transcriber"]


def create_transcriber(provider: str, **kwargs) -> BaseTranscriber:
    """
    Factory function to create a transcriber instance based on provider.

    Args:
        provider: Transcriber provider name ("whisper")
        **kwargs: Provider-specific configuration

    Returns:
        BaseTranscriber implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "whisper":
        from .whisper import WhisperASRClient
        return WhisperASRClient(**kwargs)
    else:
        raise ValueError(f"Unknown transcriber provider: {provider}")
