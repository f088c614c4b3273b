"""
LLM module - Transcript post-processing backends.

Factory function for creating post-processor instances based on provider name.
"""

from .base import FAILED_TEXT, NO_TEXT, BasePostProcessor

__all__ = ["BasePostProcessor", "FAILED_TEXT", "NO_TEXT", "create_post_processor"]


def create_post_processor(provider: str, **kwargs) -> BasePostProcessor:
    """Factory function to create a post-processor instance.

    Args:
        provider: Post-processor provider name ("ollama")
        **kwargs: Provider-specific configuration

    Returns:
        BasePostProcessor implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "ollama":
        from .ollama import OllamaPostProcessor

        return OllamaPostProcessor(**kwargs)
    else:
        raise ValueError(f"Unknown post-processor provider: {provider}")
