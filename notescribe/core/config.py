"""
Plugin configuration via pydantic-settings.

Loads values from .env file with defaults matching a typical home-lab setup
(Whisper ASR webservice on :9000, Ollama on :11434).
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OLLAMA_PROMPT = (
    "You are an avid Obsidian user. You can use Heading (#, ##, ###, optinonal), "
    "Ordered List, Unordered List, and other markdown syntax as part of your response "
    "as best as you see fit to present as much infomration at you can in a concise "
    "manner. Below is a transcription of an audio note. Remove any pauses and phrases "
    'like "hmmm" or "uhhh" or similar. Some of the information may make sense as '
    "bulleted or numbered lists. Do not restate any part of this prompt or explain "
    "how you arrived to your response.: "
)


class Settings(BaseSettings):
    """notescribe settings loaded from environment / .env file.

    The host owns these values and may change them between jobs; the
    pipeline only reads them, once per job.

    Attributes:
        whisper_address: ``host:port`` of the Whisper ASR webservice.
        ollama_address: ``host:port`` of the Ollama server.
        ollama_enabled: Send the transcript through Ollama before inserting.
        ollama_prompt: Prompt placed ahead of the transcript.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Whisper ASR ---
    whisper_address: str = "192.168.1.10:9000"
    # Sent for every upload regardless of the real encoding
    upload_media_type: str = "audio/mp3"

    # --- Ollama post-processing ---
    ollama_address: str = "192.168.1.10:11434"
    ollama_enabled: bool = False
    ollama_prompt: str = DEFAULT_OLLAMA_PROMPT
    ollama_model: str = "llama3.2"

    # --- Progress UI (seconds) ---
    progress_interval: float = 0.5  # Dot animation cadence
    status_display_seconds: float = 3.0  # How long a terminal status stays visible

    # --- Watcher ---
    rescan_delay: float = 0.05  # Batching window for mutation-triggered rescans

    # --- Transport ---
    request_timeout: float | None = None  # None = wait indefinitely

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Returns:
        Settings: The plugin-wide configuration object.
    """
    return Settings()
