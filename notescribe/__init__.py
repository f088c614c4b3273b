"""notescribe - transcribe audio embedded in notes via Whisper and Ollama."""

__version__ = "0.1.0"
