"""Audio module - reading the bytes behind an audio element."""

from .fetcher import AudioFetcher

__all__ = ["AudioFetcher"]
