"""Shared utility functions for notescribe."""

from urllib.parse import unquote, urlsplit

UNKNOWN_FILE = "Unknown File"


def file_name_from_locator(src: str) -> str:
    """Return the last path segment of an audio locator.

    ``"app://vault/notes/memo%201.m4a?123"`` -> ``"memo 1.m4a"``.
    Falls back to ``"Unknown File"`` when the locator has no final segment.
    """
    path = urlsplit(src).path if "://" in src else src
    return unquote(path.rsplit("/", 1)[-1]) or UNKNOWN_FILE


def build_base_url(address: str) -> str:
    """Turn a configured ``host:port`` into a base URL."""
    address = address.strip().rstrip("/")
    if "://" not in address:
        address = f"http://{address}"
    return address
