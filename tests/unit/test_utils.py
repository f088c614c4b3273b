"""Unit tests for core utility helpers."""

import pytest

from notescribe.core.utils import UNKNOWN_FILE, build_base_url, file_name_from_locator


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        ("http://vault.local/attachments/memo.mp3", "memo.mp3"),
        ("app://abc123/Users/me/Vault/Recording%2020241019.webm?1729", "Recording 20241019.webm"),
        ("/home/me/vault/voice.m4a", "voice.m4a"),
        ("voice.m4a", "voice.m4a"),
        ("http://vault.local/", UNKNOWN_FILE),
        ("http://vault.local", UNKNOWN_FILE),
        ("", UNKNOWN_FILE),
    ],
)
def test_file_name_from_locator(src, expected):
    assert file_name_from_locator(src) == expected


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("192.168.1.10:9000", "http://192.168.1.10:9000"),
        ("whisper:9000/", "http://whisper:9000"),
        ("  https://asr.example.com  ", "https://asr.example.com"),
    ],
)
def test_build_base_url(address, expected):
    assert build_base_url(address) == expected
