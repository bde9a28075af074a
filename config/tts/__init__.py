"""Text-to-speech configuration."""

from __future__ import annotations

from .defaults import (
    DEFAULT_AUDIO_FORMAT,
    DEFAULT_LANGUAGE,
    DEFAULT_PROVIDER,
    MAX_TOKENS,
    TTSSettings,
)
from . import providers

__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_AUDIO_FORMAT",
    "DEFAULT_LANGUAGE",
    "MAX_TOKENS",
    "TTSSettings",
    "providers",
]
