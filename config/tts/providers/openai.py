"""OpenAI text-to-speech configuration."""

from __future__ import annotations

import os
from typing import List

# Model defaults
DEFAULT_MODEL = os.getenv("OPENAI_TTS_MODEL", "tts-1")

# Voice settings
DEFAULT_VOICE = "alloy"
_DEFAULT_VOICES = "alloy,ash,echo,fable,nova,onyx"
AVAILABLE_VOICES: List[str] = [
    voice.strip()
    for voice in os.getenv("TTS_VOICES", _DEFAULT_VOICES).split(",")
    if voice.strip()
]

# Audio format
DEFAULT_AUDIO_FORMAT = "mp3"
AVAILABLE_FORMATS: List[str] = ["mp3", "wav", "opus", "aac", "flac"]

# SDK-level retries; zero disables them.
MAX_RETRIES = int(os.getenv("OPENAI_TTS_MAX_RETRIES", "0"))

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_VOICE",
    "AVAILABLE_VOICES",
    "DEFAULT_AUDIO_FORMAT",
    "AVAILABLE_FORMATS",
    "MAX_RETRIES",
]
