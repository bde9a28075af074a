"""Text-to-speech configuration defaults."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .providers import openai

DEFAULT_PROVIDER = "openai"
DEFAULT_AUDIO_FORMAT = openai.DEFAULT_AUDIO_FORMAT
DEFAULT_LANGUAGE = "English"

# Token budgeting for the speech model input.
TOKENIZER_MODEL = os.getenv("TTS_TOKENIZER_MODEL", "gpt-4o-mini")
MODEL_TOKEN_CEILING = int(os.getenv("TTS_MODEL_TOKEN_CEILING", "2000"))
TOKEN_SAFETY_MARGIN = int(os.getenv("TTS_TOKEN_SAFETY_MARGIN", "200"))
MAX_TOKENS = MODEL_TOKEN_CEILING - TOKEN_SAFETY_MARGIN

# Per-request scratch space for synthesized segments.
TEMP_DIR = Path(os.getenv("TTS_TEMP_DIR", str(Path(tempfile.gettempdir()) / "storytime_tts")))
TEMP_MAX_AGE_SECONDS = int(os.getenv("TTS_TEMP_MAX_AGE_SECONDS", "3600"))

# Single-shot path: provider returns WAV which is transcoded to MP3.
SINGLE_SHOT_SOURCE_FORMAT = "wav"
SINGLE_SHOT_BITRATE = os.getenv("TTS_SINGLE_SHOT_BITRATE", "128k")


@dataclass(slots=True)
class TTSSettings:
    """Resolved settings shared by every narration request."""

    provider: str = DEFAULT_PROVIDER
    model: str = openai.DEFAULT_MODEL
    audio_format: str = DEFAULT_AUDIO_FORMAT
    max_tokens: int = MAX_TOKENS
    tokenizer_model: str = TOKENIZER_MODEL
    voices: List[str] = field(default_factory=lambda: list(openai.AVAILABLE_VOICES))

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        if self.audio_format not in openai.AVAILABLE_FORMATS:
            raise ValueError(
                f"Unsupported audio_format {self.audio_format!r}; expected one of {openai.AVAILABLE_FORMATS}"
            )


__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_AUDIO_FORMAT",
    "DEFAULT_LANGUAGE",
    "MAX_TOKENS",
    "MODEL_TOKEN_CEILING",
    "SINGLE_SHOT_BITRATE",
    "SINGLE_SHOT_SOURCE_FORMAT",
    "TEMP_DIR",
    "TEMP_MAX_AGE_SECONDS",
    "TOKENIZER_MODEL",
    "TOKEN_SAFETY_MARGIN",
    "TTSSettings",
]
