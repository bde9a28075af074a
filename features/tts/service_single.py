"""Single-shot narration for text that fits in one synthesis call."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from config.tts.defaults import SINGLE_SHOT_BITRATE, SINGLE_SHOT_SOURCE_FORMAT, TTSSettings
from core.exceptions import ConfigurationError, ProviderError, SynthesisError, ValidationError
from core.providers.tts_base import BaseTTSProvider, TTSRequest
from infrastructure.aws.storage import StorageService

from .chunker import TextChunker
from .utils import audio_format_to_mime
from .validation import validate_narration_input

logger = logging.getLogger(__name__)

Transcoder = Callable[..., bytes]


async def synthesize_single_audio(
    *,
    text: str,
    voice_id: str,
    language: str | None,
    settings: TTSSettings,
    provider: BaseTTSProvider,
    chunker: TextChunker,
    transcoder: Transcoder,
    storage_service_factory: Callable[[], StorageService],
) -> str:
    """Synthesize ``text`` in one call, convert it to MP3 and upload it.

    The upload goes through :meth:`StorageService.upload_bytes`, which
    overwrites on key collision; keys carry a timestamp and random suffix.
    """

    validate_narration_input(text, voice_id, settings.voices)
    text = text.strip()

    token_count = chunker.count_tokens(text)
    if token_count > chunker.max_tokens:
        raise ValidationError(
            f"Text is too long for single-shot narration ({token_count} > {chunker.max_tokens} tokens)",
            field="text",
        )

    storage = storage_service_factory()
    request = TTSRequest(
        text=text,
        voice=voice_id,
        model=settings.model,
        format=SINGLE_SHOT_SOURCE_FORMAT,
        language=language,
    )

    try:
        result = await provider.generate(request)
    except ConfigurationError:
        raise
    except Exception as exc:
        logger.error("Single-shot synthesis failed: %s", exc)
        raise SynthesisError(
            "Speech synthesis failed",
            chunk_index=0,
            provider=getattr(exc, "provider", None) or getattr(provider, "name", None),
            original_error=exc.original_error if isinstance(exc, ProviderError) else exc,
        ) from exc

    target_format = settings.audio_format
    audio = await asyncio.to_thread(
        transcoder,
        result.audio_bytes,
        source_format=result.format or SINGLE_SHOT_SOURCE_FORMAT,
        target_format=target_format,
        bitrate=SINGLE_SHOT_BITRATE,
    )

    url = await storage.upload_bytes(f"{voice_id}.{target_format}", audio, audio_format_to_mime(target_format))
    logger.info("Single-shot narration stored voice=%s tokens=%s url=%s", voice_id, token_count, url)
    return url


__all__ = ["synthesize_single_audio"]
