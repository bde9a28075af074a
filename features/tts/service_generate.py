"""Long-text narration pipeline: chunk, synthesize, merge, store."""

from __future__ import annotations

import logging
import time
from typing import Callable

from config.tts.defaults import TTSSettings
from core.providers.tts_base import BaseTTSProvider
from infrastructure.aws.storage import StorageService
from services.temporary_storage import SegmentWorkspace

from .assembler import AudioAssembler
from .chunker import TextChunker
from .synthesizer import SegmentSynthesizer
from .utils import audio_format_to_mime
from .validation import validate_narration_input

logger = logging.getLogger(__name__)


async def synthesize_story_audio(
    *,
    text: str,
    voice_id: str,
    language: str | None,
    settings: TTSSettings,
    provider: BaseTTSProvider,
    chunker: TextChunker,
    assembler: AudioAssembler,
    storage_service_factory: Callable[[], StorageService],
    workspace_factory: Callable[[], SegmentWorkspace],
) -> str:
    """Narrate ``text`` and return the public URL of the stored audio.

    Stages run strictly one after another; each starts only once the previous
    stage's full output exists. The request workspace is removed whether the
    pipeline succeeds, fails, or is cancelled.
    """

    validate_narration_input(text, voice_id, settings.voices)
    # Leading or trailing whitespace would otherwise become a blank final chunk.
    text = text.strip()

    started = time.perf_counter()
    storage = storage_service_factory()
    chunks = chunker.chunk(text)
    synthesizer = SegmentSynthesizer(provider, model=settings.model, audio_format=settings.audio_format)

    async with workspace_factory() as workspace:
        logger.info(
            "Narrating story request=%s voice=%s language=%s chunks=%s",
            workspace.request_id,
            voice_id,
            language,
            len(chunks),
        )
        segments = await synthesizer.synthesize_sequential(chunks, voice_id, language, workspace)
        merged = await assembler.merge(segments, workspace)
        url = await storage.store(
            merged,
            audio_format_to_mime(settings.audio_format),
            extension=settings.audio_format,
        )

    logger.info(
        "Narration complete voice=%s chunks=%s bytes=%s elapsed=%.2fs url=%s",
        voice_id,
        len(chunks),
        len(merged),
        time.perf_counter() - started,
        url,
    )
    return url


__all__ = ["synthesize_story_audio"]
