"""Sequential per-chunk speech synthesis."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from config.tts.defaults import DEFAULT_AUDIO_FORMAT
from config.tts.providers import openai as openai_config
from core.exceptions import ConfigurationError, ProviderError, SynthesisError
from core.providers.tts_base import BaseTTSProvider, TTSRequest
from services.temporary_storage import SegmentWorkspace

from .chunker import TextChunk

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AudioSegment:
    """Synthesized audio for one chunk, held in the request workspace."""

    source_chunk_index: int
    path: Path
    size: int

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def release(self) -> None:
        self.path.unlink(missing_ok=True)


class SegmentSynthesizer:
    """Turn ordered chunks into ordered audio segments, one call at a time.

    Chunks are never synthesized concurrently: the next provider call starts
    only after the previous segment has been written to the workspace.
    """

    def __init__(
        self,
        provider: BaseTTSProvider,
        *,
        model: str | None = None,
        audio_format: str = DEFAULT_AUDIO_FORMAT,
    ) -> None:
        self._provider = provider
        self._model = model or openai_config.DEFAULT_MODEL
        self._audio_format = audio_format

    @property
    def provider_name(self) -> str:
        return getattr(self._provider, "name", "tts")

    async def synthesize_sequential(
        self,
        chunks: Sequence[TextChunk],
        voice_id: str,
        language: str | None,
        workspace: SegmentWorkspace,
    ) -> List[AudioSegment]:
        segments: List[AudioSegment] = []
        chunk_count = len(chunks)

        try:
            for chunk in chunks:
                segments.append(
                    await self._synthesize_chunk(chunk, chunk_count, voice_id, language, workspace)
                )
        except BaseException:
            await asyncio.to_thread(_release_all, segments)
            raise

        logger.info("Synthesized %s segment(s) with voice=%s", len(segments), voice_id)
        return segments

    async def _synthesize_chunk(
        self,
        chunk: TextChunk,
        chunk_count: int,
        voice_id: str,
        language: str | None,
        workspace: SegmentWorkspace,
    ) -> AudioSegment:
        request = TTSRequest(
            text=chunk.content,
            voice=voice_id,
            model=self._model,
            format=self._audio_format,
            language=language,
            chunk_index=chunk.index,
            chunk_count=chunk_count,
        )

        try:
            result = await self._provider.generate(request)
        except ConfigurationError:
            raise
        except Exception as exc:
            original = exc.original_error if isinstance(exc, ProviderError) else None
            logger.error(
                "Speech synthesis failed for chunk %s/%s: %s (original=%s)",
                chunk.index,
                chunk_count,
                exc,
                original,
            )
            raise SynthesisError(
                f"Speech synthesis failed for chunk {chunk.index}",
                chunk_index=chunk.index,
                provider=getattr(exc, "provider", None) or self.provider_name,
                original_error=original or exc,
            ) from exc

        if not result.audio_bytes:
            raise SynthesisError(
                f"Speech synthesis returned no audio for chunk {chunk.index}",
                chunk_index=chunk.index,
                provider=self.provider_name,
            )

        path = await workspace.write_segment(chunk.index, result.audio_bytes, self._audio_format)
        logger.debug(
            "Wrote segment %s/%s (%s bytes) to %s",
            chunk.index,
            chunk_count,
            len(result.audio_bytes),
            path,
        )
        return AudioSegment(source_chunk_index=chunk.index, path=path, size=len(result.audio_bytes))


def _release_all(segments: Sequence[AudioSegment]) -> None:
    for segment in segments:
        segment.release()


__all__ = ["AudioSegment", "SegmentSynthesizer"]
