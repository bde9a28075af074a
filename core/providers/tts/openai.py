"""OpenAI text-to-speech provider implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from config.tts.providers import openai as openai_config
from core.clients.ai import get_openai_client
from core.exceptions import ProviderError
from core.providers.tts_base import BaseTTSProvider, TTSRequest, TTSResult

logger = logging.getLogger(__name__)


class OpenAITTSProvider(BaseTTSProvider):
    """Adapter around the OpenAI text-to-speech API."""

    name = "openai"

    def __init__(self, client: Any | None = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    async def generate(self, request: TTSRequest) -> TTSResult:
        if not request.text or not request.text.strip():
            raise ProviderError("TTS request text cannot be empty", provider=self.name)

        model = request.model or openai_config.DEFAULT_MODEL
        voice = request.voice or openai_config.DEFAULT_VOICE
        audio_format = request.format or openai_config.DEFAULT_AUDIO_FORMAT

        # The API has no language parameter; language stays informational.
        payload: dict[str, Any] = {
            "model": model,
            "voice": voice,
            "input": request.text,
            "response_format": audio_format,
        }

        logger.info(
            "Requesting OpenAI TTS generation (model=%s voice=%s format=%s chunk=%s/%s chars=%s)",
            model,
            voice,
            audio_format,
            request.chunk_index,
            request.chunk_count,
            len(request.text),
        )

        try:
            response = await asyncio.to_thread(self.client.audio.speech.create, **payload)
            audio_bytes = await asyncio.to_thread(_read_response_bytes, response)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError("OpenAI TTS request failed", provider=self.name, original_error=exc) from exc

        if not audio_bytes:
            raise ProviderError("OpenAI TTS returned an empty audio payload", provider=self.name)

        metadata: dict[str, Any] = {
            "provider": self.name,
            "model": model,
            "voice": voice,
            "format": audio_format,
        }
        if request.language:
            metadata["language"] = request.language
        if request.chunk_index is not None:
            metadata["chunk_index"] = request.chunk_index
            metadata["chunk_count"] = request.chunk_count

        return TTSResult(
            audio_bytes=audio_bytes,
            provider=self.name,
            model=model,
            format=audio_format,
            voice=voice,
            metadata=metadata,
        )


def _read_response_bytes(response: Any) -> bytes:
    """Return the binary body of an SDK speech response."""

    content = getattr(response, "content", None)
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    read = getattr(response, "read", None)
    if callable(read):
        return bytes(read())
    raise ProviderError("OpenAI TTS response has no binary content", provider=OpenAITTSProvider.name)


__all__ = ["OpenAITTSProvider"]
