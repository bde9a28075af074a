"""Base classes and schemas for text-to-speech providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping


@dataclass(slots=True)
class TTSRequest:
    """Container describing a text-to-speech generation request."""

    text: str
    voice: str
    model: str | None = None
    format: str = "mp3"
    language: str | None = None
    chunk_index: int | None = None
    chunk_count: int | None = None
    metadata: MutableMapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TTSResult:
    """Normalised text-to-speech response returned by providers."""

    audio_bytes: bytes
    provider: str
    model: str
    format: str
    voice: str | None = None
    metadata: Mapping[str, Any] | None = None


class BaseTTSProvider(ABC):
    """Base interface for text-to-speech providers."""

    name: str = "tts"

    @abstractmethod
    async def generate(self, request: TTSRequest) -> TTSResult:
        """Return generated audio for the supplied text request.

        Implementations raise :class:`core.exceptions.ProviderError` when the
        upstream service rejects the request or cannot be reached.
        """


__all__ = ["TTSRequest", "TTSResult", "BaseTTSProvider"]
