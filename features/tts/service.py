"""High-level orchestration for story narration."""

from __future__ import annotations

import logging
from typing import Callable, List

from config.tts.defaults import DEFAULT_LANGUAGE, TTSSettings
from core.providers.factory import get_tts_provider
from core.providers.tts_base import BaseTTSProvider
from infrastructure.aws.storage import StorageService
from services.temporary_storage import SegmentWorkspace

from .assembler import AudioAssembler
from .chunker import TextChunker, TiktokenTokenizer
from .service_generate import synthesize_story_audio
from .service_single import Transcoder, synthesize_single_audio
from .utils import transcode_audio

logger = logging.getLogger(__name__)


class TTSService:
    """Coordinate chunking, synthesis, assembly and storage for narration.

    Every collaborator is injected so tests can swap in doubles; the
    instance holds no per-request state and is safe to share between
    concurrent requests.
    """

    def __init__(
        self,
        *,
        settings: TTSSettings | None = None,
        provider_resolver: Callable[[str], BaseTTSProvider] = get_tts_provider,
        storage_service_factory: Callable[[], StorageService] | None = None,
        chunker: TextChunker | None = None,
        assembler: AudioAssembler | None = None,
        workspace_factory: Callable[[], SegmentWorkspace] | None = None,
        transcoder: Transcoder = transcode_audio,
    ) -> None:
        self._settings = settings or TTSSettings()
        self._provider_resolver = provider_resolver
        self._provider: BaseTTSProvider | None = None
        self._storage_service_factory = storage_service_factory or StorageService
        self._chunker = chunker or TextChunker(
            TiktokenTokenizer(self._settings.tokenizer_model),
            max_tokens=self._settings.max_tokens,
        )
        self._assembler = assembler or AudioAssembler()
        self._workspace_factory = workspace_factory or SegmentWorkspace
        self._transcoder = transcoder

    @property
    def voices(self) -> List[str]:
        return list(self._settings.voices)

    @property
    def provider(self) -> BaseTTSProvider:
        if self._provider is None:
            self._provider = self._provider_resolver(self._settings.provider)
        return self._provider

    async def synthesize_story(self, text: str, voice_id: str, language: str | None = DEFAULT_LANGUAGE) -> str:
        """Return the public URL of a full narration of ``text``."""

        return await synthesize_story_audio(
            text=text,
            voice_id=voice_id,
            language=language,
            settings=self._settings,
            provider=self.provider,
            chunker=self._chunker,
            assembler=self._assembler,
            storage_service_factory=self._storage_service_factory,
            workspace_factory=self._workspace_factory,
        )

    async def synthesize_single(self, text: str, voice_id: str, language: str | None = DEFAULT_LANGUAGE) -> str:
        """Return the public URL of a one-call narration of short ``text``."""

        return await synthesize_single_audio(
            text=text,
            voice_id=voice_id,
            language=language,
            settings=self._settings,
            provider=self.provider,
            chunker=self._chunker,
            transcoder=self._transcoder,
            storage_service_factory=self._storage_service_factory,
        )


__all__ = ["TTSService"]
