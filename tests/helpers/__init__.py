"""Shared fakes for narration tests."""

from __future__ import annotations

import asyncio
from typing import List, Sequence

from core.exceptions import ProviderError
from core.providers.tts_base import TTSRequest, TTSResult


class CharTokenizer:
    """One token per character; chunk boundaries are easy to predict."""

    def encode(self, text: str) -> List[int]:
        return [ord(char) for char in text]

    def decode(self, tokens: Sequence[int]) -> str:
        return "".join(chr(token) for token in tokens)


class FakeProvider:
    name = "fake"

    def __init__(self, *, fail_at: int | None = None) -> None:
        self.fail_at = fail_at
        self.calls: list[TTSRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, request: TTSRequest) -> TTSResult:
        self.calls.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if self.fail_at is not None and request.chunk_index == self.fail_at:
                raise ProviderError(
                    "upstream rejected request",
                    provider=self.name,
                    original_error=RuntimeError("429 Too Many Requests"),
                )
            return TTSResult(
                audio_bytes=f"audio-{request.chunk_index}|".encode(),
                provider=self.name,
                model=request.model or "tts-1",
                format=request.format,
                voice=request.voice,
            )
        finally:
            self.in_flight -= 1
