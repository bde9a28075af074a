import pytest

from core.exceptions import ProviderError
from core.providers.tts.openai import OpenAITTSProvider
from core.providers.tts_base import TTSRequest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeSpeechResponse:
    def __init__(self, content: bytes) -> None:
        self.content = content


class FakeSpeech:
    def __init__(self, *, content: bytes = b"ID3-audio", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return FakeSpeechResponse(self.content)


class FakeAudio:
    def __init__(self, speech: FakeSpeech) -> None:
        self.speech = speech


class FakeOpenAIClient:
    def __init__(self, speech: FakeSpeech) -> None:
        self.audio = FakeAudio(speech)


@pytest.mark.anyio
async def test_generate_calls_speech_endpoint():
    speech = FakeSpeech()
    provider = OpenAITTSProvider(client=FakeOpenAIClient(speech))

    result = await provider.generate(
        TTSRequest(
            text="Once upon a time",
            voice="nova",
            model="tts-1",
            format="mp3",
            language="English",
            chunk_index=2,
            chunk_count=4,
        )
    )

    assert speech.calls == [{"model": "tts-1", "voice": "nova", "input": "Once upon a time", "response_format": "mp3"}]
    assert result.audio_bytes == b"ID3-audio"
    assert result.provider == "openai"
    assert result.metadata["chunk_index"] == 2
    assert result.metadata["language"] == "English"


@pytest.mark.anyio
async def test_generate_wraps_sdk_errors():
    original = RuntimeError("Error code: 429 - rate limit exceeded")
    provider = OpenAITTSProvider(client=FakeOpenAIClient(FakeSpeech(error=original)))

    with pytest.raises(ProviderError) as exc_info:
        await provider.generate(TTSRequest(text="Hi", voice="alloy"))

    assert exc_info.value.provider == "openai"
    assert exc_info.value.original_error is original


@pytest.mark.anyio
async def test_generate_rejects_empty_audio():
    provider = OpenAITTSProvider(client=FakeOpenAIClient(FakeSpeech(content=b"")))

    with pytest.raises(ProviderError):
        await provider.generate(TTSRequest(text="Hi", voice="alloy"))


@pytest.mark.anyio
async def test_generate_rejects_blank_text():
    speech = FakeSpeech()
    provider = OpenAITTSProvider(client=FakeOpenAIClient(speech))

    with pytest.raises(ProviderError):
        await provider.generate(TTSRequest(text="  ", voice="alloy"))

    assert speech.calls == []
