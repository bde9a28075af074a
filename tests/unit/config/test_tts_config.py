import importlib

import pytest

from config.tts.defaults import MAX_TOKENS, MODEL_TOKEN_CEILING, TOKEN_SAFETY_MARGIN, TTSSettings


def test_token_budget_keeps_safety_margin():
    assert MAX_TOKENS == MODEL_TOKEN_CEILING - TOKEN_SAFETY_MARGIN
    assert 0 < MAX_TOKENS < MODEL_TOKEN_CEILING


def test_settings_reject_non_positive_budget():
    with pytest.raises(ValueError):
        TTSSettings(max_tokens=0)


@pytest.mark.parametrize("audio_format", ["ogg", "MP3", ""])
def test_settings_reject_unsupported_audio_format(audio_format):
    with pytest.raises(ValueError):
        TTSSettings(audio_format=audio_format)


def test_settings_accept_every_provider_format():
    from config.tts.providers import openai as openai_config

    for audio_format in openai_config.AVAILABLE_FORMATS:
        assert TTSSettings(audio_format=audio_format).audio_format == audio_format


def test_settings_default_voices_are_copied():
    first = TTSSettings()
    first.voices.append("custom")

    assert "custom" not in TTSSettings().voices


def test_voice_list_from_environment(monkeypatch):
    from config.tts.providers import openai as openai_config

    monkeypatch.setenv("TTS_VOICES", " nova, shimmer ,, alloy")
    try:
        reloaded = importlib.reload(openai_config)
        assert reloaded.AVAILABLE_VOICES == ["nova", "shimmer", "alloy"]
    finally:
        monkeypatch.delenv("TTS_VOICES")
        importlib.reload(openai_config)


def test_storage_defaults_follow_environment(monkeypatch):
    import config.aws as aws_config
    import config.environment as environment

    monkeypatch.setenv("NODE_ENV", "production")
    monkeypatch.delenv("STORY_AUDIO_BUCKET", raising=False)
    try:
        importlib.reload(environment)
        reloaded = importlib.reload(aws_config)
        assert reloaded.STORY_AUDIO_BUCKET == "story_assets"
        assert reloaded.STORY_AUDIO_PREFIX == "audio"
    finally:
        monkeypatch.undo()
        importlib.reload(environment)
        importlib.reload(aws_config)
