import pytest

from core.clients import ai
from core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def reset_clients():
    ai.ai_clients.clear()
    yield
    ai.ai_clients.clear()


def test_missing_api_key_is_configuration_error(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError) as exc_info:
        ai.get_openai_client()

    assert exc_info.value.key == "OPENAI_API_KEY"


def test_client_cached_with_retries_disabled(monkeypatch):
    created: list[dict] = []

    class DummyOpenAI:
        def __init__(self, **kwargs):
            created.append(kwargs)

        def close(self):
            created.append({"closed": True})

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(ai, "OpenAI", DummyOpenAI)

    first = ai.get_openai_client()
    second = ai.get_openai_client()

    assert first is second
    assert created == [{"api_key": "sk-test", "max_retries": 0}]

    ai.close_ai_clients()

    assert ai.ai_clients == {}
    assert created[-1] == {"closed": True}
