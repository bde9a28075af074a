"""Provider registry and factory for text-to-speech backends."""

from __future__ import annotations

import logging
from typing import Dict, Type

from config.tts.defaults import DEFAULT_PROVIDER
from core.exceptions import ConfigurationError
from core.providers.tts_base import BaseTTSProvider

logger = logging.getLogger(__name__)

_tts_providers: Dict[str, Type[BaseTTSProvider]] = {}


def register_tts_provider(name: str, provider_class: Type[BaseTTSProvider]) -> None:
    """Register a text-to-speech provider implementation."""
    _tts_providers[name] = provider_class


def get_tts_provider(provider_name: str | None = None) -> BaseTTSProvider:
    """Return a text-to-speech provider instance by name."""

    name = (provider_name or DEFAULT_PROVIDER).strip().lower()
    if name not in _tts_providers:
        raise ConfigurationError(
            f"TTS provider {name} not registered. Available: {list(_tts_providers.keys())}",
            key=f"provider.{name}",
        )

    provider_class = _tts_providers[name]
    logger.debug("Resolved TTS provider %s -> %s", name, provider_class.__name__)
    return provider_class()


__all__ = ["get_tts_provider", "register_tts_provider"]
