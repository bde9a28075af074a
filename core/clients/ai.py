"""Initialise the speech provider client used across the application."""

from __future__ import annotations

import logging
from typing import Dict

from openai import OpenAI

from config.tts.providers import openai as openai_config
from core.exceptions import ConfigurationError
from core.utils.env import get_env

logger = logging.getLogger(__name__)


ai_clients: Dict[str, object] = {}


def get_openai_client() -> OpenAI:
    """Return a cached synchronous OpenAI client.

    The client is created on first use so the application (and its tests)
    can start without credentials. SDK-level retries follow
    ``OPENAI_TTS_MAX_RETRIES`` which defaults to zero.
    """

    client = ai_clients.get("openai")
    if client is not None:
        return client  # type: ignore[return-value]

    api_key = get_env("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY must be configured", key="OPENAI_API_KEY")

    client = OpenAI(api_key=api_key, max_retries=openai_config.MAX_RETRIES)
    ai_clients["openai"] = client
    logger.info("Initialised OpenAI client (max_retries=%s)", openai_config.MAX_RETRIES)
    return client


def close_ai_clients() -> None:
    """Close cached clients and forget them."""

    for name, client in list(ai_clients.items()):
        close = getattr(client, "close", None)
        if callable(close):
            close()
        ai_clients.pop(name, None)
    logger.debug("Closed AI clients")


__all__ = ["ai_clients", "close_ai_clients", "get_openai_client"]
