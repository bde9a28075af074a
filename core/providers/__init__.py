"""Provider registration.

Importing this package registers every speech provider with the factory so
that :func:`core.providers.factory.get_tts_provider` can resolve them by name.
"""

from core.providers.factory import get_tts_provider, register_tts_provider
from core.providers.tts import OpenAITTSProvider

register_tts_provider("openai", OpenAITTSProvider)

__all__ = ["get_tts_provider", "register_tts_provider"]
