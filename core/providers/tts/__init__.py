"""Text-to-speech provider implementations."""

from .openai import OpenAITTSProvider

__all__ = ["OpenAITTSProvider"]
