"""Provider specific text-to-speech settings."""

from . import openai

__all__ = ["openai"]
