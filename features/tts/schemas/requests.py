"""Pydantic request models for the TTS feature."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from config.tts.defaults import DEFAULT_LANGUAGE


class NarrationRequest(BaseModel):
    """Body accepted by the narration endpoints.

    Fields are only type-checked here; emptiness and the voice allow-list are
    enforced by the service so both entry points reject input the same way.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Story text to narrate")
    voice: str = Field(..., description="Voice identifier from GET /voices")
    language: Optional[str] = Field(
        default=DEFAULT_LANGUAGE,
        description="Display label for the story language; does not change synthesis",
    )


__all__ = ["NarrationRequest"]
