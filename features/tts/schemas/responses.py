"""Response payloads for the TTS feature."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NarrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_url: str = Field(..., alias="audioUrl", description="Public URL of the narration audio")


class VoicesResponse(BaseModel):
    voices: List[str] = Field(default_factory=list, description="Supported voice identifiers")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable failure message")


__all__ = ["ErrorResponse", "NarrationResponse", "VoicesResponse"]
