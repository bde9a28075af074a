"""Input checks performed before any external call is made."""

from __future__ import annotations

from typing import Collection

from core.exceptions import ValidationError


def validate_narration_input(text: str | None, voice_id: str | None, voices: Collection[str]) -> None:
    """Reject unknown voices first, then empty or whitespace-only text."""

    if not voice_id or voice_id not in voices:
        raise ValidationError(
            f"Unsupported voice '{voice_id}'. Available voices: {', '.join(voices)}",
            field="voice",
        )
    if not text or not text.strip():
        raise ValidationError("Text input is required", field="text")


__all__ = ["validate_narration_input"]
