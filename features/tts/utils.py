"""Utility helpers shared across TTS services."""

from __future__ import annotations

import io
import logging

from pydub import AudioSegment as PydubSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from core.exceptions import AssemblyError

logger = logging.getLogger(__name__)

_FORMAT_MEDIA_TYPES = {
    "mp3": "audio/mpeg",
    "mpeg": "audio/mpeg",
    "wav": "audio/wav",
    "wave": "audio/wav",
    "ogg": "audio/ogg",
    "opus": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
}


def audio_format_to_mime(audio_format: str | None) -> str:
    """Return an appropriate media type for the supplied audio format."""

    if not audio_format:
        return "application/octet-stream"

    key = str(audio_format).lower()
    return _FORMAT_MEDIA_TYPES.get(key, "application/octet-stream")


def transcode_audio(
    audio_bytes: bytes,
    *,
    source_format: str,
    target_format: str = "mp3",
    bitrate: str | None = None,
) -> bytes:
    """Re-encode ``audio_bytes`` from ``source_format`` to ``target_format``.

    Runs ffmpeg through pydub, so it blocks; call it from a worker thread.
    """

    if not audio_bytes:
        raise AssemblyError("Cannot transcode an empty audio payload")

    try:
        segment = PydubSegment.from_file(io.BytesIO(audio_bytes), format=source_format)
        buffer = io.BytesIO()
        segment.export(buffer, format=target_format, bitrate=bitrate)
    except (CouldntDecodeError, CouldntEncodeError, FileNotFoundError) as exc:
        logger.error("Transcoding %s -> %s failed: %s", source_format, target_format, exc)
        raise AssemblyError(f"Failed to transcode audio from {source_format} to {target_format}") from exc

    buffer.seek(0)
    return buffer.read()


__all__ = ["audio_format_to_mime", "transcode_audio"]
